"""Pydantic models decoding stored rows into domain records.

Rows are read leniently: missing fields fall back to defaults and legacy
enum spellings are mapped to their current values. Anything that still
fails validation surfaces as ``RecordDecodeError``.
"""

import math
from dataclasses import replace
from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from diet_tracker.dates import date_key
from diet_tracker.domain.dishes import Dish, DishCategory, DishIngredient
from diet_tracker.domain.foods import BaseUnit, Food, FoodCategory, FoodUnit
from diet_tracker.domain.meals import DailyMeals, ItemSource, Meal, MealItem, MealType
from diet_tracker.domain.nutrition import NUTRIENT_FIELDS, NutritionalValues
from diet_tracker.domain.profiles import (
    ActivityLevel,
    Gender,
    Goal,
    MacroOverrides,
    MicroOverrides,
    Profile,
)
from diet_tracker.errors import RecordDecodeError

LEGACY_ACTIVITY_LEVELS = {
    "lightly_active": ActivityLevel.LIGHT,
    "moderately_active": ActivityLevel.MODERATE,
    "very_active": ActivityLevel.INTENSE,
    "extra_active": ActivityLevel.ATHLETE,
}

LEGACY_GOALS = {
    "lose_weight": Goal.LOSE,
    "maintain_weight": Goal.MAINTAIN,
    "gain_weight": Goal.GAIN,
    "muscle_gain": Goal.MUSCLE_GAIN,
    "muscle-gain": Goal.MUSCLE_GAIN,
}


def _number(value: Any) -> float:
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return 0.0 if math.isnan(number) else number


class _Document(BaseModel):
    model_config = ConfigDict(extra="ignore")


class NutritionDocument(_Document):
    """Stored nutrient block."""

    calories: float = 0.0
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0
    fiber: float = 0.0
    sodium: float = 0.0
    sugar: float = 0.0
    water: float | None = None

    @field_validator(*NUTRIENT_FIELDS, mode="before")
    @classmethod
    def _coerce_number(cls, value: Any) -> float:
        return _number(value)

    @field_validator("water", mode="before")
    @classmethod
    def _coerce_water(cls, value: Any) -> float | None:
        if value is None:
            return None
        return _number(value)

    def to_domain(self) -> NutritionalValues:
        return NutritionalValues(**self.model_dump())


class FoodUnitDocument(_Document):
    """Stored unit of measure."""

    name: str = ""
    abbreviation: str
    grams_equivalent: float

    def to_domain(self) -> FoodUnit:
        return FoodUnit(
            self.name or self.abbreviation, self.abbreviation, self.grams_equivalent
        )


class FoodDocument(_Document):
    """Row of the ``foods`` table."""

    id: str
    name: str
    brand: str | None = None
    category: FoodCategory = FoodCategory.OTHERS
    nutrition: NutritionDocument = Field(default_factory=NutritionDocument)
    base_unit: BaseUnit = BaseUnit.GRAM
    available_units: list[FoodUnitDocument] = Field(default_factory=list)
    default_unit: str | None = None
    is_custom: bool = False
    is_public: bool = False
    user_id: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def to_domain(self) -> Food:
        units = [unit.to_domain() for unit in self.available_units]
        if not units:
            units = [FoodUnit(_unit_name(self.base_unit), str(self.base_unit), 1)]
        return Food(
            id=self.id,
            name=self.name,
            brand=self.brand,
            category=self.category,
            nutrition=self.nutrition.to_domain(),
            base_unit=self.base_unit,
            available_units=units,
            default_unit=self.default_unit or str(self.base_unit),
            is_custom=self.is_custom,
            is_public=self.is_public,
            user_id=self.user_id,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )


class DishIngredientDocument(_Document):
    """Ingredient snapshot stored inside a dish."""

    food_id: str
    food_name: str = ""
    quantity: float = 0.0
    unit: str = "g"
    nutrition: NutritionDocument = Field(default_factory=NutritionDocument)

    def to_domain(self) -> DishIngredient:
        return DishIngredient(
            food_id=self.food_id,
            food_name=self.food_name,
            quantity=self.quantity,
            unit=self.unit,
            nutrition=self.nutrition.to_domain(),
        )


class DishDocument(_Document):
    """Row of the ``dishes`` table."""

    id: str
    name: str
    description: str | None = None
    category: DishCategory = DishCategory.OTHER
    ingredients: list[DishIngredientDocument] = Field(default_factory=list)
    servings: int = 1
    total_nutrition: NutritionDocument = Field(default_factory=NutritionDocument)
    nutrition_per_serving: NutritionDocument = Field(default_factory=NutritionDocument)
    user_id: str
    is_public: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def to_domain(self) -> Dish:
        return Dish(
            id=self.id,
            name=self.name,
            description=self.description,
            category=self.category,
            ingredients=[item.to_domain() for item in self.ingredients],
            servings=self.servings,
            total_nutrition=self.total_nutrition.to_domain(),
            nutrition_per_serving=self.nutrition_per_serving.to_domain(),
            user_id=self.user_id,
            is_public=self.is_public,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )


class MealItemDocument(_Document):
    """Item snapshot stored inside a meal."""

    id: str
    source: ItemSource = ItemSource.FOOD
    source_id: str
    name: str = ""
    quantity: float = 0.0
    unit: str = "g"
    nutrition: NutritionDocument = Field(default_factory=NutritionDocument)

    def to_domain(self) -> MealItem:
        return MealItem(
            id=self.id,
            source=self.source,
            source_id=self.source_id,
            name=self.name,
            quantity=self.quantity,
            unit=self.unit,
            nutrition=self.nutrition.to_domain(),
        )


class MealDocument(_Document):
    """Meal stored inside a daily document."""

    id: str
    type: MealType
    name: str = ""
    items: list[MealItemDocument] = Field(default_factory=list)
    totals: NutritionDocument = Field(default_factory=NutritionDocument)
    created_at: datetime | None = None

    def to_domain(self) -> Meal:
        return Meal(
            id=self.id,
            type=self.type,
            name=self.name or self.type.label,
            items=[item.to_domain() for item in self.items],
            totals=self.totals.to_domain(),
            created_at=self.created_at,
        )


class DailyMealsDocument(_Document):
    """Row of the ``daily_meals`` table."""

    id: str | None = None
    user_id: str
    day: date = Field(alias="date")
    meals: list[MealDocument] = Field(default_factory=list)
    daily_totals: NutritionDocument = Field(default_factory=NutritionDocument)

    def to_domain(self) -> DailyMeals:
        totals = self.daily_totals.to_domain()
        if totals.water is None:
            totals = replace(totals, water=0.0)
        return DailyMeals(
            user_id=self.user_id,
            date=self.day,
            meals=[meal.to_domain() for meal in self.meals],
            daily_totals=totals,
        )


class MacroOverridesDocument(_Document):
    """Stored macro goal overrides."""

    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0


class MicroOverridesDocument(_Document):
    """Stored micronutrient goal overrides."""

    fiber: float = 0.0
    sugar: float = 0.0
    sodium: float = 0.0


class ProfileDocument(_Document):
    """Row of the ``profiles`` table."""

    id: str
    name: str = ""
    age: int | None = None
    weight: float | None = None
    height: float | None = None
    gender: Gender = Gender.MALE
    activity_level: ActivityLevel = ActivityLevel.SEDENTARY
    goal: Goal = Goal.MAINTAIN
    daily_goal: int | None = None
    macro_goals: MacroOverridesDocument | None = None
    micro_goals: MicroOverridesDocument | None = None
    hydration_goal: int | None = None
    updated_at: datetime | None = None

    @field_validator("activity_level", mode="before")
    @classmethod
    def _legacy_activity(cls, value: Any) -> Any:
        if value is None:
            return ActivityLevel.SEDENTARY
        if isinstance(value, str):
            return LEGACY_ACTIVITY_LEVELS.get(value, value)
        return value

    @field_validator("goal", mode="before")
    @classmethod
    def _legacy_goal(cls, value: Any) -> Any:
        if value is None:
            return Goal.MAINTAIN
        if isinstance(value, str):
            return LEGACY_GOALS.get(value, value)
        return value

    @field_validator("gender", mode="before")
    @classmethod
    def _default_gender(cls, value: Any) -> Any:
        return Gender.MALE if value is None else value

    @field_validator("age", "weight", "height", mode="before")
    @classmethod
    def _blank_metric(cls, value: Any) -> Any:
        return None if value in ("", 0) else value

    def to_domain(self) -> Profile:
        macros = self.macro_goals
        micros = self.micro_goals
        return Profile(
            user_id=self.id,
            name=self.name,
            age=self.age,
            weight=self.weight,
            height=self.height,
            gender=self.gender,
            activity_level=self.activity_level,
            goal=self.goal,
            daily_goal=self.daily_goal,
            macro_goals=(
                MacroOverrides(macros.protein, macros.carbs, macros.fat)
                if macros
                else None
            ),
            micro_goals=(
                MicroOverrides(micros.fiber, micros.sugar, micros.sodium)
                if micros
                else None
            ),
            hydration_goal=self.hydration_goal,
            updated_at=self.updated_at,
        )


def _unit_name(base_unit: BaseUnit) -> str:
    return "gram" if base_unit == BaseUnit.GRAM else "milliliter"


def _decode(model: type[_Document], collection: str, row: dict[str, Any]) -> Any:
    try:
        return model.model_validate(row).to_domain()
    except ValidationError as exc:
        raise RecordDecodeError(collection, row.get("id"), str(exc)) from exc


def decode_food(row: dict[str, Any]) -> Food:
    """Decode a ``foods`` row."""
    return _decode(FoodDocument, "foods", row)


def decode_dish(row: dict[str, Any]) -> Dish:
    """Decode a ``dishes`` row."""
    return _decode(DishDocument, "dishes", row)


def decode_daily_meals(row: dict[str, Any]) -> DailyMeals:
    """Decode a ``daily_meals`` row."""
    return _decode(DailyMealsDocument, "daily_meals", row)


def decode_profile(row: dict[str, Any]) -> Profile:
    """Decode a ``profiles`` row."""
    return _decode(ProfileDocument, "profiles", row)


def encode_nutrition(nutrition: NutritionalValues) -> dict[str, float | None]:
    return {
        **{field: getattr(nutrition, field) for field in NUTRIENT_FIELDS},
        "water": nutrition.water,
    }


def _timestamp(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


def encode_food(food: Food) -> dict[str, Any]:
    """Build the ``foods`` row for a food."""
    return {
        "id": food.id,
        "name": food.name,
        "brand": food.brand,
        "category": str(food.category),
        "nutrition": encode_nutrition(food.nutrition),
        "base_unit": str(food.base_unit),
        "available_units": [
            {
                "name": unit.name,
                "abbreviation": unit.abbreviation,
                "grams_equivalent": unit.grams_equivalent,
            }
            for unit in food.available_units
        ],
        "default_unit": food.default_unit,
        "is_custom": food.is_custom,
        "is_public": food.is_public,
        "user_id": food.user_id,
        "created_at": _timestamp(food.created_at),
        "updated_at": _timestamp(food.updated_at),
    }


def encode_dish(dish: Dish) -> dict[str, Any]:
    """Build the ``dishes`` row for a dish."""
    return {
        "id": dish.id,
        "name": dish.name,
        "description": dish.description,
        "category": str(dish.category),
        "ingredients": [
            {
                "food_id": item.food_id,
                "food_name": item.food_name,
                "quantity": item.quantity,
                "unit": item.unit,
                "nutrition": encode_nutrition(item.nutrition),
            }
            for item in dish.ingredients
        ],
        "servings": dish.servings,
        "total_nutrition": encode_nutrition(dish.total_nutrition),
        "nutrition_per_serving": encode_nutrition(dish.nutrition_per_serving),
        "user_id": dish.user_id,
        "is_public": dish.is_public,
        "created_at": _timestamp(dish.created_at),
        "updated_at": _timestamp(dish.updated_at),
    }


def _encode_meal(meal: Meal) -> dict[str, Any]:
    return {
        "id": meal.id,
        "type": str(meal.type),
        "name": meal.name,
        "items": [
            {
                "id": item.id,
                "source": str(item.source),
                "source_id": item.source_id,
                "name": item.name,
                "quantity": item.quantity,
                "unit": item.unit,
                "nutrition": encode_nutrition(item.nutrition),
            }
            for item in meal.items
        ],
        "totals": encode_nutrition(meal.totals),
        "created_at": _timestamp(meal.created_at),
    }


def encode_daily_meals(daily: DailyMeals) -> dict[str, Any]:
    """Build the ``daily_meals`` row for a user's day."""
    return {
        "id": daily.key,
        "user_id": daily.user_id,
        "date": date_key(daily.date),
        "meals": [_encode_meal(meal) for meal in daily.meals],
        "daily_totals": encode_nutrition(daily.daily_totals),
    }


def encode_profile(profile: Profile) -> dict[str, Any]:
    """Build the ``profiles`` row for a profile."""
    macros = profile.macro_goals
    micros = profile.micro_goals
    return {
        "id": profile.user_id,
        "name": profile.name,
        "age": profile.age,
        "weight": profile.weight,
        "height": profile.height,
        "gender": str(profile.gender),
        "activity_level": str(profile.activity_level),
        "goal": str(profile.goal),
        "daily_goal": profile.daily_goal,
        "macro_goals": (
            {"protein": macros.protein, "carbs": macros.carbs, "fat": macros.fat}
            if macros
            else None
        ),
        "micro_goals": (
            {"fiber": micros.fiber, "sugar": micros.sugar, "sodium": micros.sodium}
            if micros
            else None
        ),
        "hydration_goal": profile.hydration_goal,
        "updated_at": _timestamp(profile.updated_at),
    }
