"""Request bodies accepted by the HTTP API."""

from datetime import date
from typing import Any

from pydantic import BaseModel, Field, field_validator

from diet_tracker.domain.dishes import DishCategory
from diet_tracker.domain.foods import BaseUnit, FoodCategory, FoodUnit
from diet_tracker.domain.meals import DishEntry, FoodEntry, MealEntry, MealType
from diet_tracker.domain.nutrition import NutritionalValues
from diet_tracker.domain.profiles import (
    ActivityLevel,
    Gender,
    Goal,
    MacroOverrides,
    MicroOverrides,
)
from diet_tracker.errors import InvalidInput


def _reject_null(value: Any) -> Any:
    if value is None:
        raise ValueError("may be omitted but not null")
    return value


class NutritionPayload(BaseModel):
    """Nutrient amounts per 100 base units."""

    calories: float = Field(default=0, ge=0)
    protein: float = Field(default=0, ge=0)
    carbs: float = Field(default=0, ge=0)
    fat: float = Field(default=0, ge=0)
    fiber: float = Field(default=0, ge=0)
    sodium: float = Field(default=0, ge=0)
    sugar: float = Field(default=0, ge=0)
    water: float | None = Field(default=None, ge=0)

    def to_domain(self) -> NutritionalValues:
        return NutritionalValues(**self.model_dump())


class FoodUnitPayload(BaseModel):
    name: str
    abbreviation: str
    grams_equivalent: float = Field(gt=0)

    def to_domain(self) -> FoodUnit:
        return FoodUnit(self.name, self.abbreviation, self.grams_equivalent)


class FoodCreateRequest(BaseModel):
    """Payload for registering a custom food."""

    name: str
    brand: str | None = None
    category: FoodCategory
    nutrition: NutritionPayload
    base_unit: BaseUnit = BaseUnit.GRAM
    available_units: list[FoodUnitPayload]
    default_unit: str
    is_public: bool = False


class FoodUpdateRequest(BaseModel):
    """Partial update for a custom food; omitted fields are kept."""

    name: str | None = None
    brand: str | None = None
    category: FoodCategory | None = None
    nutrition: NutritionPayload | None = None
    base_unit: BaseUnit | None = None
    available_units: list[FoodUnitPayload] | None = None
    default_unit: str | None = None
    is_public: bool | None = None

    @field_validator(
        "name",
        "category",
        "nutrition",
        "base_unit",
        "available_units",
        "default_unit",
        "is_public",
        mode="before",
    )
    @classmethod
    def _not_null(cls, value: Any) -> Any:
        return _reject_null(value)

    def changes(self) -> dict[str, object]:
        """Return the supplied fields converted to domain values."""
        changes: dict[str, object] = {
            key: value
            for key, value in self.model_dump(exclude_unset=True).items()
            if key not in {"nutrition", "available_units"}
        }
        if self.nutrition is not None:
            changes["nutrition"] = self.nutrition.to_domain()
        if self.available_units is not None:
            changes["available_units"] = [
                unit.to_domain() for unit in self.available_units
            ]
        return changes


class PortionRequest(BaseModel):
    quantity: float
    unit: str


class IngredientRequest(BaseModel):
    food_id: str
    quantity: float
    unit: str


class DishCreateRequest(BaseModel):
    """Payload for composing a dish."""

    name: str
    description: str | None = None
    category: DishCategory = DishCategory.OTHER
    ingredients: list[IngredientRequest]
    servings: int = 1
    is_public: bool = False


class DishUpdateRequest(BaseModel):
    """Partial update for a dish."""

    name: str | None = None
    description: str | None = None
    category: DishCategory | None = None
    ingredients: list[IngredientRequest] | None = None
    servings: int | None = None
    is_public: bool | None = None

    @field_validator(
        "name", "category", "ingredients", "servings", "is_public", mode="before"
    )
    @classmethod
    def _not_null(cls, value: Any) -> Any:
        return _reject_null(value)


class MealItemRequest(BaseModel):
    """Either a food portion or a number of dish servings."""

    food_id: str | None = None
    quantity: float | None = None
    unit: str | None = None
    dish_id: str | None = None
    servings: float = 1

    def to_entry(self) -> MealEntry:
        if self.food_id and self.dish_id:
            raise InvalidInput("A meal item references either a food or a dish")
        if self.dish_id:
            return DishEntry(dish_id=self.dish_id, servings=self.servings)
        if not self.food_id:
            raise InvalidInput("A meal item needs a food_id or a dish_id")
        if self.quantity is None or not self.unit:
            raise InvalidInput("Food items need a quantity and a unit")
        return FoodEntry(food_id=self.food_id, quantity=self.quantity, unit=self.unit)


class MealRequest(BaseModel):
    """Payload for logging or replacing a meal."""

    type: MealType
    name: str | None = None
    items: list[MealItemRequest]
    day: date | None = Field(default=None, alias="date")


class ProfileUpdateRequest(BaseModel):
    """Body metrics and selections; omitted fields are kept."""

    name: str | None = None
    age: int | None = None
    weight: float | None = None
    height: float | None = None
    gender: Gender | None = None
    activity_level: ActivityLevel | None = None
    goal: Goal | None = None

    @field_validator(
        "name", "gender", "activity_level", "goal", mode="before"
    )
    @classmethod
    def _not_null(cls, value: Any) -> Any:
        return _reject_null(value)


class MacroGoalsPayload(BaseModel):
    protein: float
    carbs: float
    fat: float


class MicroGoalsPayload(BaseModel):
    fiber: float
    sugar: float
    sodium: float


class GoalsUpdateRequest(BaseModel):
    """User-chosen goal overrides."""

    daily_goal: int | None = None
    macro_goals: MacroGoalsPayload | None = None
    micro_goals: MicroGoalsPayload | None = None
    hydration_goal: int | None = None

    def macro_overrides(self) -> MacroOverrides | None:
        if self.macro_goals is None:
            return None
        return MacroOverrides(**self.macro_goals.model_dump())

    def micro_overrides(self) -> MicroOverrides | None:
        if self.micro_goals is None:
            return None
        return MicroOverrides(**self.micro_goals.model_dump())
