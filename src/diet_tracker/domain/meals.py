"""Domain models for meal logging."""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import StrEnum

from diet_tracker.dates import date_key
from diet_tracker.domain.nutrition import ZERO_NUTRITION, NutritionalValues


class MealType(StrEnum):
    """Part of the day a meal belongs to."""

    BREAKFAST = "breakfast"
    MORNING_SNACK = "morning_snack"
    LUNCH = "lunch"
    AFTERNOON_SNACK = "afternoon_snack"
    DINNER = "dinner"
    EVENING_SNACK = "evening_snack"

    @property
    def label(self) -> str:
        """Human readable name used as the default meal name."""
        return self.value.replace("_", " ").capitalize()


class ItemSource(StrEnum):
    """What a meal item was resolved from."""

    FOOD = "food"
    DISH = "dish"


@dataclass(frozen=True)
class FoodEntry:
    """Request to log a quantity of a food."""

    food_id: str
    quantity: float
    unit: str


@dataclass(frozen=True)
class DishEntry:
    """Request to log servings of a dish."""

    dish_id: str
    servings: float = 1.0


MealEntry = FoodEntry | DishEntry


@dataclass(frozen=True)
class MealItem:
    """A resolved portion inside a meal with its nutrition snapshot."""

    id: str
    source: ItemSource
    source_id: str
    name: str
    quantity: float
    unit: str
    nutrition: NutritionalValues


@dataclass(frozen=True)
class Meal:
    """A logged meal."""

    id: str
    type: MealType
    name: str
    items: list[MealItem]
    totals: NutritionalValues
    created_at: datetime | None = None


@dataclass(frozen=True)
class DailyMeals:
    """All meals logged by a user on one date."""

    user_id: str
    date: date
    meals: list[Meal] = field(default_factory=list)
    daily_totals: NutritionalValues = ZERO_NUTRITION

    @property
    def key(self) -> str:
        """Document key in the form ``{user_id}_{YYYY-MM-DD}``."""
        return daily_meals_key(self.user_id, self.date)


def daily_meals_key(user_id: str, day: date) -> str:
    """Return the document key for a user's day."""
    return f"{user_id}_{date_key(day)}"


@dataclass(frozen=True)
class MacroProgress:
    """Grams consumed against a target and the calories they supply."""

    consumed: float
    target: float
    calories: float
    percentage: float


@dataclass(frozen=True)
class CalorieProgress:
    consumed: float
    target: float
    remaining: float
    percentage: float


@dataclass(frozen=True)
class DailyProgress:
    """A day's consumption measured against the user's targets."""

    calories: CalorieProgress
    protein: MacroProgress
    carbs: MacroProgress
    fat: MacroProgress
    fiber_consumed: float
    fiber_recommended: float
    sugar_consumed: float
    sugar_limit: float
