"""Dish domain models."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum

from diet_tracker.domain.nutrition import NutritionalValues


class DishCategory(StrEnum):
    """Grouping for dishes."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"
    DESSERT = "dessert"
    BEVERAGE = "beverage"
    OTHER = "other"


@dataclass(frozen=True)
class DishIngredient:
    """A food portion inside a dish with its nutrition snapshot."""

    food_id: str
    food_name: str
    quantity: float
    unit: str
    nutrition: NutritionalValues


@dataclass(frozen=True)
class Dish:
    """A named, reusable combination of ingredients."""

    id: str
    name: str
    category: DishCategory
    ingredients: list[DishIngredient]
    servings: int
    total_nutrition: NutritionalValues
    nutrition_per_serving: NutritionalValues
    user_id: str
    is_public: bool
    description: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class DishDraft:
    """Fields supplied when creating a dish."""

    name: str
    category: DishCategory
    ingredients: list[DishIngredient]
    servings: int
    is_public: bool = False
    description: str | None = None
