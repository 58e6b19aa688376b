"""Food catalog domain models."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum

from diet_tracker.domain.nutrition import NutritionalValues


class FoodCategory(StrEnum):
    """Catalog grouping for foods."""

    PROTEIN = "protein"
    CARBS = "carbs"
    VEGETABLES = "vegetables"
    FRUITS = "fruits"
    DAIRY = "dairy"
    GRAINS = "grains"
    FATS = "fats"
    BEVERAGES = "beverages"
    OTHERS = "others"


class BaseUnit(StrEnum):
    """Unit in which per-100 nutrition figures are defined."""

    GRAM = "g"
    MILLILITER = "ml"


@dataclass(frozen=True)
class FoodUnit:
    """A unit a food can be measured in."""

    name: str
    abbreviation: str
    grams_equivalent: float


@dataclass(frozen=True)
class Food:
    """A reusable food definition with nutrition per 100 base units."""

    id: str
    name: str
    category: FoodCategory
    nutrition: NutritionalValues
    base_unit: BaseUnit
    available_units: list[FoodUnit]
    default_unit: str
    is_custom: bool
    is_public: bool
    user_id: str | None = None
    brand: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def find_unit(self, abbreviation: str) -> FoodUnit | None:
        """Return the unit with the given abbreviation, if present."""
        for unit in self.available_units:
            if unit.abbreviation == abbreviation:
                return unit
        return None


@dataclass(frozen=True)
class FoodDraft:
    """Fields supplied when registering a custom food."""

    name: str
    category: FoodCategory
    nutrition: NutritionalValues
    base_unit: BaseUnit
    available_units: list[FoodUnit]
    default_unit: str
    is_public: bool = False
    brand: str | None = None
