"""Built-in food catalog and startup seeding."""

import logging
from dataclasses import dataclass

from diet_tracker.dates import Clock, utc_now
from diet_tracker.domain.foods import BaseUnit, Food, FoodCategory, FoodUnit
from diet_tracker.domain.nutrition import NutritionalValues
from diet_tracker.services.foods import FoodRepository, validate_food

_logger = logging.getLogger(__name__)

GRAM = FoodUnit("gram", "g", 1)
MILLILITER = FoodUnit("milliliter", "ml", 1)
CUP = FoodUnit("cup (200ml)", "cup", 200)


@dataclass(frozen=True)
class CatalogEntry:
    """A built-in food before it is stamped with an id and timestamps."""

    slug: str
    name: str
    category: FoodCategory
    nutrition: NutritionalValues
    base_unit: BaseUnit
    units: tuple[FoodUnit, ...]
    default_unit: str


def _n(  # noqa: PLR0913
    calories: float,
    protein: float,
    carbs: float,
    fat: float,
    fiber: float,
    sodium: float,
    sugar: float,
    water: float | None = None,
) -> NutritionalValues:
    return NutritionalValues(calories, protein, carbs, fat, fiber, sodium, sugar, water)


DEFAULT_FOODS = (
    CatalogEntry(
        "white-rice",
        "Cooked White Rice",
        FoodCategory.CARBS,
        _n(130, 2.7, 28, 0.3, 0.4, 1, 0.1),
        BaseUnit.GRAM,
        (GRAM,),
        "g",
    ),
    CatalogEntry(
        "black-beans",
        "Cooked Black Beans",
        FoodCategory.PROTEIN,
        _n(132, 8.9, 23, 0.5, 8.7, 2, 0.3),
        BaseUnit.GRAM,
        (GRAM,),
        "g",
    ),
    CatalogEntry(
        "chicken-breast",
        "Grilled Chicken Breast",
        FoodCategory.PROTEIN,
        _n(165, 31, 0, 3.6, 0, 74, 0),
        BaseUnit.GRAM,
        (GRAM,),
        "g",
    ),
    CatalogEntry(
        "boiled-egg",
        "Boiled Egg",
        FoodCategory.PROTEIN,
        _n(155, 13, 1.1, 11, 0, 124, 1.1),
        BaseUnit.GRAM,
        (FoodUnit("medium unit", "unit", 50), GRAM),
        "unit",
    ),
    CatalogEntry(
        "banana",
        "Banana",
        FoodCategory.FRUITS,
        _n(89, 1.1, 23, 0.3, 2.6, 1, 12),
        BaseUnit.GRAM,
        (FoodUnit("medium unit", "unit", 120), GRAM),
        "unit",
    ),
    CatalogEntry(
        "rolled-oats",
        "Rolled Oats",
        FoodCategory.GRAINS,
        _n(389, 17, 66, 7, 10, 2, 1),
        BaseUnit.GRAM,
        (GRAM,),
        "g",
    ),
    CatalogEntry(
        "whole-milk",
        "Whole Milk",
        FoodCategory.DAIRY,
        _n(61, 3.2, 4.5, 3.2, 0, 44, 4.5, water=87),
        BaseUnit.MILLILITER,
        (CUP, MILLILITER),
        "cup",
    ),
    CatalogEntry(
        "french-bread",
        "French Bread Roll",
        FoodCategory.CARBS,
        _n(300, 9, 58, 3.1, 2.3, 643, 5),
        BaseUnit.GRAM,
        (FoodUnit("roll", "unit", 50), FoodUnit("slice", "slice", 25), GRAM),
        "unit",
    ),
    CatalogEntry(
        "apple",
        "Apple",
        FoodCategory.FRUITS,
        _n(52, 0.3, 14, 0.2, 2.4, 1, 10, water=85),
        BaseUnit.GRAM,
        (FoodUnit("medium unit", "unit", 120), GRAM),
        "unit",
    ),
    CatalogEntry(
        "sweet-potato",
        "Cooked Sweet Potato",
        FoodCategory.CARBS,
        _n(86, 1.6, 20, 0.1, 3, 5, 4.2),
        BaseUnit.GRAM,
        (GRAM,),
        "g",
    ),
    CatalogEntry(
        "water",
        "Water",
        FoodCategory.BEVERAGES,
        _n(0, 0, 0, 0, 0, 0, 0, water=100),
        BaseUnit.MILLILITER,
        (CUP, MILLILITER),
        "cup",
    ),
    CatalogEntry(
        "orange-juice",
        "Fresh Orange Juice",
        FoodCategory.BEVERAGES,
        _n(45, 0.7, 10.4, 0.2, 0.2, 1, 8.1, water=88),
        BaseUnit.MILLILITER,
        (CUP, MILLILITER),
        "cup",
    ),
    CatalogEntry(
        "black-coffee",
        "Unsweetened Coffee",
        FoodCategory.BEVERAGES,
        _n(2, 0.3, 0, 0, 0, 5, 0, water=99),
        BaseUnit.MILLILITER,
        (CUP, MILLILITER),
        "cup",
    ),
    CatalogEntry(
        "broccoli",
        "Cooked Broccoli",
        FoodCategory.VEGETABLES,
        _n(35, 2.4, 7, 0.4, 3.3, 41, 1.5, water=89),
        BaseUnit.GRAM,
        (GRAM,),
        "g",
    ),
    CatalogEntry(
        "lean-beef",
        "Lean Beef",
        FoodCategory.PROTEIN,
        _n(250, 26, 0, 15, 0, 72, 0),
        BaseUnit.GRAM,
        (GRAM,),
        "g",
    ),
    CatalogEntry(
        "olive-oil",
        "Olive Oil",
        FoodCategory.FATS,
        _n(884, 0, 0, 100, 0, 2, 0),
        BaseUnit.MILLILITER,
        (
            FoodUnit("tablespoon", "tbsp", 15),
            FoodUnit("teaspoon", "tsp", 5),
            MILLILITER,
        ),
        "tbsp",
    ),
    CatalogEntry(
        "tomato",
        "Tomato",
        FoodCategory.VEGETABLES,
        _n(18, 0.9, 3.9, 0.2, 1.2, 5, 2.6, water=95),
        BaseUnit.GRAM,
        (FoodUnit("medium unit", "unit", 100), GRAM),
        "unit",
    ),
    CatalogEntry(
        "mozzarella",
        "Mozzarella Cheese",
        FoodCategory.DAIRY,
        _n(280, 25, 2.2, 19, 0, 627, 1),
        BaseUnit.GRAM,
        (FoodUnit("slice", "slice", 20), GRAM),
        "slice",
    ),
    CatalogEntry(
        "plain-yogurt",
        "Plain Yogurt",
        FoodCategory.DAIRY,
        _n(61, 3.5, 4.7, 3.3, 0, 46, 4.7, water=88),
        BaseUnit.GRAM,
        (FoodUnit("pot (170g)", "pot", 170), GRAM),
        "pot",
    ),
    CatalogEntry(
        "brazil-nuts",
        "Brazil Nuts",
        FoodCategory.FATS,
        _n(656, 14, 12, 67, 7.5, 3, 2.3),
        BaseUnit.GRAM,
        (FoodUnit("unit", "unit", 5), GRAM),
        "unit",
    ),
)


@dataclass
class CatalogSeeder:
    """Populates the built-in catalog when it is empty."""

    repository: FoodRepository
    clock: Clock = utc_now

    def populate_default_foods(self) -> int:
        """Insert the built-in foods unless some already exist."""
        existing = self.repository.list_default_foods()
        if existing:
            _logger.info("Default catalog already has %s foods", len(existing))
            return 0
        now = self.clock()
        for entry in DEFAULT_FOODS:
            food = Food(
                id=f"catalog-{entry.slug}",
                name=entry.name,
                category=entry.category,
                nutrition=entry.nutrition,
                base_unit=entry.base_unit,
                available_units=list(entry.units),
                default_unit=entry.default_unit,
                is_custom=False,
                is_public=True,
                created_at=now,
                updated_at=now,
            )
            validate_food(food)
            self.repository.save_food(food)
        _logger.info("Added %s default foods", len(DEFAULT_FOODS))
        return len(DEFAULT_FOODS)
