"""Unit conversion, nutrition scaling and aggregation."""

import math
from collections.abc import Iterable

from diet_tracker.domain.foods import Food
from diet_tracker.domain.nutrition import NUTRIENT_FIELDS, NutritionalValues
from diet_tracker.errors import InvalidInput, InvalidServings, UnitNotFound

_PER_BASE_UNITS = 100.0
_WHOLE_NUMBER_FIELDS = frozenset({"calories", "sodium"})


def round_half_up(value: float, digits: int = 0) -> float:
    """Round halves away from negative infinity, like ``Math.round``."""
    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor


def _finite(value: float) -> float:
    return 0.0 if math.isnan(value) else value


def calculate_nutrition(food: Food, quantity: float, unit: str) -> NutritionalValues:
    """Return the nutrition of ``quantity`` of ``food`` measured in ``unit``."""
    selected = food.find_unit(unit)
    if selected is None:
        raise UnitNotFound(unit, food.name)
    proportion = quantity * selected.grams_equivalent / _PER_BASE_UNITS
    return scale_nutrition(food.nutrition, proportion)


def scale_nutrition(base: NutritionalValues, factor: float) -> NutritionalValues:
    """Multiply every field by ``factor`` and round to one decimal."""
    values = {
        field: round_half_up(_finite(base.get(field) * factor), 1)
        for field in NUTRIENT_FIELDS
    }
    water = None
    if base.water is not None:
        water = round_half_up(_finite(base.water * factor), 1)
    return NutritionalValues(**values, water=water)


def sum_nutrition(items: Iterable[NutritionalValues]) -> NutritionalValues:
    """Field-wise sum; unknown water counts as 0."""
    totals = dict.fromkeys((*NUTRIENT_FIELDS, "water"), 0.0)
    for item in items:
        for field in totals:
            totals[field] += _finite(item.get(field))
    return NutritionalValues(**totals)


def nutrition_per_serving(
    total: NutritionalValues, servings: float
) -> NutritionalValues:
    """Divide a total by ``servings``.

    Calories and sodium round to whole numbers, everything else to one decimal.
    """
    validate_servings(servings)
    values: dict[str, float] = {}
    for field in (*NUTRIENT_FIELDS, "water"):
        digits = 0 if field in _WHOLE_NUMBER_FIELDS else 1
        values[field] = round_half_up(_finite(total.get(field) / servings), digits)
    return NutritionalValues(**values)


def validate_servings(servings: object) -> None:
    """Reject servings counts that are not numbers of at least one."""
    if (
        isinstance(servings, bool)
        or not isinstance(servings, int | float)
        or math.isnan(servings)
        or servings < 1
    ):
        raise InvalidServings(servings)


def validate_quantity(quantity: object) -> float:
    """Return ``quantity`` as a float, rejecting missing or non-positive values."""
    if isinstance(quantity, bool) or not isinstance(quantity, int | float):
        raise InvalidInput("Quantity must be a number")
    if math.isnan(quantity) or quantity <= 0:
        raise InvalidInput("Quantity must be greater than 0")
    return float(quantity)


def percent_of(consumed: float, target: float | None) -> float:
    """Return consumed as a percentage of target; 0 for a missing target."""
    if not target or target <= 0:
        return 0.0
    return consumed / target * 100
