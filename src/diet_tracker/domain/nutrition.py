"""Nutrition domain models."""

from dataclasses import dataclass

NUTRIENT_FIELDS = ("calories", "protein", "carbs", "fat", "fiber", "sodium", "sugar")


@dataclass(frozen=True)
class NutritionalValues:
    """Nutrient amounts for a food portion, dish or meal.

    Sodium is in milligrams, energy in kcal, everything else in grams.
    ``water`` is ``None`` when the source food has no water figure; sums and
    per-serving values always carry a concrete number.
    """

    calories: float = 0.0
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0
    fiber: float = 0.0
    sodium: float = 0.0
    sugar: float = 0.0
    water: float | None = None

    def get(self, field: str) -> float:
        """Return a nutrient value, substituting 0 for an unknown water figure."""
        value = getattr(self, field)
        return 0.0 if value is None else value


ZERO_NUTRITION = NutritionalValues(water=0.0)
