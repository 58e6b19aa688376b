"""Domain models for history reports."""

from dataclasses import dataclass
from datetime import date

from diet_tracker.domain.nutrition import NutritionalValues
from diet_tracker.domain.profiles import NutritionTargets


@dataclass(frozen=True)
class GoalPercentages:
    """Consumption as a percentage of each target."""

    calories: float
    protein: float
    carbs: float
    fat: float
    fiber: float


@dataclass(frozen=True)
class DayStats:
    """One day of history."""

    date: date
    consumed: NutritionalValues
    goals: NutritionTargets
    percentages: GoalPercentages
    meals_count: int


@dataclass(frozen=True)
class HistoryStats:
    """Aggregates over a history window."""

    average_calories: float
    average_protein: float
    average_carbs: float
    average_fat: float
    average_fiber: float
    days_with_data: int
    total_days: int
    streak: int


@dataclass(frozen=True)
class HistoryReport:
    """Daily stats, oldest first, plus aggregates."""

    days: list[DayStats]
    stats: HistoryStats | None
