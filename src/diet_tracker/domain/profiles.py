"""Profile and goal domain models."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum


class Gender(StrEnum):
    """Sex used by the Mifflin-St Jeor equation."""

    MALE = "male"
    FEMALE = "female"


class ActivityLevel(StrEnum):
    """Activity level selecting the TDEE multiplier."""

    SEDENTARY = "sedentary"
    LIGHT = "light"
    MODERATE = "moderate"
    INTENSE = "intense"
    ATHLETE = "athlete"


class Goal(StrEnum):
    """Weight goal selecting the calorie adjustment and macro split."""

    LOSE = "lose"
    MAINTAIN = "maintain"
    GAIN = "gain"
    MUSCLE_GAIN = "muscle"


@dataclass(frozen=True)
class MacroOverrides:
    """User-chosen macro targets in grams."""

    protein: float
    carbs: float
    fat: float


@dataclass(frozen=True)
class MicroOverrides:
    """User-chosen micronutrient targets."""

    fiber: float
    sugar: float
    sodium: float


@dataclass(frozen=True)
class Profile:
    """Body metrics, selections and goal overrides for a user."""

    user_id: str
    name: str = ""
    age: int | None = None
    weight: float | None = None
    height: float | None = None
    gender: Gender = Gender.MALE
    activity_level: ActivityLevel = ActivityLevel.SEDENTARY
    goal: Goal = Goal.MAINTAIN
    daily_goal: int | None = None
    macro_goals: MacroOverrides | None = None
    micro_goals: MicroOverrides | None = None
    hydration_goal: int | None = None
    updated_at: datetime | None = None

    @property
    def has_complete_metrics(self) -> bool:
        """Return True when age, weight and height are all known."""
        return bool(self.age and self.weight and self.height)


@dataclass(frozen=True)
class MacroGoals:
    """Daily targets derived from the calorie goal."""

    calories: int
    protein: int
    carbs: int
    fat: int
    fiber: int
    sodium: int
    sugar: int
    water: int


@dataclass(frozen=True)
class GoalSummary:
    """Derived energy figures; values are None for an incomplete profile."""

    bmr: int | None
    tdee: int | None
    daily_goal: int | None
    macro_goals: MacroGoals | None
    has_complete_profile: bool


@dataclass(frozen=True)
class NutritionTargets:
    """Targets that history percentages are measured against."""

    calories: float | None
    protein: float | None
    carbs: float | None
    fat: float | None
    fiber: float | None
    sugar: float | None = None
