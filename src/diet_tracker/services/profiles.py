"""Profile storage and daily goal derivation.

Uses:
- Mifflin-St Jeor equation for Basal Metabolic Rate (BMR)
- Activity multipliers for Total Daily Energy Expenditure (TDEE)
- Goal-specific percentage calorie adjustments and macro splits
"""

import logging
import math
from dataclasses import dataclass, replace
from enum import StrEnum
from typing import Protocol

from diet_tracker.dates import Clock, utc_now
from diet_tracker.domain.profiles import (
    ActivityLevel,
    Gender,
    Goal,
    GoalSummary,
    MacroGoals,
    MacroOverrides,
    MicroOverrides,
    NutritionTargets,
    Profile,
)
from diet_tracker.errors import InvalidInput
from diet_tracker.services.nutrition import round_half_up
from diet_tracker.services.users import require_user_id

_logger = logging.getLogger(__name__)

ACTIVITY_MULTIPLIERS = {
    ActivityLevel.SEDENTARY: 1.2,
    ActivityLevel.LIGHT: 1.375,
    ActivityLevel.MODERATE: 1.55,
    ActivityLevel.INTENSE: 1.725,
    ActivityLevel.ATHLETE: 1.9,
}

GOAL_CALORIE_FACTORS = {
    Goal.LOSE: 0.8,
    Goal.MAINTAIN: 1.0,
    Goal.GAIN: 1.2,
    Goal.MUSCLE_GAIN: 1.15,
}

# protein, carbs, fat as shares of daily calories
GOAL_MACRO_SPLITS = {
    Goal.LOSE: (0.30, 0.45, 0.25),
    Goal.MAINTAIN: (0.25, 0.50, 0.25),
    Goal.GAIN: (0.20, 0.50, 0.30),
    Goal.MUSCLE_GAIN: (0.30, 0.50, 0.20),
}

CALORIES_PER_GRAM = {"protein": 4, "carbs": 4, "fat": 9}

FIBER_PER_1000_KCAL = 14
SODIUM_LIMIT_MG = 2300
SUGAR_CALORIE_SHARE = 0.10
WATER_ML_PER_KG = 35
DEFAULT_WATER_ML = 2000

DEFAULT_TARGETS = NutritionTargets(
    calories=2000, protein=150, carbs=250, fat=67, fiber=25, sugar=50
)

_PROFILE_FIELDS = frozenset(
    {"name", "age", "weight", "height", "gender", "activity_level", "goal"}
)

_SELECTION_TYPES: dict[str, type[StrEnum]] = {
    "gender": Gender,
    "activity_level": ActivityLevel,
    "goal": Goal,
}


def calculate_bmr(profile: Profile) -> int | None:
    """Return the Mifflin-St Jeor BMR, or None when a body metric is missing.

    Male:   10 × weight(kg) + 6.25 × height(cm) − 5 × age(y) + 5
    Female: 10 × weight(kg) + 6.25 × height(cm) − 5 × age(y) − 161
    """
    if not profile.has_complete_metrics:
        return None
    bmr = 10 * profile.weight + 6.25 * profile.height - 5 * profile.age
    if profile.gender == Gender.MALE:
        bmr += 5
    else:
        bmr -= 161
    return int(round_half_up(bmr))


def calculate_tdee(bmr: int | None, activity_level: ActivityLevel) -> int | None:
    """Return BMR × activity multiplier, or None without a BMR."""
    if not bmr:
        return None
    return int(round_half_up(bmr * ACTIVITY_MULTIPLIERS[activity_level]))


def calculate_daily_goal(tdee: int | None, goal: Goal) -> int | None:
    """Apply the goal's percentage adjustment to the TDEE."""
    if not tdee:
        return None
    return int(round_half_up(tdee * GOAL_CALORIE_FACTORS[goal]))


def calculate_macro_goals(
    calories: int, goal: Goal, weight: float | None = None
) -> MacroGoals:
    """Split a calorie goal into macro, fiber, sodium, sugar and water targets."""
    if not calories:
        return MacroGoals(0, 0, 0, 0, 0, 0, 0, 0)
    protein_share, carbs_share, fat_share = GOAL_MACRO_SPLITS[goal]
    water = (
        int(round_half_up(weight * WATER_ML_PER_KG)) if weight else DEFAULT_WATER_ML
    )
    return MacroGoals(
        calories=calories,
        protein=_grams(calories * protein_share, "protein"),
        carbs=_grams(calories * carbs_share, "carbs"),
        fat=_grams(calories * fat_share, "fat"),
        fiber=int(round_half_up(calories / 1000 * FIBER_PER_1000_KCAL)),
        sodium=SODIUM_LIMIT_MG,
        sugar=_grams(calories * SUGAR_CALORIE_SHARE, "carbs"),
        water=water,
    )


def derive_goals(profile: Profile) -> GoalSummary:
    """Run the full BMR → TDEE → daily goal → macro goals chain."""
    bmr = calculate_bmr(profile)
    tdee = calculate_tdee(bmr, profile.activity_level)
    daily_goal = calculate_daily_goal(tdee, profile.goal)
    macro_goals = (
        calculate_macro_goals(daily_goal, profile.goal, profile.weight)
        if daily_goal
        else None
    )
    return GoalSummary(
        bmr=bmr,
        tdee=tdee,
        daily_goal=daily_goal,
        macro_goals=macro_goals,
        has_complete_profile=profile.has_complete_metrics,
    )


def resolve_targets(profile: Profile) -> NutritionTargets:
    """Pick stored overrides, then derived goals, then defaults."""
    derived = derive_goals(profile).macro_goals
    macros = profile.macro_goals
    return NutritionTargets(
        calories=profile.daily_goal
        or (derived.calories if derived else None)
        or DEFAULT_TARGETS.calories,
        protein=(macros.protein if macros else None)
        or (derived.protein if derived else None)
        or DEFAULT_TARGETS.protein,
        carbs=(macros.carbs if macros else None)
        or (derived.carbs if derived else None)
        or DEFAULT_TARGETS.carbs,
        fat=(macros.fat if macros else None)
        or (derived.fat if derived else None)
        or DEFAULT_TARGETS.fat,
        fiber=(profile.micro_goals.fiber if profile.micro_goals else None)
        or (derived.fiber if derived else None)
        or DEFAULT_TARGETS.fiber,
        sugar=(profile.micro_goals.sugar if profile.micro_goals else None)
        or (derived.sugar if derived else None)
        or DEFAULT_TARGETS.sugar,
    )


def _grams(calories: float, nutrient: str) -> int:
    return int(round_half_up(calories / CALORIES_PER_GRAM[nutrient]))


class ProfileRepository(Protocol):
    """Persistence interface for profiles."""

    def get_profile(self, user_id: str) -> Profile | None:
        """Return the stored profile, if present."""

    def save_profile(self, profile: Profile) -> None:
        """Insert or replace a profile document."""


@dataclass
class ProfileService:
    """Service for profile storage and goal derivation."""

    repository: ProfileRepository
    clock: Clock = utc_now

    def get_profile(self, user_id: str, display_name: str | None = None) -> Profile:
        """Return the stored profile or a basic default one."""
        require_user_id(user_id)
        stored = self.repository.get_profile(user_id)
        if stored is None:
            return Profile(user_id=user_id, name=display_name or "")
        return stored

    def save_profile(self, user_id: str, changes: dict[str, object]) -> Profile:
        """Merge body metrics and selections into the stored profile."""
        unknown = set(changes) - _PROFILE_FIELDS
        if unknown:
            raise InvalidInput(f"Cannot update fields: {', '.join(sorted(unknown))}")
        for field in ("age", "weight", "height"):
            _check_positive(field, changes.get(field))
        if "name" in changes and not isinstance(changes["name"], str):
            raise InvalidInput("name must be text")
        selections = {
            field: _selection(field, changes[field])
            for field in _SELECTION_TYPES
            if field in changes
        }
        profile = replace(
            self.get_profile(user_id),
            **{**changes, **selections},
            updated_at=self.clock(),
        )
        self.repository.save_profile(profile)
        _logger.info("Saved profile for user %s", user_id)
        return profile

    def update_goals(
        self,
        user_id: str,
        *,
        daily_goal: int | None = None,
        macro_goals: MacroOverrides | None = None,
        micro_goals: MicroOverrides | None = None,
        hydration_goal: int | None = None,
    ) -> Profile:
        """Store user-chosen goal overrides; omitted values are kept."""
        _check_positive("daily_goal", daily_goal)
        _check_positive("hydration_goal", hydration_goal)
        for overrides in (macro_goals, micro_goals):
            if overrides is not None:
                for field, value in vars(overrides).items():
                    _check_non_negative(field, value)
        profile = self.get_profile(user_id)
        updated = replace(
            profile,
            daily_goal=daily_goal if daily_goal is not None else profile.daily_goal,
            macro_goals=macro_goals or profile.macro_goals,
            micro_goals=micro_goals or profile.micro_goals,
            hydration_goal=(
                hydration_goal if hydration_goal is not None else profile.hydration_goal
            ),
            updated_at=self.clock(),
        )
        self.repository.save_profile(updated)
        _logger.info("Updated goals for user %s", user_id)
        return updated

    def goal_summary(self, user_id: str) -> GoalSummary:
        """Return the derived goals for the user's profile."""
        return derive_goals(self.get_profile(user_id))

    def resolve_targets(self, user_id: str) -> NutritionTargets:
        """Return the targets used to grade daily consumption."""
        return resolve_targets(self.get_profile(user_id))


def _check_positive(field: str, value: object) -> None:
    if value is None:
        return
    if (
        isinstance(value, bool)
        or not isinstance(value, int | float)
        or math.isnan(value)
        or value <= 0
    ):
        raise InvalidInput(f"{field} must be greater than 0")


def _check_non_negative(field: str, value: object) -> None:
    if (
        isinstance(value, bool)
        or not isinstance(value, int | float)
        or math.isnan(value)
        or value < 0
    ):
        raise InvalidInput(f"{field} cannot be negative")


def _selection(field: str, value: object) -> StrEnum:
    enum_type = _SELECTION_TYPES[field]
    try:
        return enum_type(value)
    except ValueError as exc:
        choices = ", ".join(member.value for member in enum_type)
        raise InvalidInput(f"{field} must be one of: {choices}") from exc
