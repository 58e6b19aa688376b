"""Meal logging service."""

import logging
from dataclasses import dataclass, replace
from datetime import date
from typing import Protocol
from uuid import uuid4

from diet_tracker.dates import Clock, today_in, utc_now
from diet_tracker.domain.meals import (
    CalorieProgress,
    DailyMeals,
    DailyProgress,
    DishEntry,
    FoodEntry,
    ItemSource,
    MacroProgress,
    Meal,
    MealEntry,
    MealItem,
    MealType,
)
from diet_tracker.domain.nutrition import NutritionalValues
from diet_tracker.domain.profiles import NutritionTargets
from diet_tracker.errors import InvalidInput, RecordNotFound
from diet_tracker.services.dishes import DishService
from diet_tracker.services.foods import FoodCatalogService
from diet_tracker.services.nutrition import (
    calculate_nutrition,
    percent_of,
    scale_nutrition,
    sum_nutrition,
    validate_quantity,
)
from diet_tracker.services.profiles import CALORIES_PER_GRAM
from diet_tracker.services.users import require_user_id

_logger = logging.getLogger(__name__)


class DailyMealsRepository(Protocol):
    """Persistence interface for per-day meal documents."""

    def get_daily_meals(self, user_id: str, day: date) -> DailyMeals | None:
        """Return the document for a user's day, if present."""

    def save_daily_meals(self, daily: DailyMeals) -> None:
        """Insert or replace the document for a user's day."""

    def list_daily_meals(
        self, user_id: str, start: date, end: date
    ) -> list[DailyMeals]:
        """Return the stored days between start and end inclusive."""


@dataclass
class MealLogService:
    """Service that resolves meal entries and keeps daily totals current."""

    repository: DailyMealsRepository
    food_service: FoodCatalogService
    dish_service: DishService
    timezone_name: str
    clock: Clock = utc_now

    def today(self) -> date:
        """Return today's date in the reference timezone."""
        return today_in(self.timezone_name, self.clock)

    def get_day(self, user_id: str, day: date | None = None) -> DailyMeals:
        """Return a user's day, or an empty one when nothing was logged."""
        require_user_id(user_id)
        target = day or self.today()
        stored = self.repository.get_daily_meals(user_id, target)
        if stored is None:
            return DailyMeals(user_id=user_id, date=target)
        return stored

    def build_meal(
        self,
        user_id: str,
        meal_type: MealType,
        entries: list[MealEntry],
        name: str | None = None,
    ) -> Meal:
        """Resolve entries into a meal without persisting it."""
        require_user_id(user_id)
        if not entries:
            raise InvalidInput("Add at least one item to the meal")
        items = [self._resolve_entry(user_id, entry) for entry in entries]
        return Meal(
            id=str(uuid4()),
            type=meal_type,
            name=(name or "").strip() or meal_type.label,
            items=items,
            totals=sum_nutrition(item.nutrition for item in items),
            created_at=self.clock(),
        )

    def add_meal(
        self,
        user_id: str,
        meal_type: MealType,
        entries: list[MealEntry],
        name: str | None = None,
        day: date | None = None,
    ) -> DailyMeals:
        """Log a meal and return the updated day."""
        meal = self.build_meal(user_id, meal_type, entries, name)
        current = self.get_day(user_id, day)
        updated = with_meals(current, [*current.meals, meal])
        self.repository.save_daily_meals(updated)
        _logger.info("Logged meal %s for user %s on %s", meal.id, user_id, updated.date)
        return updated

    def remove_meal(
        self, user_id: str, meal_id: str, day: date | None = None
    ) -> DailyMeals:
        """Delete a meal and return the updated day."""
        current = self.get_day(user_id, day)
        remaining = [meal for meal in current.meals if meal.id != meal_id]
        if len(remaining) == len(current.meals):
            raise RecordNotFound("meals", meal_id)
        updated = with_meals(current, remaining)
        self.repository.save_daily_meals(updated)
        return updated

    def replace_meal(  # noqa: PLR0913
        self,
        user_id: str,
        meal_id: str,
        meal_type: MealType,
        entries: list[MealEntry],
        name: str | None = None,
        day: date | None = None,
    ) -> DailyMeals:
        """Replace a meal by deleting it and logging a new one."""
        meal = self.build_meal(user_id, meal_type, entries, name)
        current = self.get_day(user_id, day)
        remaining = [existing for existing in current.meals if existing.id != meal_id]
        if len(remaining) == len(current.meals):
            raise RecordNotFound("meals", meal_id)
        updated = with_meals(current, [*remaining, meal])
        self.repository.save_daily_meals(updated)
        _logger.info("Replaced meal %s with %s for user %s", meal_id, meal.id, user_id)
        return updated

    def meals_by_type(
        self, user_id: str, meal_type: MealType, day: date | None = None
    ) -> list[Meal]:
        """Return the day's meals of one type."""
        meals = self.get_day(user_id, day).meals
        return [meal for meal in meals if meal.type == meal_type]

    def _resolve_entry(self, user_id: str, entry: MealEntry) -> MealItem:
        if isinstance(entry, FoodEntry):
            food = self.food_service.get_food(user_id, entry.food_id)
            quantity = validate_quantity(entry.quantity)
            return MealItem(
                id=str(uuid4()),
                source=ItemSource.FOOD,
                source_id=food.id,
                name=food.name,
                quantity=quantity,
                unit=entry.unit,
                nutrition=calculate_nutrition(food, quantity, entry.unit),
            )
        if isinstance(entry, DishEntry):
            dish = self.dish_service.get_dish(user_id, entry.dish_id)
            servings = validate_quantity(entry.servings)
            return MealItem(
                id=str(uuid4()),
                source=ItemSource.DISH,
                source_id=dish.id,
                name=dish.name,
                quantity=servings,
                unit="serving",
                nutrition=scale_nutrition(dish.nutrition_per_serving, servings),
            )
        raise InvalidInput(f"Unsupported meal entry: {entry!r}")


def compute_daily_totals(meals: list[Meal]) -> NutritionalValues:
    """Recompute a day's totals from its meals."""
    return sum_nutrition(meal.totals for meal in meals)


def with_meals(daily: DailyMeals, meals: list[Meal]) -> DailyMeals:
    """Return a copy of the day holding ``meals`` with fresh totals."""
    return replace(daily, meals=meals, daily_totals=compute_daily_totals(meals))


def calorie_progress(daily: DailyMeals, daily_goal: float | None) -> float:
    """Return calories consumed as a percentage of the goal, capped at 100."""
    if not daily_goal or daily_goal <= 0:
        return 0.0
    return min(daily.daily_totals.calories / daily_goal * 100, 100.0)


def daily_progress(daily: DailyMeals, targets: NutritionTargets) -> DailyProgress:
    """Measure a day's totals against the targets.

    Macro calories use 4 kcal/g for protein and carbs and 9 kcal/g for fat.
    """
    totals = daily.daily_totals
    calorie_target = targets.calories or 0
    return DailyProgress(
        calories=CalorieProgress(
            consumed=totals.calories,
            target=calorie_target,
            remaining=max(0.0, calorie_target - totals.calories),
            percentage=percent_of(totals.calories, calorie_target),
        ),
        protein=_macro_progress("protein", totals.protein, targets.protein),
        carbs=_macro_progress("carbs", totals.carbs, targets.carbs),
        fat=_macro_progress("fat", totals.fat, targets.fat),
        fiber_consumed=totals.fiber,
        fiber_recommended=targets.fiber or 0,
        sugar_consumed=totals.sugar,
        sugar_limit=targets.sugar or 0,
    )


def _macro_progress(
    nutrient: str, consumed: float, target: float | None
) -> MacroProgress:
    return MacroProgress(
        consumed=consumed,
        target=target or 0,
        calories=consumed * CALORIES_PER_GRAM[nutrient],
        percentage=percent_of(consumed, target),
    )
