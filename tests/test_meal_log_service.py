"""Tests for meal logging and daily totals."""

from datetime import date

import pytest

from diet_tracker.domain.dishes import DishCategory, DishDraft
from diet_tracker.domain.meals import (
    CalorieProgress,
    DailyMeals,
    DishEntry,
    FoodEntry,
    ItemSource,
    MacroProgress,
    MealType,
)
from diet_tracker.domain.nutrition import NutritionalValues
from diet_tracker.domain.profiles import NutritionTargets
from diet_tracker.errors import InvalidInput, NotAuthenticated, RecordNotFound
from diet_tracker.services.dishes import DishService
from diet_tracker.services.meals import (
    MealLogService,
    calorie_progress,
    compute_daily_totals,
    daily_progress,
)
from tests.conftest import TODAY, USER_ID, InMemoryDailyMealsRepository


def _lunch() -> list[FoodEntry]:
    return [FoodEntry("chicken", 150, "g"), FoodEntry("rice", 100, "g")]


def test_get_day_synthesizes_empty_day(meal_log_service: MealLogService) -> None:
    daily = meal_log_service.get_day(USER_ID)

    assert daily.date == TODAY
    assert daily.meals == []
    assert daily.daily_totals.calories == 0


def test_today_uses_reference_timezone(meal_log_service: MealLogService) -> None:
    assert meal_log_service.today() == date(2024, 3, 15)


def test_add_meal_updates_daily_totals(
    meal_log_service: MealLogService,
    daily_meals_repository: InMemoryDailyMealsRepository,
) -> None:
    daily = meal_log_service.add_meal(USER_ID, MealType.LUNCH, _lunch())

    meal = daily.meals[0]
    assert meal.name == "Lunch"
    assert meal.totals.calories == 377.5
    assert [item.source for item in meal.items] == [ItemSource.FOOD] * 2
    assert daily.daily_totals.calories == 377.5
    assert daily_meals_repository.days[f"{USER_ID}_2024-03-15"] == daily


def test_add_meal_with_custom_name_and_date(meal_log_service: MealLogService) -> None:
    day = date(2024, 3, 10)

    daily = meal_log_service.add_meal(
        USER_ID,
        MealType.AFTERNOON_SNACK,
        [FoodEntry("milk", 1, "cup")],
        name=" Post-workout ",
        day=day,
    )

    assert daily.date == day
    assert daily.meals[0].name == "Post-workout"
    assert daily.daily_totals.water == 174


def test_default_meal_name_uses_label(meal_log_service: MealLogService) -> None:
    daily = meal_log_service.add_meal(
        USER_ID, MealType.MORNING_SNACK, [FoodEntry("rice", 50, "g")]
    )

    assert daily.meals[0].name == "Morning snack"


def test_meals_accumulate_in_day(meal_log_service: MealLogService) -> None:
    meal_log_service.add_meal(
        USER_ID, MealType.BREAKFAST, [FoodEntry("milk", 1, "cup")]
    )
    daily = meal_log_service.add_meal(USER_ID, MealType.LUNCH, _lunch())

    assert len(daily.meals) == 2
    assert daily.daily_totals.calories == 499.5


def test_add_meal_requires_entries(
    meal_log_service: MealLogService,
    daily_meals_repository: InMemoryDailyMealsRepository,
) -> None:
    with pytest.raises(InvalidInput):
        meal_log_service.add_meal(USER_ID, MealType.LUNCH, [])

    assert daily_meals_repository.saves == 0


def test_add_meal_requires_user(meal_log_service: MealLogService) -> None:
    with pytest.raises(NotAuthenticated):
        meal_log_service.add_meal("", MealType.LUNCH, _lunch())


def test_add_meal_rejects_bad_quantity(meal_log_service: MealLogService) -> None:
    with pytest.raises(InvalidInput):
        meal_log_service.add_meal(
            USER_ID, MealType.LUNCH, [FoodEntry("chicken", -10, "g")]
        )


def test_add_meal_with_dish_servings(
    meal_log_service: MealLogService, dish_service: DishService
) -> None:
    dish = dish_service.add_dish(
        USER_ID,
        DishDraft(
            name="Chicken and rice",
            category=DishCategory.LUNCH,
            ingredients=[
                dish_service.build_ingredient(USER_ID, "chicken", 150, "g"),
                dish_service.build_ingredient(USER_ID, "rice", 100, "g"),
            ],
            servings=2,
        ),
    )

    daily = meal_log_service.add_meal(
        USER_ID, MealType.DINNER, [DishEntry(dish.id, servings=1.5)]
    )

    item = daily.meals[0].items[0]
    assert item.source == ItemSource.DISH
    assert item.unit == "serving"
    assert item.quantity == 1.5
    assert item.nutrition.calories == 283.5
    assert daily.daily_totals.calories == 283.5


def test_remove_meal_recomputes_totals(meal_log_service: MealLogService) -> None:
    first = meal_log_service.add_meal(
        USER_ID, MealType.BREAKFAST, [FoodEntry("milk", 1, "cup")]
    )
    meal_log_service.add_meal(USER_ID, MealType.LUNCH, _lunch())

    daily = meal_log_service.remove_meal(USER_ID, first.meals[0].id)

    assert [meal.type for meal in daily.meals] == [MealType.LUNCH]
    assert daily.daily_totals.calories == 377.5
    assert daily.daily_totals.water == 0


def test_remove_unknown_meal(meal_log_service: MealLogService) -> None:
    with pytest.raises(RecordNotFound):
        meal_log_service.remove_meal(USER_ID, "missing")


def test_replace_meal_creates_new_meal(meal_log_service: MealLogService) -> None:
    original = meal_log_service.add_meal(USER_ID, MealType.LUNCH, _lunch()).meals[0]

    daily = meal_log_service.replace_meal(
        USER_ID, original.id, MealType.DINNER, [FoodEntry("rice", 200, "g")]
    )

    assert len(daily.meals) == 1
    assert daily.meals[0].id != original.id
    assert daily.meals[0].type == MealType.DINNER
    assert daily.daily_totals.calories == 260


def test_replace_unknown_meal(meal_log_service: MealLogService) -> None:
    with pytest.raises(RecordNotFound):
        meal_log_service.replace_meal(USER_ID, "missing", MealType.LUNCH, _lunch())


def test_meals_by_type(meal_log_service: MealLogService) -> None:
    meal_log_service.add_meal(
        USER_ID, MealType.BREAKFAST, [FoodEntry("milk", 1, "cup")]
    )
    meal_log_service.add_meal(USER_ID, MealType.LUNCH, _lunch())

    lunches = meal_log_service.meals_by_type(USER_ID, MealType.LUNCH)

    assert [meal.type for meal in lunches] == [MealType.LUNCH]


def test_daily_totals_recompute_is_idempotent(
    meal_log_service: MealLogService,
) -> None:
    meal_log_service.add_meal(
        USER_ID, MealType.BREAKFAST, [FoodEntry("milk", 1, "cup")]
    )
    daily = meal_log_service.add_meal(USER_ID, MealType.LUNCH, _lunch())

    assert compute_daily_totals(daily.meals) == compute_daily_totals(daily.meals)
    assert compute_daily_totals(daily.meals) == daily.daily_totals


def test_calorie_progress() -> None:
    empty = DailyMeals(user_id=USER_ID, date=TODAY)

    assert calorie_progress(empty, 2000) == 0
    assert calorie_progress(empty, None) == 0


def test_calorie_progress_is_capped(meal_log_service: MealLogService) -> None:
    daily = meal_log_service.add_meal(USER_ID, MealType.LUNCH, _lunch())

    assert calorie_progress(daily, 755) == 50
    assert calorie_progress(daily, 100) == 100
    assert calorie_progress(daily, 0) == 0


def _day_with(**totals: float) -> DailyMeals:
    return DailyMeals(
        user_id=USER_ID, date=TODAY, daily_totals=NutritionalValues(**totals)
    )


def test_daily_progress_against_targets() -> None:
    targets = NutritionTargets(
        calories=2000, protein=125, carbs=250, fat=50, fiber=25, sugar=50
    )
    daily = _day_with(
        calories=1500, protein=100, carbs=150, fat=50, fiber=20, sugar=30
    )

    progress = daily_progress(daily, targets)

    assert progress.calories == CalorieProgress(
        consumed=1500, target=2000, remaining=500, percentage=75
    )
    assert progress.protein == MacroProgress(
        consumed=100, target=125, calories=400, percentage=pytest.approx(80)
    )
    assert progress.carbs.calories == 600
    assert progress.carbs.percentage == pytest.approx(60)
    assert progress.fat.calories == 450
    assert progress.fat.percentage == 100
    assert (progress.fiber_consumed, progress.fiber_recommended) == (20, 25)
    assert (progress.sugar_consumed, progress.sugar_limit) == (30, 50)


def test_daily_progress_over_target_has_no_remaining_calories() -> None:
    targets = NutritionTargets(calories=2000, protein=None, carbs=0, fat=50, fiber=25)

    progress = daily_progress(_day_with(calories=2500, protein=40), targets)

    assert progress.calories.remaining == 0
    assert progress.calories.percentage == 125
    assert progress.protein.target == 0
    assert progress.protein.percentage == 0
    assert progress.carbs.percentage == 0
    assert progress.sugar_limit == 0
