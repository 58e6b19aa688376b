"""History aggregation over daily meal documents."""

from dataclasses import dataclass
from datetime import date
from typing import Literal

from diet_tracker.dates import (
    Clock,
    date_range,
    last_days,
    month_bounds,
    today_in,
    utc_now,
    week_bounds,
)
from diet_tracker.domain.history import (
    DayStats,
    GoalPercentages,
    HistoryReport,
    HistoryStats,
)
from diet_tracker.domain.meals import DailyMeals
from diet_tracker.domain.nutrition import ZERO_NUTRITION
from diet_tracker.domain.profiles import NutritionTargets
from diet_tracker.errors import InvalidInput
from diet_tracker.services.meals import DailyMealsRepository
from diet_tracker.services.nutrition import percent_of, round_half_up
from diet_tracker.services.profiles import ProfileService
from diet_tracker.services.users import require_user_id

Period = Literal["week", "month"]


@dataclass
class HistoryService:
    """Service for replaying daily totals against the user's goals."""

    repository: DailyMealsRepository
    profile_service: ProfileService
    timezone_name: str
    clock: Clock = utc_now
    max_days: int = 366

    def load_history(self, user_id: str, days: int = 30) -> HistoryReport:
        """Return stats for the last ``days`` calendar days, oldest first."""
        require_user_id(user_id)
        if days < 1:
            raise InvalidInput("History needs at least one day")
        if days > self.max_days:
            raise InvalidInput(f"History covers at most {self.max_days} days")
        today = today_in(self.timezone_name, self.clock)
        return self._report(user_id, last_days(today, days))

    def load_period(self, user_id: str, period: Period) -> HistoryReport:
        """Return stats for the current week or month up to today."""
        require_user_id(user_id)
        today = today_in(self.timezone_name, self.clock)
        if period == "week":
            start, end = week_bounds(today)
        elif period == "month":
            start, end = month_bounds(today)
        else:
            raise InvalidInput(f"Unknown period: {period}")
        return self._report(user_id, date_range(start, min(end, today)))

    def _report(self, user_id: str, days: list[date]) -> HistoryReport:
        targets = self.profile_service.resolve_targets(user_id)
        stored = {
            daily.date: daily
            for daily in self.repository.list_daily_meals(user_id, days[0], days[-1])
        }
        return build_report(user_id, days, stored, targets)


def build_report(
    user_id: str,
    days: list[date],
    stored: dict[date, DailyMeals],
    targets: NutritionTargets,
) -> HistoryReport:
    """Build day stats, synthesizing empty days, and aggregate them."""
    day_stats = []
    for day in days:
        daily = stored.get(day) or DailyMeals(user_id=user_id, date=day)
        day_stats.append(day_stats_for(daily, targets))
    return HistoryReport(days=day_stats, stats=summarize(day_stats))


def day_stats_for(daily: DailyMeals, targets: NutritionTargets) -> DayStats:
    """Grade one day against the targets."""
    consumed = daily.daily_totals if daily.meals else ZERO_NUTRITION
    return DayStats(
        date=daily.date,
        consumed=consumed,
        goals=targets,
        percentages=GoalPercentages(
            calories=percent_of(consumed.calories, targets.calories),
            protein=percent_of(consumed.protein, targets.protein),
            carbs=percent_of(consumed.carbs, targets.carbs),
            fat=percent_of(consumed.fat, targets.fat),
            fiber=percent_of(consumed.fiber, targets.fiber),
        ),
        meals_count=len(daily.meals),
    )


def summarize(days: list[DayStats]) -> HistoryStats | None:
    """Average over logged days and count the streak ending at the last day."""
    if not days:
        return None
    logged = [day for day in days if day.meals_count > 0]
    streak = 0
    for day in reversed(days):
        if day.meals_count == 0:
            break
        streak += 1
    if not logged:
        return HistoryStats(0, 0, 0, 0, 0, 0, len(days), 0)
    count = len(logged)
    return HistoryStats(
        average_calories=round_half_up(
            sum(day.consumed.calories for day in logged) / count
        ),
        average_protein=round_half_up(
            sum(day.consumed.protein for day in logged) / count, 1
        ),
        average_carbs=round_half_up(
            sum(day.consumed.carbs for day in logged) / count, 1
        ),
        average_fat=round_half_up(sum(day.consumed.fat for day in logged) / count, 1),
        average_fiber=round_half_up(
            sum(day.consumed.fiber for day in logged) / count, 1
        ),
        days_with_data=count,
        total_days=len(days),
        streak=streak,
    )
