"""Supabase repository for daily meal documents."""

from dataclasses import dataclass
from datetime import date

from supabase import Client

from diet_tracker.adapters.documents import decode_daily_meals, encode_daily_meals
from diet_tracker.adapters.supabase_support import execute
from diet_tracker.dates import date_key
from diet_tracker.domain.meals import DailyMeals, daily_meals_key
from diet_tracker.services.meals import DailyMealsRepository

_TABLE = "daily_meals"


@dataclass
class SupabaseDailyMealsRepository(DailyMealsRepository):
    """Supabase implementation for daily meals keyed by user and date."""

    client: Client

    def get_daily_meals(self, user_id: str, day: date) -> DailyMeals | None:
        """Return the document for a user's day, if present."""
        rows = execute(
            self.client.table(_TABLE)
            .select("*")
            .eq("id", daily_meals_key(user_id, day))
            .limit(1),
            "load daily meals",
        )
        if not rows:
            return None
        return decode_daily_meals(rows[0])

    def save_daily_meals(self, daily: DailyMeals) -> None:
        """Replace the whole document for a user's day."""
        execute(
            self.client.table(_TABLE).upsert(encode_daily_meals(daily)),
            "save daily meals",
        )

    def list_daily_meals(
        self, user_id: str, start: date, end: date
    ) -> list[DailyMeals]:
        """Return stored days between start and end inclusive, oldest first."""
        rows = execute(
            self.client.table(_TABLE)
            .select("*")
            .eq("user_id", user_id)
            .gte("date", date_key(start))
            .lte("date", date_key(end))
            .order("date"),
            "list daily meals",
        )
        return [decode_daily_meals(row) for row in rows]
