"""Supabase repository for foods."""

from dataclasses import dataclass

from supabase import Client

from diet_tracker.adapters.documents import decode_food, encode_food
from diet_tracker.adapters.supabase_support import execute
from diet_tracker.domain.foods import Food
from diet_tracker.services.foods import FoodRepository

_TABLE = "foods"


@dataclass
class SupabaseFoodRepository(FoodRepository):
    """Supabase implementation for foods."""

    client: Client

    def save_food(self, food: Food) -> None:
        """Insert or replace a food row."""
        execute(self.client.table(_TABLE).upsert(encode_food(food)), "save food")

    def get_food(self, food_id: str) -> Food | None:
        """Return a food by id, if present."""
        rows = execute(
            self.client.table(_TABLE).select("*").eq("id", food_id).limit(1),
            "load food",
        )
        if not rows:
            return None
        return decode_food(rows[0])

    def list_default_foods(self) -> list[Food]:
        """Return the built-in catalog ordered by name."""
        rows = execute(
            self.client.table(_TABLE).select("*").eq("is_custom", False).order("name"),
            "list default foods",
        )
        return [decode_food(row) for row in rows]

    def list_user_foods(self, user_id: str) -> list[Food]:
        """Return custom foods owned by a user."""
        rows = execute(
            self.client.table(_TABLE)
            .select("*")
            .eq("is_custom", True)
            .eq("user_id", user_id)
            .order("name"),
            "list user foods",
        )
        return [decode_food(row) for row in rows]

    def list_public_foods(self) -> list[Food]:
        """Return public custom foods."""
        rows = execute(
            self.client.table(_TABLE)
            .select("*")
            .eq("is_custom", True)
            .eq("is_public", True)
            .order("name"),
            "list public foods",
        )
        return [decode_food(row) for row in rows]

    def delete_food(self, food_id: str) -> None:
        """Delete a food row."""
        execute(self.client.table(_TABLE).delete().eq("id", food_id), "delete food")
