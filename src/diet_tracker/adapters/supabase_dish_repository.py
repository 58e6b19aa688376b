"""Supabase repository for dishes."""

from dataclasses import dataclass

from supabase import Client

from diet_tracker.adapters.documents import decode_dish, encode_dish
from diet_tracker.adapters.supabase_support import execute
from diet_tracker.domain.dishes import Dish
from diet_tracker.services.dishes import DishRepository

_TABLE = "dishes"


@dataclass
class SupabaseDishRepository(DishRepository):
    """Supabase implementation for dishes."""

    client: Client

    def save_dish(self, dish: Dish) -> None:
        """Insert or replace a dish row."""
        execute(self.client.table(_TABLE).upsert(encode_dish(dish)), "save dish")

    def get_dish(self, dish_id: str) -> Dish | None:
        """Return a dish by id, if present."""
        rows = execute(
            self.client.table(_TABLE).select("*").eq("id", dish_id).limit(1),
            "load dish",
        )
        if not rows:
            return None
        return decode_dish(rows[0])

    def list_user_dishes(self, user_id: str) -> list[Dish]:
        """Return dishes owned by a user, newest first."""
        rows = execute(
            self.client.table(_TABLE)
            .select("*")
            .eq("user_id", user_id)
            .order("created_at", desc=True),
            "list user dishes",
        )
        return [decode_dish(row) for row in rows]

    def list_public_dishes(self) -> list[Dish]:
        """Return public dishes, newest first."""
        rows = execute(
            self.client.table(_TABLE)
            .select("*")
            .eq("is_public", True)
            .order("created_at", desc=True),
            "list public dishes",
        )
        return [decode_dish(row) for row in rows]

    def delete_dish(self, dish_id: str) -> None:
        """Delete a dish row."""
        execute(self.client.table(_TABLE).delete().eq("id", dish_id), "delete dish")
