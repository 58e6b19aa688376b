"""Dish composition service."""

import logging
from dataclasses import dataclass, replace
from typing import Protocol
from uuid import uuid4

from diet_tracker.dates import Clock, utc_now
from diet_tracker.domain.dishes import Dish, DishCategory, DishDraft, DishIngredient
from diet_tracker.domain.foods import Food
from diet_tracker.domain.nutrition import NutritionalValues
from diet_tracker.errors import AccessDenied, InvalidInput, RecordNotFound
from diet_tracker.services.foods import FoodCatalogService
from diet_tracker.services.nutrition import (
    calculate_nutrition,
    nutrition_per_serving,
    round_half_up,
    sum_nutrition,
    validate_quantity,
    validate_servings,
)
from diet_tracker.services.users import require_user_id

_logger = logging.getLogger(__name__)

_UPDATABLE_FIELDS = frozenset(
    {"name", "description", "category", "ingredients", "servings", "is_public"}
)


class DishRepository(Protocol):
    """Persistence interface for dishes."""

    def save_dish(self, dish: Dish) -> None:
        """Insert or replace a dish document."""

    def get_dish(self, dish_id: str) -> Dish | None:
        """Return a dish by id, if present."""

    def list_user_dishes(self, user_id: str) -> list[Dish]:
        """Return dishes owned by a user."""

    def list_public_dishes(self) -> list[Dish]:
        """Return dishes shared publicly."""

    def delete_dish(self, dish_id: str) -> None:
        """Delete a dish document."""


@dataclass
class DishService:
    """Application service for composing and maintaining dishes."""

    repository: DishRepository
    food_service: FoodCatalogService
    clock: Clock = utc_now

    def build_ingredient(
        self, user_id: str, food_id: str, quantity: float, unit: str
    ) -> DishIngredient:
        """Resolve a visible food and snapshot the nutrition of a portion."""
        food = self.food_service.get_food(user_id, food_id)
        return create_ingredient(food, quantity, unit)

    def list_dishes(self, user_id: str) -> list[Dish]:
        """Return the user's dishes followed by other users' public dishes."""
        require_user_id(user_id)
        dishes = list(self.repository.list_user_dishes(user_id))
        seen = {dish.id for dish in dishes}
        for dish in self.repository.list_public_dishes():
            if dish.id not in seen:
                dishes.append(dish)
                seen.add(dish.id)
        return dishes

    def get_dish(self, user_id: str, dish_id: str) -> Dish:
        """Return a dish visible to the user."""
        require_user_id(user_id)
        dish = self.repository.get_dish(dish_id)
        if dish is None or not (dish.is_public or dish.user_id == user_id):
            raise RecordNotFound("dishes", dish_id)
        return dish

    def user_dishes(self, user_id: str) -> list[Dish]:
        """Return only the dishes the user owns."""
        require_user_id(user_id)
        return list(self.repository.list_user_dishes(user_id))

    def dishes_by_category(self, user_id: str, category: DishCategory) -> list[Dish]:
        """Return visible dishes in a category."""
        return [dish for dish in self.list_dishes(user_id) if dish.category == category]

    def search(self, user_id: str, term: str) -> list[Dish]:
        """Return visible dishes whose name or description contains ``term``."""
        return [
            dish for dish in self.list_dishes(user_id) if dish_matches(dish, term)
        ]

    def add_dish(self, user_id: str, draft: DishDraft) -> Dish:
        """Validate, compute nutrition and persist a new dish."""
        require_user_id(user_id)
        _validate_dish_fields(draft)
        total, per_serving = compute_dish_nutrition(draft.ingredients, draft.servings)
        now = self.clock()
        description = (draft.description or "").strip() or None
        dish = Dish(
            id=str(uuid4()),
            name=draft.name.strip(),
            description=description,
            category=draft.category,
            ingredients=list(draft.ingredients),
            servings=draft.servings,
            total_nutrition=total,
            nutrition_per_serving=per_serving,
            user_id=user_id,
            is_public=draft.is_public,
            created_at=now,
            updated_at=now,
        )
        self.repository.save_dish(dish)
        _logger.info("Created dish %s for user %s", dish.id, user_id)
        return dish

    def update_dish(
        self, user_id: str, dish_id: str, changes: dict[str, object]
    ) -> Dish:
        """Apply partial changes, recomputing nutrition when needed."""
        dish = self._owned_dish(user_id, dish_id)
        unknown = set(changes) - _UPDATABLE_FIELDS
        if unknown:
            raise InvalidInput(f"Cannot update fields: {', '.join(sorted(unknown))}")
        updated = replace(dish, **changes, updated_at=self.clock())
        _validate_dish_fields(updated)
        updated = replace(updated, name=updated.name.strip())
        if "ingredients" in changes or "servings" in changes:
            total, per_serving = compute_dish_nutrition(
                updated.ingredients, updated.servings
            )
            updated = replace(
                updated, total_nutrition=total, nutrition_per_serving=per_serving
            )
        self.repository.save_dish(updated)
        return updated

    def delete_dish(self, user_id: str, dish_id: str) -> None:
        """Delete a dish the user owns."""
        self._owned_dish(user_id, dish_id)
        self.repository.delete_dish(dish_id)
        _logger.info("Deleted dish %s for user %s", dish_id, user_id)

    def _owned_dish(self, user_id: str, dish_id: str) -> Dish:
        dish = self.get_dish(user_id, dish_id)
        if dish.user_id != user_id:
            raise AccessDenied(f"Dish {dish_id} is not owned by the current user")
        return dish


def dish_matches(dish: Dish, term: str) -> bool:
    """Return True when the dish name or description contains ``term``."""
    needle = term.strip().lower()
    return needle in dish.name.lower() or (
        dish.description is not None and needle in dish.description.lower()
    )


def create_ingredient(food: Food, quantity: float, unit: str) -> DishIngredient:
    """Snapshot the nutrition of ``quantity`` ``unit`` of ``food``."""
    if not food.id or not food.name:
        raise InvalidInput("Invalid food")
    amount = validate_quantity(quantity)
    if not unit or not unit.strip():
        raise InvalidInput("Unit is required")
    nutrition = calculate_nutrition(food, amount, unit)
    return DishIngredient(
        food_id=food.id,
        food_name=food.name,
        quantity=round_half_up(amount, 1),
        unit=unit,
        nutrition=nutrition,
    )


def compute_dish_nutrition(
    ingredients: list[DishIngredient], servings: int
) -> tuple[NutritionalValues, NutritionalValues]:
    """Return the total and per-serving nutrition of a dish."""
    validate_servings(servings)
    total = sum_nutrition(ingredient.nutrition for ingredient in ingredients)
    return total, nutrition_per_serving(total, servings)


def _validate_dish_fields(dish: Dish | DishDraft) -> None:
    if not isinstance(dish.name, str) or not dish.name.strip():
        raise InvalidInput("Dish name is required")
    if not isinstance(dish.category, DishCategory):
        raise InvalidInput(f"Unknown dish category: {dish.category}")
    if not isinstance(dish.is_public, bool):
        raise InvalidInput("is_public must be true or false")
    if dish.description is not None and not isinstance(dish.description, str):
        raise InvalidInput("Description must be text")
    if not dish.ingredients:
        raise InvalidInput("At least one ingredient is required")
    validate_servings(dish.servings)
