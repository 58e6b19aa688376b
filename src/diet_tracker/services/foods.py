"""Services for the food catalog."""

import logging
import math
from dataclasses import dataclass, replace
from typing import Protocol
from uuid import uuid4

from diet_tracker.dates import Clock, utc_now
from diet_tracker.domain.foods import BaseUnit, Food, FoodCategory, FoodDraft
from diet_tracker.domain.nutrition import NUTRIENT_FIELDS, NutritionalValues
from diet_tracker.errors import AccessDenied, InvalidInput, RecordNotFound
from diet_tracker.services.nutrition import calculate_nutrition, validate_quantity
from diet_tracker.services.users import require_user_id

_logger = logging.getLogger(__name__)

_UPDATABLE_FIELDS = frozenset(
    {
        "name",
        "brand",
        "category",
        "nutrition",
        "base_unit",
        "available_units",
        "default_unit",
        "is_public",
    }
)


class FoodRepository(Protocol):
    """Persistence interface for foods."""

    def save_food(self, food: Food) -> None:
        """Insert or replace a food document."""

    def get_food(self, food_id: str) -> Food | None:
        """Return a food by id, if present."""

    def list_default_foods(self) -> list[Food]:
        """Return the built-in catalog foods."""

    def list_user_foods(self, user_id: str) -> list[Food]:
        """Return custom foods owned by a user."""

    def list_public_foods(self) -> list[Food]:
        """Return custom foods shared publicly."""

    def delete_food(self, food_id: str) -> None:
        """Delete a food document."""


@dataclass
class FoodCatalogService:
    """Application service for browsing and maintaining foods."""

    repository: FoodRepository
    clock: Clock = utc_now

    def list_foods(self, user_id: str) -> list[Food]:
        """Return catalog foods, the user's own foods and other users' public foods."""
        require_user_id(user_id)
        foods = list(self.repository.list_default_foods())
        foods.extend(self.repository.list_user_foods(user_id))
        seen = {food.id for food in foods}
        for food in self.repository.list_public_foods():
            if food.user_id != user_id and food.id not in seen:
                foods.append(food)
                seen.add(food.id)
        return foods

    def get_food(self, user_id: str, food_id: str) -> Food:
        """Return a food visible to the user."""
        require_user_id(user_id)
        food = self.repository.get_food(food_id)
        if food is None or not is_visible(food, user_id):
            raise RecordNotFound("foods", food_id)
        return food

    def foods_by_category(self, user_id: str, category: FoodCategory) -> list[Food]:
        """Return visible foods in a category."""
        return [food for food in self.list_foods(user_id) if food.category == category]

    def search(self, user_id: str, term: str) -> list[Food]:
        """Return visible foods whose name or brand contains ``term``."""
        needle = term.strip().lower()
        return [
            food
            for food in self.list_foods(user_id)
            if needle in food.name.lower()
            or (food.brand is not None and needle in food.brand.lower())
        ]

    def add_custom_food(self, user_id: str, draft: FoodDraft) -> Food:
        """Register a custom food owned by the user."""
        require_user_id(user_id)
        now = self.clock()
        food = Food(
            id=str(uuid4()),
            name=draft.name.strip(),
            brand=draft.brand,
            category=draft.category,
            nutrition=draft.nutrition,
            base_unit=draft.base_unit,
            available_units=list(draft.available_units),
            default_unit=draft.default_unit,
            is_custom=True,
            is_public=draft.is_public,
            user_id=user_id,
            created_at=now,
            updated_at=now,
        )
        validate_food(food)
        self.repository.save_food(food)
        _logger.info("Created food %s for user %s", food.id, user_id)
        return food

    def update_custom_food(
        self, user_id: str, food_id: str, changes: dict[str, object]
    ) -> Food:
        """Apply partial changes to a food the user owns."""
        food = self._owned_food(user_id, food_id)
        unknown = set(changes) - _UPDATABLE_FIELDS
        if unknown:
            raise InvalidInput(f"Cannot update fields: {', '.join(sorted(unknown))}")
        updated = replace(food, **changes, updated_at=self.clock())
        if isinstance(updated.name, str):
            updated = replace(updated, name=updated.name.strip())
        validate_food(updated)
        self.repository.save_food(updated)
        return updated

    def delete_custom_food(self, user_id: str, food_id: str) -> None:
        """Delete a food the user owns."""
        self._owned_food(user_id, food_id)
        self.repository.delete_food(food_id)
        _logger.info("Deleted food %s for user %s", food_id, user_id)

    def calculate_nutrition(
        self, user_id: str, food_id: str, quantity: float, unit: str
    ) -> NutritionalValues:
        """Return the nutrition of a portion of a visible food."""
        food = self.get_food(user_id, food_id)
        return calculate_nutrition(food, validate_quantity(quantity), unit)

    def _owned_food(self, user_id: str, food_id: str) -> Food:
        food = self.get_food(user_id, food_id)
        if not food.is_custom or food.user_id != user_id:
            raise AccessDenied(f"Food {food_id} is not owned by the current user")
        return food


def is_visible(food: Food, user_id: str) -> bool:
    """Return True when the user may read the food."""
    return not food.is_custom or food.is_public or food.user_id == user_id


def validate_food(food: Food) -> None:
    """Check the invariants every stored food must satisfy."""
    if not isinstance(food.name, str) or not food.name.strip():
        raise InvalidInput("Food name is required")
    if not isinstance(food.category, FoodCategory):
        raise InvalidInput(f"Unknown food category: {food.category}")
    if not isinstance(food.base_unit, BaseUnit):
        raise InvalidInput(f"Unknown base unit: {food.base_unit}")
    if not isinstance(food.is_public, bool):
        raise InvalidInput("is_public must be true or false")
    if food.brand is not None and not isinstance(food.brand, str):
        raise InvalidInput("Brand must be text")
    if not food.available_units:
        raise InvalidInput("A food needs at least one unit")
    for unit in food.available_units:
        if not unit.abbreviation.strip():
            raise InvalidInput("Unit abbreviation is required")
        if math.isnan(unit.grams_equivalent) or unit.grams_equivalent <= 0:
            raise InvalidInput(
                f"Unit {unit.abbreviation} must have a positive grams equivalent"
            )
    base = food.find_unit(str(food.base_unit))
    if base is None or base.grams_equivalent != 1:
        raise InvalidInput(
            f"Base unit {food.base_unit} must be listed with grams equivalent 1"
        )
    if food.find_unit(food.default_unit) is None:
        raise InvalidInput(f"Default unit {food.default_unit} is not available")
    for field in NUTRIENT_FIELDS:
        if food.nutrition.get(field) < 0:
            raise InvalidInput(f"Nutrition value {field} cannot be negative")
