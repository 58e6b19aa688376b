"""Tests for the food catalog service."""

from dataclasses import replace

import pytest

from diet_tracker.domain.foods import BaseUnit, FoodCategory, FoodDraft, FoodUnit
from diet_tracker.domain.nutrition import NutritionalValues
from diet_tracker.errors import (
    AccessDenied,
    InvalidInput,
    NotAuthenticated,
    RecordNotFound,
    UnitNotFound,
)
from diet_tracker.services.foods import FoodCatalogService, validate_food
from tests.conftest import (
    NOW,
    OTHER_USER_ID,
    USER_ID,
    InMemoryFoodRepository,
    make_food,
)


def _draft(**overrides: object) -> FoodDraft:
    values: dict[str, object] = {
        "name": "  Granola  ",
        "category": FoodCategory.GRAINS,
        "nutrition": NutritionalValues(calories=450, protein=10, carbs=60, fat=18),
        "base_unit": BaseUnit.GRAM,
        "available_units": [FoodUnit("gram", "g", 1), FoodUnit("cup", "cup", 60)],
        "default_unit": "cup",
        "brand": "Acme",
    }
    values.update(overrides)
    return FoodDraft(**values)


def test_add_custom_food_sets_owner(
    food_service: FoodCatalogService, food_repository: InMemoryFoodRepository
) -> None:
    food = food_service.add_custom_food(USER_ID, _draft())

    assert food.name == "Granola"
    assert food.is_custom is True
    assert food.is_public is False
    assert food.user_id == USER_ID
    assert food.created_at == NOW
    assert food_repository.foods[food.id] == food


def test_add_custom_food_requires_user(food_service: FoodCatalogService) -> None:
    with pytest.raises(NotAuthenticated):
        food_service.add_custom_food("", _draft())


@pytest.mark.parametrize(
    "overrides",
    [
        {"name": "   "},
        {"available_units": []},
        {"available_units": [FoodUnit("cup", "cup", 60)]},
        {"available_units": [FoodUnit("gram", "g", 1), FoodUnit("cup", "cup", 0)]},
        {"default_unit": "slice"},
        {"nutrition": NutritionalValues(calories=-1)},
    ],
)
def test_add_custom_food_validates(
    food_service: FoodCatalogService,
    food_repository: InMemoryFoodRepository,
    overrides: dict[str, object],
) -> None:
    before = dict(food_repository.foods)

    with pytest.raises(InvalidInput):
        food_service.add_custom_food(USER_ID, _draft(**overrides))

    assert food_repository.foods == before


def test_list_foods_visibility(
    food_service: FoodCatalogService, food_repository: InMemoryFoodRepository
) -> None:
    mine = food_service.add_custom_food(USER_ID, _draft(name="Mine"))
    shared = food_service.add_custom_food(
        OTHER_USER_ID, _draft(name="Shared", is_public=True)
    )
    hidden = food_service.add_custom_food(OTHER_USER_ID, _draft(name="Hidden"))

    ids = [food.id for food in food_service.list_foods(USER_ID)]

    assert {"chicken", "rice", "milk", mine.id, shared.id} == set(ids)
    assert hidden.id not in ids
    assert len(ids) == len(set(ids))


def test_own_public_food_listed_once(food_service: FoodCatalogService) -> None:
    mine = food_service.add_custom_food(USER_ID, _draft(is_public=True))

    ids = [food.id for food in food_service.list_foods(USER_ID)]

    assert ids.count(mine.id) == 1


def test_get_food_hides_private_foods(food_service: FoodCatalogService) -> None:
    hidden = food_service.add_custom_food(OTHER_USER_ID, _draft())

    with pytest.raises(RecordNotFound):
        food_service.get_food(USER_ID, hidden.id)
    with pytest.raises(RecordNotFound):
        food_service.get_food(USER_ID, "missing")


def test_foods_by_category_and_search(food_service: FoodCatalogService) -> None:
    food_service.add_custom_food(USER_ID, _draft())

    carbs = food_service.foods_by_category(USER_ID, FoodCategory.CARBS)
    by_name = food_service.search(USER_ID, "CHICKEN")
    by_brand = food_service.search(USER_ID, "acme")

    assert [food.id for food in carbs] == ["rice"]
    assert [food.id for food in by_name] == ["chicken"]
    assert [food.name for food in by_brand] == ["Granola"]


def test_update_custom_food(food_service: FoodCatalogService) -> None:
    food = food_service.add_custom_food(USER_ID, _draft())

    updated = food_service.update_custom_food(
        USER_ID, food.id, {"name": " Crunchy Granola ", "is_public": True}
    )

    assert updated.name == "Crunchy Granola"
    assert updated.is_public is True
    assert updated.nutrition == food.nutrition


def test_update_rejects_unknown_fields(food_service: FoodCatalogService) -> None:
    food = food_service.add_custom_food(USER_ID, _draft())

    with pytest.raises(InvalidInput):
        food_service.update_custom_food(USER_ID, food.id, {"user_id": OTHER_USER_ID})


def test_public_food_is_not_writable_by_others(
    food_service: FoodCatalogService,
) -> None:
    shared = food_service.add_custom_food(OTHER_USER_ID, _draft(is_public=True))

    with pytest.raises(AccessDenied):
        food_service.update_custom_food(USER_ID, shared.id, {"name": "Stolen"})
    with pytest.raises(AccessDenied):
        food_service.delete_custom_food(USER_ID, shared.id)


def test_default_foods_are_not_writable(food_service: FoodCatalogService) -> None:
    with pytest.raises(AccessDenied):
        food_service.delete_custom_food(USER_ID, "chicken")


def test_delete_custom_food(
    food_service: FoodCatalogService, food_repository: InMemoryFoodRepository
) -> None:
    food = food_service.add_custom_food(USER_ID, _draft())

    food_service.delete_custom_food(USER_ID, food.id)

    assert food_repository.deleted == [food.id]
    assert food.id not in food_repository.foods


def test_calculate_nutrition_for_visible_food(
    food_service: FoodCatalogService,
) -> None:
    nutrition = food_service.calculate_nutrition(USER_ID, "chicken", 150, "g")

    assert nutrition.calories == 247.5


def test_calculate_nutrition_validates_inputs(
    food_service: FoodCatalogService,
) -> None:
    with pytest.raises(InvalidInput):
        food_service.calculate_nutrition(USER_ID, "chicken", 0, "g")
    with pytest.raises(UnitNotFound):
        food_service.calculate_nutrition(USER_ID, "chicken", 1, "cup")


def test_validate_food_requires_base_unit_of_one() -> None:
    food = make_food(units=[FoodUnit("gram", "g", 2)])

    with pytest.raises(InvalidInput):
        validate_food(food)
    validate_food(replace(food, available_units=[FoodUnit("gram", "g", 1)]))


@pytest.mark.parametrize(
    "changes",
    [
        {"category": None},
        {"is_public": None},
        {"base_unit": None},
        {"name": None},
        {"category": "snacks"},
        {"is_public": "yes"},
    ],
)
def test_update_rejects_values_that_cannot_be_stored(
    food_service: FoodCatalogService,
    food_repository: InMemoryFoodRepository,
    changes: dict[str, object],
) -> None:
    food = food_service.add_custom_food(USER_ID, _draft())

    with pytest.raises(InvalidInput):
        food_service.update_custom_food(USER_ID, food.id, changes)
    assert food_repository.foods[food.id] == food


def test_update_can_clear_brand(food_service: FoodCatalogService) -> None:
    food = food_service.add_custom_food(USER_ID, _draft())

    updated = food_service.update_custom_food(USER_ID, food.id, {"brand": None})

    assert updated.brand is None
    assert updated.category == FoodCategory.GRAINS
