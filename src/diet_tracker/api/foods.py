"""Food catalog endpoints."""

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Request, status

from diet_tracker.api.deps import current_user, get_container
from diet_tracker.api.schemas import (
    FoodCreateRequest,
    FoodUpdateRequest,
    PortionRequest,
)
from diet_tracker.domain.foods import FoodCategory, FoodDraft
from diet_tracker.domain.models import AuthUser

if TYPE_CHECKING:
    from diet_tracker.containers import AppContainer

router = APIRouter(prefix="/foods", tags=["foods"])


@router.get("")
async def list_foods(
    request: Request,
    category: FoodCategory | None = None,
    search: str | None = None,
    user: AuthUser = Depends(current_user),
) -> dict[str, object]:
    """Return visible foods, optionally filtered by category or search term."""
    container: AppContainer = get_container(request)
    service = container.food_service
    if search:
        foods = service.search(user.id, search)
    elif category:
        foods = service.foods_by_category(user.id, category)
    else:
        foods = service.list_foods(user.id)
    if search and category:
        foods = [food for food in foods if food.category == category]
    return {"foods": foods}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_food(
    payload: FoodCreateRequest,
    request: Request,
    user: AuthUser = Depends(current_user),
) -> dict[str, object]:
    """Register a custom food."""
    container: AppContainer = get_container(request)
    draft = FoodDraft(
        name=payload.name,
        brand=payload.brand,
        category=payload.category,
        nutrition=payload.nutrition.to_domain(),
        base_unit=payload.base_unit,
        available_units=[unit.to_domain() for unit in payload.available_units],
        default_unit=payload.default_unit,
        is_public=payload.is_public,
    )
    return {"food": container.food_service.add_custom_food(user.id, draft)}


@router.get("/{food_id}")
async def get_food(
    food_id: str, request: Request, user: AuthUser = Depends(current_user)
) -> dict[str, object]:
    """Return one visible food."""
    container: AppContainer = get_container(request)
    return {"food": container.food_service.get_food(user.id, food_id)}


@router.patch("/{food_id}")
async def update_food(
    food_id: str,
    payload: FoodUpdateRequest,
    request: Request,
    user: AuthUser = Depends(current_user),
) -> dict[str, object]:
    """Update a custom food owned by the caller."""
    container: AppContainer = get_container(request)
    food = container.food_service.update_custom_food(
        user.id, food_id, payload.changes()
    )
    return {"food": food}


@router.delete("/{food_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_food(
    food_id: str, request: Request, user: AuthUser = Depends(current_user)
) -> None:
    """Delete a custom food owned by the caller."""
    container: AppContainer = get_container(request)
    container.food_service.delete_custom_food(user.id, food_id)


@router.post("/{food_id}/nutrition")
async def portion_nutrition(
    food_id: str,
    payload: PortionRequest,
    request: Request,
    user: AuthUser = Depends(current_user),
) -> dict[str, object]:
    """Return the nutrition of a portion of a food."""
    container: AppContainer = get_container(request)
    nutrition = container.food_service.calculate_nutrition(
        user.id, food_id, payload.quantity, payload.unit
    )
    return {"nutrition": nutrition}
