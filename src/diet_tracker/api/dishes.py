"""Dish endpoints."""

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Request, status

from diet_tracker.api.deps import current_user, get_container
from diet_tracker.api.schemas import (
    DishCreateRequest,
    DishUpdateRequest,
    IngredientRequest,
)
from diet_tracker.domain.dishes import DishCategory, DishDraft, DishIngredient
from diet_tracker.domain.models import AuthUser
from diet_tracker.services.dishes import dish_matches

if TYPE_CHECKING:
    from diet_tracker.containers import AppContainer

router = APIRouter(prefix="/dishes", tags=["dishes"])


def _ingredients(
    container: "AppContainer", user_id: str, requested: list[IngredientRequest]
) -> list[DishIngredient]:
    return [
        container.dish_service.build_ingredient(
            user_id, item.food_id, item.quantity, item.unit
        )
        for item in requested
    ]


@router.get("")
async def list_dishes(
    request: Request,
    category: DishCategory | None = None,
    search: str | None = None,
    mine: bool = False,
    user: AuthUser = Depends(current_user),
) -> dict[str, object]:
    """Return visible dishes, or only the caller's with ``mine``."""
    container: AppContainer = get_container(request)
    service = container.dish_service
    if mine:
        dishes = service.user_dishes(user.id)
    elif search:
        dishes = service.search(user.id, search)
    else:
        dishes = service.list_dishes(user.id)
    if category:
        dishes = [dish for dish in dishes if dish.category == category]
    if mine and search:
        dishes = [dish for dish in dishes if dish_matches(dish, search)]
    return {"dishes": dishes}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_dish(
    payload: DishCreateRequest,
    request: Request,
    user: AuthUser = Depends(current_user),
) -> dict[str, object]:
    """Compose a dish from foods."""
    container: AppContainer = get_container(request)
    draft = DishDraft(
        name=payload.name,
        description=payload.description,
        category=payload.category,
        ingredients=_ingredients(container, user.id, payload.ingredients),
        servings=payload.servings,
        is_public=payload.is_public,
    )
    return {"dish": container.dish_service.add_dish(user.id, draft)}


@router.get("/{dish_id}")
async def get_dish(
    dish_id: str, request: Request, user: AuthUser = Depends(current_user)
) -> dict[str, object]:
    """Return one visible dish."""
    container: AppContainer = get_container(request)
    return {"dish": container.dish_service.get_dish(user.id, dish_id)}


@router.patch("/{dish_id}")
async def update_dish(
    dish_id: str,
    payload: DishUpdateRequest,
    request: Request,
    user: AuthUser = Depends(current_user),
) -> dict[str, object]:
    """Update a dish owned by the caller."""
    container: AppContainer = get_container(request)
    changes: dict[str, object] = payload.model_dump(exclude_unset=True)
    if payload.ingredients is not None:
        changes["ingredients"] = _ingredients(container, user.id, payload.ingredients)
    dish = container.dish_service.update_dish(user.id, dish_id, changes)
    return {"dish": dish}


@router.delete("/{dish_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_dish(
    dish_id: str, request: Request, user: AuthUser = Depends(current_user)
) -> None:
    """Delete a dish owned by the caller."""
    container: AppContainer = get_container(request)
    container.dish_service.delete_dish(user.id, dish_id)
