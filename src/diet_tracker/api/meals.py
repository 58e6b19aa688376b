"""Meal log endpoints."""

from datetime import date
from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Query, Request, status

from diet_tracker.api.deps import current_user, get_container
from diet_tracker.api.schemas import MealRequest
from diet_tracker.domain.meals import DailyMeals, MealType
from diet_tracker.domain.models import AuthUser
from diet_tracker.services.meals import calorie_progress, daily_progress

if TYPE_CHECKING:
    from diet_tracker.containers import AppContainer

router = APIRouter(prefix="/meals", tags=["meals"])


def _day_response(
    container: "AppContainer",
    daily: DailyMeals,
    meal_type: MealType | None = None,
) -> dict[str, object]:
    targets = container.profile_service.resolve_targets(daily.user_id)
    response: dict[str, object] = {
        "day": daily,
        "calorie_goal": targets.calories,
        "calorie_progress": calorie_progress(daily, targets.calories),
        "progress": daily_progress(daily, targets),
    }
    if meal_type is not None:
        response["meals"] = container.meal_log_service.meals_by_type(
            daily.user_id, meal_type, daily.date
        )
    return response


@router.get("/today")
async def today(
    request: Request,
    meal_type: MealType | None = Query(default=None, alias="type"),
    user: AuthUser = Depends(current_user),
) -> dict[str, object]:
    """Return today's meals and totals, plus one meal type with ``type``."""
    container: AppContainer = get_container(request)
    daily = container.meal_log_service.get_day(user.id)
    return _day_response(container, daily, meal_type)


@router.get("/{day}")
async def meals_for_day(
    day: date,
    request: Request,
    meal_type: MealType | None = Query(default=None, alias="type"),
    user: AuthUser = Depends(current_user),
) -> dict[str, object]:
    """Return the meals logged on a date, plus one meal type with ``type``."""
    container: AppContainer = get_container(request)
    daily = container.meal_log_service.get_day(user.id, day)
    return _day_response(container, daily, meal_type)


@router.post("", status_code=status.HTTP_201_CREATED)
async def log_meal(
    payload: MealRequest, request: Request, user: AuthUser = Depends(current_user)
) -> dict[str, object]:
    """Log a meal and return the updated day."""
    container: AppContainer = get_container(request)
    daily = container.meal_log_service.add_meal(
        user.id,
        payload.type,
        [item.to_entry() for item in payload.items],
        name=payload.name,
        day=payload.day,
    )
    return _day_response(container, daily)


@router.put("/{meal_id}")
async def replace_meal(
    meal_id: str,
    payload: MealRequest,
    request: Request,
    user: AuthUser = Depends(current_user),
) -> dict[str, object]:
    """Replace a meal with a newly resolved one."""
    container: AppContainer = get_container(request)
    daily = container.meal_log_service.replace_meal(
        user.id,
        meal_id,
        payload.type,
        [item.to_entry() for item in payload.items],
        name=payload.name,
        day=payload.day,
    )
    return _day_response(container, daily)


@router.delete("/{meal_id}")
async def remove_meal(
    meal_id: str,
    request: Request,
    day: date | None = None,
    user: AuthUser = Depends(current_user),
) -> dict[str, object]:
    """Remove a meal and return the updated day."""
    container: AppContainer = get_container(request)
    daily = container.meal_log_service.remove_meal(user.id, meal_id, day)
    return _day_response(container, daily)
