"""Profile and goal endpoints."""

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Request

from diet_tracker.api.deps import current_user, get_container
from diet_tracker.api.schemas import GoalsUpdateRequest, ProfileUpdateRequest
from diet_tracker.domain.models import AuthUser
from diet_tracker.domain.profiles import Profile
from diet_tracker.services.profiles import derive_goals

if TYPE_CHECKING:
    from diet_tracker.containers import AppContainer

router = APIRouter(prefix="/profile", tags=["profile"])


def _profile_response(profile: Profile) -> dict[str, object]:
    return {"profile": profile, "goals": derive_goals(profile)}


@router.get("")
async def get_profile(
    request: Request, user: AuthUser = Depends(current_user)
) -> dict[str, object]:
    """Return the caller's profile and derived goals."""
    container: AppContainer = get_container(request)
    profile = container.profile_service.get_profile(user.id, user.display_name)
    return _profile_response(profile)


@router.put("")
async def update_profile(
    payload: ProfileUpdateRequest,
    request: Request,
    user: AuthUser = Depends(current_user),
) -> dict[str, object]:
    """Merge body metrics and selections into the profile."""
    container: AppContainer = get_container(request)
    profile = container.profile_service.save_profile(
        user.id, payload.model_dump(exclude_unset=True)
    )
    return _profile_response(profile)


@router.put("/goals")
async def update_goals(
    payload: GoalsUpdateRequest,
    request: Request,
    user: AuthUser = Depends(current_user),
) -> dict[str, object]:
    """Store goal overrides."""
    container: AppContainer = get_container(request)
    profile = container.profile_service.update_goals(
        user.id,
        daily_goal=payload.daily_goal,
        macro_goals=payload.macro_overrides(),
        micro_goals=payload.micro_overrides(),
        hydration_goal=payload.hydration_goal,
    )
    return _profile_response(profile)
