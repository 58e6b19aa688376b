"""History endpoints."""

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Request

from diet_tracker.api.deps import current_user, get_container
from diet_tracker.domain.history import HistoryReport
from diet_tracker.domain.models import AuthUser

if TYPE_CHECKING:
    from diet_tracker.containers import AppContainer

router = APIRouter(prefix="/history", tags=["history"])


def _report_response(report: HistoryReport) -> dict[str, object]:
    return {"days": report.days, "stats": report.stats}


@router.get("")
async def history(
    request: Request,
    days: int | None = None,
    user: AuthUser = Depends(current_user),
) -> dict[str, object]:
    """Return daily stats for the last ``days`` days."""
    container: AppContainer = get_container(request)
    window = days if days is not None else container.settings.history_days
    return _report_response(container.history_service.load_history(user.id, window))


@router.get("/week")
async def current_week(
    request: Request, user: AuthUser = Depends(current_user)
) -> dict[str, object]:
    """Return stats for the current week so far."""
    container: AppContainer = get_container(request)
    return _report_response(container.history_service.load_period(user.id, "week"))


@router.get("/month")
async def current_month(
    request: Request, user: AuthUser = Depends(current_user)
) -> dict[str, object]:
    """Return stats for the current month so far."""
    container: AppContainer = get_container(request)
    return _report_response(container.history_service.load_period(user.id, "month"))
