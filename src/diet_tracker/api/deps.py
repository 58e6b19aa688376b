"""Shared FastAPI dependencies."""

from typing import TYPE_CHECKING

from fastapi import Header, Request

from diet_tracker.domain.models import AuthUser

if TYPE_CHECKING:
    from diet_tracker.containers import AppContainer

_BEARER_PREFIX = "bearer "


def get_container(request: Request) -> "AppContainer":
    """Return the dependency container attached to the app."""
    return request.app.state.container


def bearer_token(authorization: str | None) -> str | None:
    """Extract the token from an ``Authorization: Bearer`` header."""
    if not authorization or not authorization.lower().startswith(_BEARER_PREFIX):
        return None
    return authorization[len(_BEARER_PREFIX) :].strip() or None


async def current_user(
    request: Request, authorization: str | None = Header(default=None)
) -> AuthUser:
    """Resolve the signed-in user or raise ``NotAuthenticated``."""
    container = get_container(request)
    return container.identity_service.require_user(bearer_token(authorization))
