"""Identity resolution against the hosted authentication provider."""

import logging
from dataclasses import dataclass
from typing import Protocol

from diet_tracker.domain.models import AuthUser
from diet_tracker.errors import NotAuthenticated

_logger = logging.getLogger(__name__)


class IdentityProvider(Protocol):
    """Interface for the hosted authentication provider."""

    def get_user(self, access_token: str) -> AuthUser | None:
        """Return the user an access token belongs to, if it is valid."""


@dataclass
class IdentityService:
    """Application service that turns access tokens into users."""

    provider: IdentityProvider

    def resolve(self, access_token: str | None) -> AuthUser | None:
        """Return the signed-in user, or None for a missing or rejected token."""
        if not access_token:
            return None
        return self.provider.get_user(access_token)

    def require_user(self, access_token: str | None) -> AuthUser:
        """Return the signed-in user or raise ``NotAuthenticated``."""
        user = self.resolve(access_token)
        if user is None:
            _logger.info("Rejected request without a valid access token")
            raise NotAuthenticated("Sign in to continue")
        return user


def require_user_id(user_id: str | None) -> str:
    """Return ``user_id`` or raise when no user is signed in."""
    if not user_id:
        raise NotAuthenticated("Sign in to continue")
    return user_id
