"""Identity provider backed by Supabase Auth."""

import logging
from dataclasses import dataclass

from supabase import (
    AuthApiError,
    AuthInvalidCredentialsError,
    AuthSessionMissingError,
    Client,
)

from diet_tracker.domain.models import AuthUser
from diet_tracker.errors import PersistenceFailure
from diet_tracker.services.users import IdentityProvider

_logger = logging.getLogger(__name__)

_SERVER_ERROR = 500


@dataclass
class SupabaseIdentityProvider(IdentityProvider):
    """Resolves access tokens with the Supabase Auth API."""

    client: Client

    def get_user(self, access_token: str) -> AuthUser | None:
        """Return the user for a valid access token, otherwise None.

        Auth outages raise ``PersistenceFailure`` instead of rejecting the token.
        """
        try:
            response = self.client.auth.get_user(access_token)
        except AuthApiError as exc:
            if exc.status >= _SERVER_ERROR:
                _logger.exception("Supabase Auth failed to resolve a token")
                raise PersistenceFailure("Failed to resolve access token") from exc
            _logger.warning("Access token was rejected by Supabase Auth")
            return None
        except (AuthInvalidCredentialsError, AuthSessionMissingError):
            _logger.warning("Access token was rejected by Supabase Auth")
            return None
        except Exception as exc:
            _logger.exception("Supabase Auth is unreachable")
            raise PersistenceFailure("Failed to resolve access token") from exc
        user = response.user if response else None
        if user is None:
            return None
        metadata = user.user_metadata or {}
        display_name = metadata.get("display_name") or metadata.get("full_name")
        return AuthUser(id=str(user.id), email=user.email, display_name=display_name)
