"""Domain models for the diet tracker."""

from dataclasses import dataclass


@dataclass(frozen=True)
class AuthUser:
    """Identity issued by the hosted authentication provider."""

    id: str
    email: str | None
    display_name: str | None
