"""Tests for identity resolution."""

import pytest

from diet_tracker.api.deps import bearer_token
from diet_tracker.errors import NotAuthenticated
from diet_tracker.services.users import IdentityService, require_user_id
from tests.conftest import TOKEN, USER_ID, FakeIdentityProvider


def test_require_user_returns_identity() -> None:
    service = IdentityService(FakeIdentityProvider())

    user = service.require_user(TOKEN)

    assert user.id == USER_ID
    assert user.display_name == "Ana"


@pytest.mark.parametrize("token", [None, "", "unknown"])
def test_require_user_rejects_missing_or_invalid_tokens(token: str | None) -> None:
    service = IdentityService(FakeIdentityProvider())

    assert service.resolve(token) is None
    with pytest.raises(NotAuthenticated):
        service.require_user(token)


def test_require_user_id() -> None:
    assert require_user_id(USER_ID) == USER_ID
    with pytest.raises(NotAuthenticated):
        require_user_id(None)


@pytest.mark.parametrize(
    ("header", "expected"),
    [
        ("Bearer abc", "abc"),
        ("bearer  abc ", "abc"),
        ("Bearer ", None),
        ("Token abc", None),
        (None, None),
    ],
)
def test_bearer_token(header: str | None, expected: str | None) -> None:
    assert bearer_token(header) == expected
