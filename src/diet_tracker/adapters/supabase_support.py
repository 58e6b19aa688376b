"""Shared helpers for Supabase repositories."""

import logging
from typing import Any, Protocol

from diet_tracker.errors import PersistenceFailure

_logger = logging.getLogger(__name__)


class _Executable(Protocol):
    def execute(self) -> Any: ...


def execute(query: _Executable, description: str) -> list[dict[str, Any]]:
    """Run a query builder and return its rows, wrapping SDK failures."""
    try:
        response = query.execute()
    except Exception as exc:
        _logger.exception("Supabase call failed: %s", description)
        raise PersistenceFailure(f"Failed to {description}") from exc
    return response.data or []
