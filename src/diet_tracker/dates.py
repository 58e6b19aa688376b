"""Calendar helpers pinned to the reference timezone.

Every "today" in the application is the calendar date in a single fixed
timezone, and every stored date key is a ``YYYY-MM-DD`` string.
"""

from collections.abc import Callable
from datetime import UTC, date, datetime, timedelta
from zoneinfo import ZoneInfo

DECEMBER = 12

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Return the current time in UTC."""
    return datetime.now(tz=UTC)


def today_in(timezone_name: str, clock: Clock = utc_now) -> date:
    """Return the current calendar date in the given timezone."""
    return clock().astimezone(ZoneInfo(timezone_name)).date()


def date_key(day: date) -> str:
    """Format a date as a ``YYYY-MM-DD`` key."""
    return day.isoformat()


def last_days(today: date, days: int) -> list[date]:
    """Return the last ``days`` dates ending today, oldest first."""
    return [today - timedelta(days=offset) for offset in range(days - 1, -1, -1)]


def date_range(start: date, end: date) -> list[date]:
    """Return every date from start to end inclusive."""
    return [start + timedelta(days=offset) for offset in range((end - start).days + 1)]


def week_bounds(day: date) -> tuple[date, date]:
    """Return the Monday and Sunday of the week containing ``day``."""
    start = day - timedelta(days=day.weekday())
    return start, start + timedelta(days=6)


def month_bounds(day: date) -> tuple[date, date]:
    """Return the first and last date of the month containing ``day``."""
    start = day.replace(day=1)
    if start.month == DECEMBER:
        following = start.replace(year=start.year + 1, month=1)
    else:
        following = start.replace(month=start.month + 1)
    return start, following - timedelta(days=1)
