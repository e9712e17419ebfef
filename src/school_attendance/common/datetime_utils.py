from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Optional

from ..core.constants import WEEKDAY_BY_INDEX, WEEKDAY_FULL_NAMES
from ..core.enums import Weekday
from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD (or an ISO datetime such as 2024-03-04T00:00:00.000Z) into a date.

    Only the calendar part is kept; attendance is recorded per day.
    """
    raw = (value or "").strip()
    try:
        return datetime.strptime(raw[:10], "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError("날짜 형식이 올바르지 않습니다. (YYYY-MM-DD)", field="date")


def weekday_of(day: date) -> Optional[Weekday]:
    """Weekday label used by schedules, or None for Saturday/Sunday."""
    return WEEKDAY_BY_INDEX.get(day.weekday())


def weekday_name(day: date) -> str:
    return WEEKDAY_FULL_NAMES[day.weekday()]


def previous_day(day: date) -> date:
    return day - timedelta(days=1)


def next_day(day: date) -> date:
    return day + timedelta(days=1)


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()
