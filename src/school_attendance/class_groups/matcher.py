from __future__ import annotations

from datetime import date
from typing import Iterable, Optional

from ..common.datetime_utils import weekday_of
from .model import ClassGroup


def matches(group: ClassGroup, day: date) -> bool:
    """True iff one of the group's weekly slots falls on the weekday of `day`."""
    label = weekday_of(day)
    if label is None:
        return False
    return any(entry.day == label.value for entry in group.schedules)


def filter_for_date(groups: Iterable[ClassGroup], day: Optional[date]) -> list[ClassGroup]:
    """Groups in session on `day`; with no date selected nothing is filtered out."""
    if day is None:
        return list(groups)
    return [g for g in groups if matches(g, day)]
