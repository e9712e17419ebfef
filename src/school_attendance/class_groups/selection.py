"""Roster selection being built in a create/edit dialog.

The value is owned by whoever opened the dialog and handed to the store only
on submit; nothing is written anywhere until then.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable, Optional, Sequence

from ..roster.model import StudentInfo
from .model import ClassGroup, ClassGroupInput, ScheduleEntry


@dataclass(frozen=True)
class PendingSelection:
    student_ids: tuple[str, ...] = ()
    search_query: str = ""
    group_filter: Optional[tuple[str, ...]] = None

    @classmethod
    def from_group(cls, group: ClassGroup) -> "PendingSelection":
        return cls(student_ids=tuple(group.student_ids))

    def is_selected(self, student_id: str) -> bool:
        return student_id in self.student_ids

    def toggle(self, student_id: str) -> "PendingSelection":
        if self.is_selected(student_id):
            return replace(self, student_ids=tuple(s for s in self.student_ids if s != student_id))
        return replace(self, student_ids=self.student_ids + (student_id,))

    def search(self, query: str) -> "PendingSelection":
        return replace(self, search_query=(query or "").strip())

    def filter_by_group(self, group: Optional[ClassGroup]) -> "PendingSelection":
        """Only show members of an existing class group (None clears the filter)."""
        return replace(self, group_filter=tuple(group.student_ids) if group else None)

    def visible(self, students: Sequence[StudentInfo]) -> list[StudentInfo]:
        query = self.search_query.lower()
        out = []
        for s in students:
            if self.group_filter is not None and s.id not in self.group_filter:
                continue
            if query and query not in (s.name or "").lower() and query not in s.email.lower():
                continue
            out.append(s)
        return out

    def all_visible_selected(self, students: Sequence[StudentInfo]) -> bool:
        shown = self.visible(students)
        return bool(shown) and all(self.is_selected(s.id) for s in shown)

    def toggle_all_visible(self, students: Sequence[StudentInfo]) -> "PendingSelection":
        """Select every visible student, or deselect them all if they already are."""
        shown = [s.id for s in self.visible(students)]
        if self.all_visible_selected(students):
            hidden = set(shown)
            return replace(self, student_ids=tuple(s for s in self.student_ids if s not in hidden))
        return replace(self, student_ids=tuple(dict.fromkeys(self.student_ids + tuple(shown))))

    def to_input(self, *, name: str, period_count: object, schedules: Iterable[ScheduleEntry]) -> ClassGroupInput:
        return ClassGroupInput(
            name=name,
            period_count=period_count,
            schedules=tuple(schedules),
            student_ids=self.student_ids,
        )


def resize_schedules(schedules: Sequence[ScheduleEntry], period_count: object) -> tuple[ScheduleEntry, ...]:
    """Grow/shrink the slot list to match a typed period count, keeping filled slots."""
    try:
        count = int(str(period_count).strip())
    except (TypeError, ValueError):
        return tuple(schedules)
    if count < 1:
        return tuple(schedules)
    current = list(schedules)[:count]
    current.extend(ScheduleEntry(day="", period="") for _ in range(count - len(current)))
    return tuple(current)
