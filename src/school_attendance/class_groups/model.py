from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional, Sequence

from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class ScheduleEntry:
    """One weekly slot: day label (월..금) and period ("1".."10")."""

    day: str
    period: str

    @classmethod
    def from_payload(cls, raw: Any) -> "ScheduleEntry":
        if isinstance(raw, ScheduleEntry):
            return raw
        if not isinstance(raw, dict):
            return cls(day="", period="")
        day = raw.get("day")
        period = raw.get("period")
        return cls(
            day=str(day).strip() if day is not None else "",
            period=str(period).strip() if period is not None else "",
        )

    def to_dict(self) -> dict:
        return {"day": self.day, "period": self.period}


@dataclass(frozen=True)
class ClassGroup:
    """A named subdivision of a course with a weekly pattern.

    period_count is kept as text, as submitted.
    """

    class_group_id: int
    course_id: int
    teacher_id: int
    name: str
    period_count: Optional[str]
    schedules: tuple[ScheduleEntry, ...]
    student_ids: tuple[str, ...]
    created_at: datetime
    updated_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.class_group_id,
            "courseId": self.course_id,
            "name": self.name,
            "periodCount": self.period_count,
            "schedules": [s.to_dict() for s in self.schedules],
            "studentIds": list(self.student_ids),
            "createdAt": self.created_at.isoformat(),
        }


@dataclass(frozen=True)
class ClassGroupInput:
    """Unvalidated create/update submission (complete desired state, never a delta)."""

    name: str
    period_count: Any
    schedules: Sequence[ScheduleEntry] = field(default_factory=tuple)
    student_ids: Sequence[str] = field(default_factory=tuple)

    @classmethod
    def from_payload(cls, payload: Optional[dict]) -> "ClassGroupInput":
        if payload is None:
            payload = {}
        if not isinstance(payload, dict):
            raise ValidationError("입력 데이터가 올바르지 않습니다.")
        period_count = payload.get("periodCount", payload.get("period"))
        schedules = payload.get("schedules") or []
        student_ids = payload.get("studentIds") or []
        return cls(
            name=str(payload.get("name") or ""),
            period_count=period_count,
            schedules=tuple(ScheduleEntry.from_payload(s) for s in schedules) if isinstance(schedules, list) else (),
            student_ids=tuple(str(s) for s in student_ids) if isinstance(student_ids, list) else (),
        )
