from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class AttendanceEntry:
    """One student's status for a (class group, date) key."""

    student_id: str
    status: AttendanceStatus

    @classmethod
    def from_payload(cls, raw: Any) -> "AttendanceEntry":
        if not isinstance(raw, dict):
            raise ValidationError("출결 항목 형식이 올바르지 않습니다.", field="attendances")
        student_id = str(raw.get("studentId") or "").strip()
        if not student_id:
            raise ValidationError("학생 ID가 없는 출결 항목이 있습니다.", field="attendances")
        try:
            status = AttendanceStatus(str(raw.get("status") or ""))
        except ValueError:
            raise ValidationError("알 수 없는 출결 상태입니다.", field="attendances")
        return cls(student_id=student_id, status=status)

    def to_dict(self) -> dict:
        return {"studentId": self.student_id, "status": self.status.value}
