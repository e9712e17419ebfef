from __future__ import annotations

import logging
from datetime import date
from typing import Iterable, Optional

from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError
from .model import AttendanceEntry
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceLedger:
    """Per-date attendance for a class group.

    Saving replaces the whole entry set for (class_group_id, date). Defaulting
    absent students to present is the editor's job, not this one.
    """

    def __init__(self, attendance: AttendanceRepository):
        self._attendance = attendance

    def load_for_date(self, class_group_id: int, attendance_date: date) -> dict[str, AttendanceStatus]:
        entries = self._attendance.load_for_date(class_group_id=int(class_group_id), attendance_date=attendance_date)
        return {e.student_id: e.status for e in entries}

    def save(
        self,
        class_group_id: int,
        attendance_date: date,
        entries: Iterable[AttendanceEntry],
        *,
        teacher_id: Optional[int] = None,
    ) -> int:
        entries = list(entries)

        seen: set[str] = set()
        for e in entries:
            if e.student_id in seen:
                raise ValidationError(f"학생 {e.student_id}의 출결이 중복되었습니다.", field="attendances")
            if not isinstance(e.status, AttendanceStatus):
                raise ValidationError("알 수 없는 출결 상태입니다.", field="attendances")
            seen.add(e.student_id)

        saved = self._attendance.replace_for_date(
            class_group_id=int(class_group_id),
            attendance_date=attendance_date,
            entries=entries,
            teacher_id=teacher_id,
        )
        logger.info(
            "attendance saved for class group %s on %s (%d entries)",
            class_group_id,
            attendance_date.isoformat(),
            saved,
        )
        return saved

    def exists_for_date(self, class_group_id: int, attendance_date: date) -> bool:
        return self._attendance.exists_for_date(class_group_id=int(class_group_id), attendance_date=attendance_date)
