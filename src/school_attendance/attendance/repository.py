from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import AttendanceEntry


class AttendanceRepository(Protocol):
    def load_for_date(self, *, class_group_id: int, attendance_date: date) -> Sequence[AttendanceEntry]:
        raise NotImplementedError

    def replace_for_date(
        self,
        *,
        class_group_id: int,
        attendance_date: date,
        entries: Sequence[AttendanceEntry],
        teacher_id: Optional[int] = None,
    ) -> int:
        """Drop whatever is stored under the key and write `entries` in one transaction.

        Returns the number of entries written.
        """

        raise NotImplementedError

    def exists_for_date(self, *, class_group_id: int, attendance_date: date) -> bool:
        raise NotImplementedError

    def has_any_for_group(self, *, class_group_id: int) -> bool:
        raise NotImplementedError
