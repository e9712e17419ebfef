from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """사용자 역할 (권한 확인용)."""

    STUDENT = "student"
    TEACHER = "teacher"
    ADMIN = "admin"
    SUPERADMIN = "superadmin"


class AttendanceStatus(str, Enum):
    """출결 상태 (DB에 저장되는 값)."""

    PRESENT = "present"
    LATE = "late"
    SICK_LEAVE = "sick_leave"
    APPROVED_ABSENCE = "approved_absence"
    EXCUSED = "excused"

    @property
    def label(self) -> str:
        return STATUS_LABELS[self]


STATUS_LABELS = {
    AttendanceStatus.PRESENT: "출석",
    AttendanceStatus.LATE: "지각",
    AttendanceStatus.SICK_LEAVE: "병결",
    AttendanceStatus.APPROVED_ABSENCE: "인정결",
    AttendanceStatus.EXCUSED: "공결",
}


class Weekday(str, Enum):
    """Days a class group can meet on. Weekends have no member."""

    MON = "월"
    TUE = "화"
    WED = "수"
    THU = "목"
    FRI = "금"
