"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from .enums import AttendanceStatus, Weekday

MIN_PERIOD = 1
MAX_PERIOD = 10
PERIOD_CHOICES = tuple(str(p) for p in range(MIN_PERIOD, MAX_PERIOD + 1))

# date.weekday() -> label; no entry for Saturday/Sunday.
WEEKDAY_BY_INDEX = {
    0: Weekday.MON,
    1: Weekday.TUE,
    2: Weekday.WED,
    3: Weekday.THU,
    4: Weekday.FRI,
}

WEEKDAY_FULL_NAMES = ("월요일", "화요일", "수요일", "목요일", "금요일", "토요일", "일요일")

DEFAULT_STATUS = AttendanceStatus.PRESENT
UNKNOWN_STUDENT_NAME = "알 수 없는 학생"
