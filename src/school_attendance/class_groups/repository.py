from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import ClassGroup, ScheduleEntry


class ClassGroupRepository(Protocol):
    """Storage for class groups. Callers pass already validated values."""

    def get(self, *, class_group_id: int, course_id: int, teacher_id: int) -> Optional[ClassGroup]:
        raise NotImplementedError

    def list_for_course(self, *, course_id: int, teacher_id: int) -> Sequence[ClassGroup]:
        """Newest first."""

        raise NotImplementedError

    def create(
        self,
        *,
        course_id: int,
        teacher_id: int,
        name: str,
        period_count: str,
        schedules: Sequence[ScheduleEntry],
        student_ids: Sequence[str],
    ) -> ClassGroup:
        raise NotImplementedError

    def replace(
        self,
        *,
        class_group_id: int,
        name: str,
        period_count: str,
        schedules: Sequence[ScheduleEntry],
        student_ids: Sequence[str],
    ) -> Optional[ClassGroup]:
        """Overwrite every mutable column; None when the row vanished."""

        raise NotImplementedError

    def delete(self, *, class_group_id: int) -> bool:
        raise NotImplementedError
