from __future__ import annotations

import logging
from typing import Sequence

from ..attendance.repository import AttendanceRepository
from ..common.events import ClassGroupEvents
from ..common.validators import require_non_empty, require_positive_int
from ..core.constants import PERIOD_CHOICES
from ..core.enums import Weekday
from ..core.exceptions import NotFoundError, ValidationError
from ..courses.model import CourseContext
from ..courses.repository import CourseRepository
from .model import ClassGroup, ClassGroupInput, ScheduleEntry
from .repository import ClassGroupRepository

logger = logging.getLogger(__name__)

_DAYS = {d.value for d in Weekday}


class ClassGroupStore:
    """Validates and persists class groups for one teacher's course.

    Every write either stores the complete validated record or nothing.
    """

    def __init__(
        self,
        groups: ClassGroupRepository,
        courses: CourseRepository,
        attendance: AttendanceRepository | None = None,
        *,
        events: ClassGroupEvents | None = None,
    ):
        self._groups = groups
        self._courses = courses
        self._attendance = attendance
        self._events = events

    @staticmethod
    def validate(data: ClassGroupInput) -> tuple[str, str, tuple[ScheduleEntry, ...], tuple[str, ...]]:
        """Check rules in order; the first failure is reported."""

        name = require_non_empty(data.name, "학반명을 입력해주세요.", field="name")
        period_count = require_positive_int(data.period_count, "차시를 올바르게 입력해주세요.", field="periodCount")

        schedules = tuple(data.schedules)
        if len(schedules) != period_count:
            raise ValidationError("차시 개수와 스케줄 개수가 일치하지 않습니다.", field="schedules")
        if any(not s.day or not s.period for s in schedules):
            raise ValidationError("모든 차시의 요일과 교시를 입력해주세요.", field="schedules")
        if any(s.day not in _DAYS for s in schedules):
            raise ValidationError("요일은 월요일부터 금요일 중에서 선택해주세요.", field="schedules")
        if any(s.period not in PERIOD_CHOICES for s in schedules):
            raise ValidationError("교시는 1교시부터 10교시 중에서 선택해주세요.", field="schedules")

        student_ids = tuple(dict.fromkeys(sid.strip() for sid in data.student_ids if sid and sid.strip()))
        if not student_ids:
            raise ValidationError("최소 1명 이상의 수강생을 선택해주세요.", field="studentIds")

        return name, str(period_count), schedules, student_ids

    def _require_course(self, ctx: CourseContext) -> None:
        if not self._courses.get_owned(course_id=ctx.course_id, teacher_id=ctx.teacher_id):
            raise NotFoundError("수업을 찾을 수 없거나 권한이 없습니다.")

    def _notify(self, ctx: CourseContext) -> None:
        if self._events is not None:
            self._events.notify_changed(ctx.course_id)

    def list(self, ctx: CourseContext) -> Sequence[ClassGroup]:
        self._require_course(ctx)
        return list(self._groups.list_for_course(course_id=ctx.course_id, teacher_id=ctx.teacher_id))

    def get(self, ctx: CourseContext, class_group_id: int) -> ClassGroup:
        group = self._groups.get(
            class_group_id=int(class_group_id), course_id=ctx.course_id, teacher_id=ctx.teacher_id
        )
        if not group:
            raise NotFoundError("학반을 찾을 수 없거나 권한이 없습니다.")
        return group

    def create(self, ctx: CourseContext, data: ClassGroupInput) -> ClassGroup:
        self._require_course(ctx)
        name, period_count, schedules, student_ids = self.validate(data)

        group = self._groups.create(
            course_id=ctx.course_id,
            teacher_id=ctx.teacher_id,
            name=name,
            period_count=period_count,
            schedules=schedules,
            student_ids=student_ids,
        )
        logger.info(
            "class group %s created (course=%s, schedules=%d, students=%d)",
            group.class_group_id,
            ctx.course_id,
            len(schedules),
            len(student_ids),
        )
        self._notify(ctx)
        return group

    def update(self, ctx: CourseContext, class_group_id: int, data: ClassGroupInput) -> ClassGroup:
        existing = self.get(ctx, class_group_id)
        name, period_count, schedules, student_ids = self.validate(data)

        group = self._groups.replace(
            class_group_id=existing.class_group_id,
            name=name,
            period_count=period_count,
            schedules=schedules,
            student_ids=student_ids,
        )
        if group is None:
            raise NotFoundError("학반을 찾을 수 없거나 권한이 없습니다.")

        logger.info("class group %s updated (course=%s)", group.class_group_id, ctx.course_id)
        self._notify(ctx)
        return group

    def delete(self, ctx: CourseContext, class_group_id: int) -> None:
        """Remove a group that has no recorded attendance.

        Groups with attendance history are kept; their records stay addressable.
        """
        group = self.get(ctx, class_group_id)

        if self._attendance is not None and self._attendance.has_any_for_group(
            class_group_id=group.class_group_id
        ):
            raise ValidationError("출결 기록이 있는 학반은 삭제할 수 없습니다.", field="id")

        if not self._groups.delete(class_group_id=group.class_group_id):
            raise NotFoundError("학반을 찾을 수 없거나 권한이 없습니다.")

        logger.info("class group %s deleted (course=%s)", group.class_group_id, ctx.course_id)
        self._notify(ctx)

