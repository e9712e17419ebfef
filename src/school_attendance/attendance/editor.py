"""In-progress attendance edits for one teacher's course.

State lives per class group while a date is selected:

    unrecorded --commit--> recorded --commit--> recorded (overwritten)

Nothing is persisted until commit(); closing the editor drops every pending
edit. Saving is tracked per class group, so one group being saved does not
block the others.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Callable, Optional, Sequence

from ..class_groups.matcher import filter_for_date
from ..class_groups.model import ClassGroup
from ..class_groups.service import ClassGroupStore
from ..common.datetime_utils import next_day, now_local, previous_day, weekday_name
from ..common.events import ClassGroupEvents
from ..core.constants import DEFAULT_STATUS
from ..core.enums import AttendanceStatus
from ..core.exceptions import DomainError, NotFoundError, ValidationError
from ..courses.model import CourseContext
from ..roster.model import StudentInfo
from ..roster.repository import RosterDirectory
from ..roster.service import resolve_roster
from .model import AttendanceEntry
from .service import AttendanceLedger

logger = logging.getLogger(__name__)


def _coerce_status(status) -> AttendanceStatus:
    try:
        return AttendanceStatus(status)
    except ValueError:
        raise ValidationError("알 수 없는 출결 상태입니다.", field="status")


@dataclass(frozen=True)
class AttendanceRow:
    student: StudentInfo
    status: AttendanceStatus
    # True when the secondary control (late/sick_leave/...) holds a value
    overridden: bool

    @property
    def label(self) -> str:
        return self.status.label


@dataclass
class _GroupDraft:
    group: ClassGroup
    overrides: dict[str, AttendanceStatus] = field(default_factory=dict)
    recorded: bool = False
    saving: bool = False


class AttendanceEditor:
    def __init__(
        self,
        store: ClassGroupStore,
        ledger: AttendanceLedger,
        ctx: CourseContext,
        *,
        roster: RosterDirectory | None = None,
        events: ClassGroupEvents | None = None,
        today: Callable[[], date] | None = None,
    ):
        self._store = store
        self._ledger = ledger
        self._ctx = ctx
        self._roster = roster
        self._events = events
        self._today = today or (lambda: now_local().date())

        self._date: Optional[date] = None
        self._groups: list[ClassGroup] = []
        self._drafts: dict[int, _GroupDraft] = {}
        self._unsubscribe: Optional[Callable[[], None]] = None

    # lifecycle

    def open(self, selected_date: Optional[date] = None) -> "AttendanceEditor":
        if self._events is not None and self._unsubscribe is None:
            self._unsubscribe = self._events.subscribe(self._ctx.course_id, self._on_groups_changed)
        self._date = selected_date
        self.refresh()
        return self

    def close(self) -> None:
        """Stop listening and discard unsaved edits."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        self._drafts.clear()
        self._groups = []

    def __enter__(self) -> "AttendanceEditor":
        return self.open(self._date)

    def __exit__(self, *exc) -> None:
        self.close()

    def _on_groups_changed(self, course_id: int) -> None:
        logger.debug("reloading class groups for course %s", course_id)
        self.refresh()

    # date selection

    @property
    def selected_date(self) -> Optional[date]:
        return self._date

    def select_date(self, day: Optional[date]) -> list[ClassGroup]:
        """Switch the working date; pending edits for the previous date are dropped."""
        self._date = day
        self._drafts.clear()
        self.refresh()
        return self.groups

    def previous_day(self) -> list[ClassGroup]:
        return self.select_date(previous_day(self._date or self._today()))

    def next_day(self) -> list[ClassGroup]:
        return self.select_date(next_day(self._date or self._today()))

    def today(self) -> list[ClassGroup]:
        return self.select_date(self._today())

    def date_label(self) -> str:
        if self._date is None:
            return "날짜 미선택"
        d = self._date
        return f"{d.year}년 {d.month}월 {d.day}일 {weekday_name(d)}"

    # groups

    def refresh(self) -> None:
        """Reload class groups; drafts of groups still in session keep their edits."""
        self._groups = list(self._store.list(self._ctx))
        actionable = filter_for_date(self._groups, self._date)

        drafts: dict[int, _GroupDraft] = {}
        for group in actionable:
            existing = self._drafts.get(group.class_group_id)
            if existing is not None:
                existing.group = group
                drafts[group.class_group_id] = existing
            else:
                drafts[group.class_group_id] = self._load_draft(group)
        self._drafts = drafts

    def _load_draft(self, group: ClassGroup) -> _GroupDraft:
        if self._date is None:
            return _GroupDraft(group=group)

        stored = self._ledger.load_for_date(group.class_group_id, self._date)
        return _GroupDraft(
            group=group,
            overrides={sid: st for sid, st in stored.items() if st != DEFAULT_STATUS},
            recorded=self._ledger.exists_for_date(group.class_group_id, self._date),
        )

    @property
    def groups(self) -> list[ClassGroup]:
        """Groups offered for editing on the selected date (all of them when no date is set)."""
        return [d.group for d in self._drafts.values()]

    def _draft(self, class_group_id: int) -> _GroupDraft:
        draft = self._drafts.get(int(class_group_id))
        if draft is not None:
            return draft
        if any(g.class_group_id == int(class_group_id) for g in self._groups):
            raise ValidationError("선택한 날짜에 수업이 없는 학반입니다.", field="date")
        raise NotFoundError("학반을 찾을 수 없거나 권한이 없습니다.")

    def _draft_for_student(self, class_group_id: int, student_id: str) -> _GroupDraft:
        draft = self._draft(class_group_id)
        if student_id not in draft.group.student_ids:
            raise ValidationError("학반에 속하지 않은 학생입니다.", field="studentId")
        return draft

    # edits

    def status_of(self, class_group_id: int, student_id: str) -> AttendanceStatus:
        return self._draft(class_group_id).overrides.get(student_id, DEFAULT_STATUS)

    def choose_present(self, class_group_id: int, student_id: str) -> None:
        self._draft_for_student(class_group_id, student_id).overrides.pop(student_id, None)

    def choose_status(self, class_group_id: int, student_id: str, status: Optional[AttendanceStatus]) -> None:
        """Secondary control. None ("선택 안 함") or present resets the student to present."""
        draft = self._draft_for_student(class_group_id, student_id)
        if status is None or _coerce_status(status) == DEFAULT_STATUS:
            draft.overrides.pop(student_id, None)
        else:
            draft.overrides[student_id] = _coerce_status(status)

    def set_all(self, class_group_id: int, status: AttendanceStatus) -> None:
        draft = self._draft(class_group_id)
        status = _coerce_status(status)
        if status == DEFAULT_STATUS:
            draft.overrides.clear()
        else:
            draft.overrides = {sid: status for sid in draft.group.student_ids}

    def rows(self, class_group_id: int) -> list[AttendanceRow]:
        draft = self._draft(class_group_id)
        students = resolve_roster(self._roster, draft.group.student_ids)
        return [
            AttendanceRow(
                student=s,
                status=draft.overrides.get(s.id, DEFAULT_STATUS),
                overridden=s.id in draft.overrides,
            )
            for s in students
        ]

    def entries(self, class_group_id: int, roster: Optional[Sequence[str]] = None) -> list[AttendanceEntry]:
        """Every roster member with a resolved status; unset means present."""
        draft = self._draft(class_group_id)
        student_ids = draft.group.student_ids if roster is None else roster
        return [AttendanceEntry(student_id=sid, status=draft.overrides.get(sid, DEFAULT_STATUS)) for sid in student_ids]

    # saving

    def is_recorded(self, class_group_id: int) -> bool:
        return self._draft(class_group_id).recorded

    def is_saving(self, class_group_id: int) -> bool:
        return self._draft(class_group_id).saving

    def can_save(self, class_group_id: int) -> bool:
        return self._date is not None and not self.is_saving(class_group_id)

    def commit(self, class_group_id: int) -> int:
        """Save the group's attendance for the selected date.

        Reads the group's current roster, fills gaps with present and replaces
        the stored entries. On failure the pending edits stay as they are and
        the error is raised to the caller.
        """
        draft = self._draft(class_group_id)
        if self._date is None:
            raise ValidationError("출결 날짜를 선택해주세요.", field="date")
        if draft.saving:
            raise ValidationError("이미 저장 중입니다.")

        draft.saving = True
        try:
            group = self._store.get(self._ctx, draft.group.class_group_id)
            saved = self._ledger.save(
                group.class_group_id,
                self._date,
                self.entries(group.class_group_id, roster=group.student_ids),
                teacher_id=self._ctx.teacher_id,
            )
        except DomainError as e:
            logger.warning("attendance commit failed for class group %s: %s", class_group_id, e)
            raise
        finally:
            draft.saving = False

        draft.group = group
        draft.overrides = {sid: st for sid, st in draft.overrides.items() if sid in group.student_ids}
        draft.recorded = True
        return saved
