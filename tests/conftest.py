from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Optional

import mysql.connector
import pytest

from school_attendance.attendance.model import AttendanceEntry
from school_attendance.attendance.service import AttendanceLedger
from school_attendance.class_groups.model import ClassGroup, ClassGroupInput, ScheduleEntry
from school_attendance.container import wire
from school_attendance.courses.model import Course, CourseContext
from school_attendance.main import create_app
from school_attendance.roster.model import StudentInfo

TEACHER_ID = 7
COURSE_ID = 1


class InMemoryCourses:
    def __init__(self, courses: list[Course]):
        self._courses = {c.course_id: c for c in courses}

    def get_owned(self, *, course_id: int, teacher_id: int) -> Optional[Course]:
        course = self._courses.get(int(course_id))
        if course and course.teacher_id == int(teacher_id):
            return course
        return None


class InMemoryClassGroups:
    def __init__(self):
        self._rows: dict[int, ClassGroup] = {}
        self._id = 0
        self._clock = datetime(2024, 3, 1, 9, 0, 0)

    def get(self, *, class_group_id: int, course_id: int, teacher_id: int) -> Optional[ClassGroup]:
        g = self._rows.get(int(class_group_id))
        if g and g.course_id == int(course_id) and g.teacher_id == int(teacher_id):
            return g
        return None

    def list_for_course(self, *, course_id: int, teacher_id: int):
        items = [g for g in self._rows.values() if g.course_id == course_id and g.teacher_id == teacher_id]
        items.sort(key=lambda g: (g.created_at, g.class_group_id), reverse=True)
        return items

    def create(self, *, course_id, teacher_id, name, period_count, schedules, student_ids) -> ClassGroup:
        self._id += 1
        self._clock += timedelta(minutes=1)
        g = ClassGroup(
            class_group_id=self._id,
            course_id=course_id,
            teacher_id=teacher_id,
            name=name,
            period_count=period_count,
            schedules=tuple(schedules),
            student_ids=tuple(student_ids),
            created_at=self._clock,
        )
        self._rows[g.class_group_id] = g
        return g

    def replace(self, *, class_group_id, name, period_count, schedules, student_ids) -> Optional[ClassGroup]:
        g = self._rows.get(int(class_group_id))
        if not g:
            return None
        self._rows[g.class_group_id] = ClassGroup(
            class_group_id=g.class_group_id,
            course_id=g.course_id,
            teacher_id=g.teacher_id,
            name=name,
            period_count=period_count,
            schedules=tuple(schedules),
            student_ids=tuple(student_ids),
            created_at=g.created_at,
            updated_at=self._clock,
        )
        return self._rows[g.class_group_id]

    def delete(self, *, class_group_id: int) -> bool:
        return self._rows.pop(int(class_group_id), None) is not None


class InMemoryAttendance:
    def __init__(self):
        self._by_key: dict[tuple[int, date], list[AttendanceEntry]] = {}
        self.save_calls = 0

    def load_for_date(self, *, class_group_id: int, attendance_date: date):
        return list(self._by_key.get((class_group_id, attendance_date), []))

    def replace_for_date(self, *, class_group_id, attendance_date, entries, teacher_id=None) -> int:
        self.save_calls += 1
        self._by_key[(class_group_id, attendance_date)] = list(entries)
        return len(entries)

    def exists_for_date(self, *, class_group_id: int, attendance_date: date) -> bool:
        return (class_group_id, attendance_date) in self._by_key

    def has_any_for_group(self, *, class_group_id: int) -> bool:
        return any(gid == class_group_id for gid, _ in self._by_key)


class InMemoryRoster:
    def __init__(self, students: list[StudentInfo]):
        self._students = {s.id: s for s in students}

    def resolve(self, student_ids):
        return {sid: self._students[sid] for sid in student_ids if sid in self._students}


class FakeCursor:
    """Records statements; each fetch hands out the next queued result set."""

    def __init__(self, conn):
        self._conn = conn
        self.rowcount = conn.rowcount
        self.lastrowid = conn.lastrowid

    def execute(self, sql, params=()):
        if self._conn.fail_on and self._conn.fail_on in sql:
            raise mysql.connector.Error("boom")
        self._conn.statements.append((" ".join(sql.split()), params))

    def executemany(self, sql, rows):
        self._conn.statements.append((" ".join(sql.split()), list(rows)))

    def fetchone(self):
        rows = self.fetchall()
        return rows[0] if rows else None

    def fetchall(self):
        return self._conn.results.pop(0) if self._conn.results else []

    def close(self):
        pass


class FakeConnection:
    def __init__(self, *, fail_on=None, results=(), lastrowid=0, rowcount=0):
        self.fail_on = fail_on
        self.results = [list(r) for r in results]
        self.lastrowid = lastrowid
        self.rowcount = rowcount
        self.statements = []
        self.committed = False
        self.rolled_back = False
        self.closed = False

    def cursor(self, dictionary=True):
        return FakeCursor(self)

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        self.closed = True

    def connect(self):
        return self


def make_input(name="1반", period_count="2", schedules=(("월", "3"), ("수", "4")), student_ids=("s1", "s2")):
    return ClassGroupInput(
        name=name,
        period_count=period_count,
        schedules=tuple(ScheduleEntry(day=d, period=p) for d, p in schedules),
        student_ids=tuple(student_ids),
    )


@pytest.fixture
def ctx() -> CourseContext:
    return CourseContext(course_id=COURSE_ID, teacher_id=TEACHER_ID)


@pytest.fixture
def attendance_repo() -> InMemoryAttendance:
    return InMemoryAttendance()


@pytest.fixture
def container(attendance_repo):
    return wire(
        courses_repo=InMemoryCourses(
            [
                Course(course_id=COURSE_ID, teacher_id=TEACHER_ID, title="국어"),
                Course(course_id=2, teacher_id=99, title="수학"),
            ]
        ),
        class_groups_repo=InMemoryClassGroups(),
        attendance_repo=attendance_repo,
        roster_directory=InMemoryRoster(
            [
                StudentInfo(id="s1", name="김민수", email="s1@school.kr"),
                StudentInfo(id="s2", name="이서연", email="s2@school.kr"),
                StudentInfo(id="s3", name=None, email="s3@school.kr"),
            ]
        ),
    )


@pytest.fixture
def store(container):
    return container.class_group_store


@pytest.fixture
def ledger(container) -> AttendanceLedger:
    return container.attendance_ledger


@pytest.fixture
def new_input():
    return make_input


@pytest.fixture
def app(container):
    app = create_app(container, settings_module="school_attendance.config.testing")
    return app


@pytest.fixture
def client(app):
    client = app.test_client()
    with client.session_transaction() as sess:
        sess["user_id"] = TEACHER_ID
        sess["role"] = "teacher"
    return client


@pytest.fixture
def fake_db():
    """Builds a FakeConnection; it doubles as its own connection factory."""
    return FakeConnection
