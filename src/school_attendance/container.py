from __future__ import annotations

from dataclasses import dataclass

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceLedger
from .class_groups.mysql_class_group_repository import MySQLClassGroupRepository
from .class_groups.repository import ClassGroupRepository
from .class_groups.service import ClassGroupStore
from .common.events import ClassGroupEvents
from .courses.mysql_course_repository import MySQLCourseRepository
from .courses.repository import CourseRepository
from .database.connection import DatabaseConnection, DBConfig
from .roster.mysql_roster_directory import MySQLRosterDirectory
from .roster.repository import RosterDirectory


@dataclass(frozen=True)
class Container:
    courses_repo: CourseRepository
    class_groups_repo: ClassGroupRepository
    attendance_repo: AttendanceRepository
    roster_directory: RosterDirectory

    events: ClassGroupEvents
    class_group_store: ClassGroupStore
    attendance_ledger: AttendanceLedger


def wire(
    *,
    courses_repo: CourseRepository,
    class_groups_repo: ClassGroupRepository,
    attendance_repo: AttendanceRepository,
    roster_directory: RosterDirectory,
) -> Container:
    events = ClassGroupEvents()
    return Container(
        courses_repo=courses_repo,
        class_groups_repo=class_groups_repo,
        attendance_repo=attendance_repo,
        roster_directory=roster_directory,
        events=events,
        class_group_store=ClassGroupStore(class_groups_repo, courses_repo, attendance_repo, events=events),
        attendance_ledger=AttendanceLedger(attendance_repo),
    )


def build_container(*, db_config: dict) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config))

    return wire(
        courses_repo=MySQLCourseRepository(conn),
        class_groups_repo=MySQLClassGroupRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        roster_directory=MySQLRosterDirectory(conn),
    )
