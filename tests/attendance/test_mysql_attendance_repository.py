from __future__ import annotations

from datetime import date

import pytest

from school_attendance.attendance.model import AttendanceEntry
from school_attendance.attendance.mysql_attendance_repository import MySQLAttendanceRepository
from school_attendance.core.enums import AttendanceStatus
from school_attendance.core.exceptions import PersistenceError

DAY = date(2024, 3, 4)
ENTRIES = [
    AttendanceEntry(student_id="s1", status=AttendanceStatus.LATE),
    AttendanceEntry(student_id="s2", status=AttendanceStatus.PRESENT),
]


def test_replace_deletes_then_inserts_in_one_transaction(fake_db):
    conn = fake_db()
    repo = MySQLAttendanceRepository(conn)

    assert repo.replace_for_date(class_group_id=3, attendance_date=DAY, entries=ENTRIES, teacher_id=7) == 2

    sqls = [s for s, _ in conn.statements]
    assert sqls[0].startswith("DELETE FROM attendance_entries")
    assert sqls[1].startswith("INSERT INTO attendance_entries")
    assert conn.statements[1][1] == [(3, DAY, "s1", "late"), (3, DAY, "s2", "present")]
    assert sqls[2].startswith("INSERT INTO attendance_sessions")
    assert conn.committed and conn.closed and not conn.rolled_back


def test_driver_error_rolls_back_and_surfaces_as_persistence_error(fake_db):
    conn = fake_db(fail_on="attendance_sessions")
    repo = MySQLAttendanceRepository(conn)

    with pytest.raises(PersistenceError):
        repo.replace_for_date(class_group_id=3, attendance_date=DAY, entries=ENTRIES)

    assert conn.rolled_back and not conn.committed and conn.closed
