from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AttendanceEntry
from .repository import AttendanceRepository


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def load_for_date(self, *, class_group_id: int, attendance_date: date) -> Sequence[AttendanceEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT student_id, status
                FROM attendance_entries
                WHERE class_group_id=%s AND attendance_date=%s
                ORDER BY entry_id ASC
                """,
                (int(class_group_id), attendance_date),
            )
            return [
                AttendanceEntry(student_id=str(r["student_id"]), status=AttendanceStatus(r["status"]))
                for r in fetchall(cur)
            ]

    def replace_for_date(
        self,
        *,
        class_group_id: int,
        attendance_date: date,
        entries: Sequence[AttendanceEntry],
        teacher_id: Optional[int] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM attendance_entries WHERE class_group_id=%s AND attendance_date=%s",
                (int(class_group_id), attendance_date),
            )
            if entries:
                cur.executemany(
                    """
                    INSERT INTO attendance_entries(class_group_id, attendance_date, student_id, status)
                    VALUES(%s,%s,%s,%s)
                    """,
                    [(int(class_group_id), attendance_date, e.student_id, e.status.value) for e in entries],
                )
            cur.execute(
                """
                INSERT INTO attendance_sessions(class_group_id, attendance_date, teacher_id)
                VALUES(%s,%s,%s)
                ON DUPLICATE KEY UPDATE teacher_id=VALUES(teacher_id), recorded_at=CURRENT_TIMESTAMP
                """,
                (int(class_group_id), attendance_date, teacher_id),
            )
            return len(entries)

    def exists_for_date(self, *, class_group_id: int, attendance_date: date) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT 1 AS found FROM attendance_sessions WHERE class_group_id=%s AND attendance_date=%s",
                (int(class_group_id), attendance_date),
            )
            return fetchone(cur) is not None

    def has_any_for_group(self, *, class_group_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT 1 AS found FROM attendance_sessions WHERE class_group_id=%s LIMIT 1",
                (int(class_group_id),),
            )
            return fetchone(cur) is not None
