from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, dump_json_list, fetchall, fetchone, load_json_list
from .model import ClassGroup, ScheduleEntry
from .repository import ClassGroupRepository

_COLUMNS = "class_group_id, course_id, teacher_id, name, period_count, schedules, student_ids, created_at, updated_at"


def _row_to_group(r: dict) -> ClassGroup:
    return ClassGroup(
        class_group_id=int(r["class_group_id"]),
        course_id=int(r["course_id"]),
        teacher_id=int(r["teacher_id"]),
        name=r["name"],
        period_count=r.get("period_count"),
        schedules=tuple(ScheduleEntry.from_payload(s) for s in load_json_list(r.get("schedules"))),
        student_ids=tuple(str(s) for s in load_json_list(r.get("student_ids"))),
        created_at=r["created_at"],
        updated_at=r.get("updated_at"),
    )


class MySQLClassGroupRepository(ClassGroupRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, *, class_group_id: int, course_id: int, teacher_id: int) -> Optional[ClassGroup]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM class_groups
                WHERE class_group_id=%s AND course_id=%s AND teacher_id=%s
                """,
                (int(class_group_id), int(course_id), int(teacher_id)),
            )
            r = fetchone(cur)
            return _row_to_group(r) if r else None

    def list_for_course(self, *, course_id: int, teacher_id: int) -> Sequence[ClassGroup]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM class_groups
                WHERE course_id=%s AND teacher_id=%s
                ORDER BY created_at DESC, class_group_id DESC
                """,
                (int(course_id), int(teacher_id)),
            )
            return [_row_to_group(r) for r in fetchall(cur)]

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
        created_at = datetime.now()
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO class_groups(course_id, teacher_id, name, period_count, schedules, student_ids, created_at)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(course_id),
                    int(teacher_id),
                    name,
                    period_count,
                    dump_json_list([s.to_dict() for s in schedules]),
                    dump_json_list(list(student_ids)),
                    created_at,
                ),
            )
            return ClassGroup(
                class_group_id=int(cur.lastrowid),
                course_id=int(course_id),
                teacher_id=int(teacher_id),
                name=name,
                period_count=period_count,
                schedules=tuple(schedules),
                student_ids=tuple(student_ids),
                created_at=created_at,
            )

    def replace(
        self,
        *,
        class_group_id: int,
        name: str,
        period_count: str,
        schedules: Sequence[ScheduleEntry],
        student_ids: Sequence[str],
    ) -> Optional[ClassGroup]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE class_groups
                SET name=%s, period_count=%s, schedules=%s, student_ids=%s, updated_at=%s
                WHERE class_group_id=%s
                """,
                (
                    name,
                    period_count,
                    dump_json_list([s.to_dict() for s in schedules]),
                    dump_json_list(list(student_ids)),
                    datetime.now(),
                    int(class_group_id),
                ),
            )
            cur.execute(f"SELECT {_COLUMNS} FROM class_groups WHERE class_group_id=%s", (int(class_group_id),))
            r = fetchone(cur)
            return _row_to_group(r) if r else None

    def delete(self, *, class_group_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM class_groups WHERE class_group_id=%s", (int(class_group_id),))
            return cur.rowcount > 0
