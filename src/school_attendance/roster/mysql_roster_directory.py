from __future__ import annotations

from typing import Mapping, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import StudentInfo
from .repository import RosterDirectory


class MySQLRosterDirectory(RosterDirectory):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def resolve(self, student_ids: Sequence[str]) -> Mapping[str, StudentInfo]:
        ids = [str(s) for s in dict.fromkeys(student_ids)]
        if not ids:
            return {}

        placeholders = ",".join(["%s"] * len(ids))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT student_id, name, email FROM students WHERE student_id IN ({placeholders})",
                tuple(ids),
            )
            return {
                str(r["student_id"]): StudentInfo(id=str(r["student_id"]), name=r.get("name"), email=r["email"])
                for r in fetchall(cur)
            }
