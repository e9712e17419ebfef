import pytest

from school_attendance.common.datetime_utils import parse_iso_date
from school_attendance.common.events import ClassGroupEvents
from school_attendance.container import build_container
from school_attendance.core.exceptions import ValidationError
from school_attendance.database.bootstrap import SCHEMA_PATH, iter_sql_statements


def test_sql_splitter_ignores_semicolons_in_comments_and_quotes():
    sql = "-- a; b\nCREATE TABLE t (x INT);\nINSERT INTO t VALUES ('a;b');\n"
    assert list(iter_sql_statements(sql)) == ["CREATE TABLE t (x INT)", "INSERT INTO t VALUES ('a;b')"]


def test_schema_file_declares_every_table():
    statements = list(iter_sql_statements(SCHEMA_PATH.read_text(encoding="utf-8")))
    tables = [s.split()[5] for s in statements]
    assert tables == ["courses", "students", "class_groups", "attendance_sessions", "attendance_entries"]


def test_events_are_scoped_by_course():
    events = ClassGroupEvents()
    seen = []
    unsubscribe = events.subscribe(1, seen.append)

    events.notify_changed(2)
    events.notify_changed(1)
    unsubscribe()
    events.notify_changed(1)

    assert seen == [1]


@pytest.mark.parametrize("raw", ["2024-03-04", "2024-03-04T00:00:00.000Z", " 2024-03-04 "])
def test_parse_iso_date_keeps_calendar_day(raw):
    assert parse_iso_date(raw).isoformat() == "2024-03-04"


def test_parse_iso_date_rejects_garbage():
    with pytest.raises(ValidationError):
        parse_iso_date("04/03/2024")


def test_failing_listener_does_not_reach_notifier_or_other_listeners():
    events = ClassGroupEvents()
    seen = []

    def broken(course_id):
        raise RuntimeError("listener down")

    events.subscribe(1, broken)
    events.subscribe(1, seen.append)

    events.notify_changed(1)

    assert seen == [1]


def test_each_container_gets_its_own_database():
    first = build_container(db_config={"host": "db-a", "user": "u", "password": "p", "database": "school_a"})
    second = build_container(db_config={"host": "db-b", "user": "u", "password": "p", "database": "school_b"})

    assert first.class_groups_repo._conn_factory.config.database == "school_a"
    assert second.class_groups_repo._conn_factory.config.database == "school_b"
    assert second.roster_directory._conn_factory.config.host == "db-b"
