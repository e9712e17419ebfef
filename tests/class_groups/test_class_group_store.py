from __future__ import annotations

import pytest

from school_attendance.class_groups.model import ClassGroupInput, ScheduleEntry
from school_attendance.core.exceptions import NotFoundError, ValidationError
from school_attendance.courses.model import CourseContext


def test_create_scenario_group(store, ctx, new_input):
    group = store.create(ctx, new_input())

    assert group.name == "1반"
    assert group.period_count == "2"
    assert [s.to_dict() for s in group.schedules] == [{"day": "월", "period": "3"}, {"day": "수", "period": "4"}]
    assert group.student_ids == ("s1", "s2")
    assert [g.class_group_id for g in store.list(ctx)] == [group.class_group_id]


@pytest.mark.parametrize("n", [1, 2, 5, 10])
def test_schedule_length_matches_period_count(store, ctx, new_input, n):
    schedules = [("월", str(p)) for p in range(1, n + 1)]
    group = store.create(ctx, new_input(period_count=str(n), schedules=schedules))
    assert len(group.schedules) == n


@pytest.mark.parametrize(
    "period_count, schedules",
    [
        ("2", [("월", "1")]),
        ("1", [("월", "1"), ("화", "2")]),
        ("3", []),
    ],
)
def test_mismatched_schedule_length_is_rejected_and_not_persisted(store, ctx, new_input, period_count, schedules):
    with pytest.raises(ValidationError) as exc:
        store.create(ctx, new_input(period_count=period_count, schedules=schedules))

    assert exc.value.field == "schedules"
    assert store.list(ctx) == []


def test_empty_name_is_rejected(store, ctx, new_input):
    with pytest.raises(ValidationError) as exc:
        store.create(ctx, new_input(name="", period_count="1", schedules=[("월", "1")], student_ids=["s1"]))

    assert exc.value.field == "name"
    assert "학반명" in str(exc.value)
    assert store.list(ctx) == []


def test_first_failing_rule_wins(store, ctx, new_input):
    # name and roster are both invalid; name is checked first
    with pytest.raises(ValidationError) as exc:
        store.create(ctx, new_input(name="  ", student_ids=[]))
    assert exc.value.field == "name"


@pytest.mark.parametrize("period_count", ["0", "-1", "abc", None, ""])
def test_period_count_must_be_positive_integer(store, ctx, new_input, period_count):
    with pytest.raises(ValidationError) as exc:
        store.create(ctx, new_input(period_count=period_count))
    assert exc.value.field == "periodCount"


def test_every_schedule_entry_needs_day_and_period(store, ctx, new_input):
    with pytest.raises(ValidationError, match="요일과 교시"):
        store.create(ctx, new_input(schedules=[("월", "3"), ("", "4")]))


@pytest.mark.parametrize("slot", [("토", "1"), ("월", "11"), ("월", "0")])
def test_schedule_values_must_be_known(store, ctx, new_input, slot):
    with pytest.raises(ValidationError):
        store.create(ctx, new_input(period_count="1", schedules=[slot]))


def test_roster_must_not_be_empty(store, ctx, new_input):
    with pytest.raises(ValidationError) as exc:
        store.create(ctx, new_input(student_ids=[]))
    assert exc.value.field == "studentIds"


def test_duplicate_student_ids_collapse(store, ctx, new_input):
    group = store.create(ctx, new_input(student_ids=["s1", "s2", "s1"]))
    assert group.student_ids == ("s1", "s2")


def test_list_is_newest_first(store, ctx, new_input):
    first = store.create(ctx, new_input(name="1반"))
    second = store.create(ctx, new_input(name="2반"))
    assert [g.class_group_id for g in store.list(ctx)] == [second.class_group_id, first.class_group_id]


def test_course_of_another_teacher_is_not_found(store, new_input):
    other = CourseContext(course_id=2, teacher_id=7)
    with pytest.raises(NotFoundError):
        store.create(other, new_input())
    with pytest.raises(NotFoundError):
        store.list(other)


def test_update_replaces_schedules_and_roster_wholesale(store, ctx, new_input):
    group = store.create(ctx, new_input())

    updated = store.update(
        ctx,
        group.class_group_id,
        new_input(name="1반(수정)", period_count="1", schedules=[("화", "5")], student_ids=["s3"]),
    )

    assert updated.name == "1반(수정)"
    assert updated.schedules == (ScheduleEntry(day="화", period="5"),)
    assert updated.student_ids == ("s3",)
    assert updated.created_at == group.created_at


def test_invalid_update_leaves_record_untouched(store, ctx, new_input):
    group = store.create(ctx, new_input())

    with pytest.raises(ValidationError):
        store.update(ctx, group.class_group_id, new_input(period_count="3"))

    assert store.get(ctx, group.class_group_id) == group


def test_update_unknown_group_is_not_found(store, ctx, new_input):
    with pytest.raises(NotFoundError):
        store.update(ctx, 404, new_input())


def test_payload_accepts_period_alias():
    data = ClassGroupInput.from_payload(
        {"name": "1반", "period": "1", "schedules": [{"day": "월", "period": 2}], "studentIds": ["s1"]}
    )
    assert data.period_count == "1"
    assert data.schedules == (ScheduleEntry(day="월", period="2"),)


def test_changes_are_announced_for_the_course(store, ctx, container, new_input):
    seen = []
    with container.events.subscribed(ctx.course_id, seen.append):
        group = store.create(ctx, new_input())
        store.update(ctx, group.class_group_id, new_input(name="2반"))
        with pytest.raises(ValidationError):
            store.create(ctx, new_input(name=""))

    store.create(ctx, new_input(name="3반"))
    assert seen == [ctx.course_id, ctx.course_id]


def test_delete_group_without_attendance(store, ctx, new_input):
    group = store.create(ctx, new_input())
    store.delete(ctx, group.class_group_id)
    assert store.list(ctx) == []


def test_delete_refused_once_attendance_is_recorded(store, ledger, ctx, new_input):
    from datetime import date

    group = store.create(ctx, new_input())
    ledger.save(group.class_group_id, date(2024, 3, 4), [])

    with pytest.raises(ValidationError):
        store.delete(ctx, group.class_group_id)
    assert [g.class_group_id for g in store.list(ctx)] == [group.class_group_id]
