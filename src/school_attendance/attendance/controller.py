from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.web import current_context, error_response, teacher_required
from ..container import Container
from ..core.exceptions import ValidationError
from .model import AttendanceEntry


def register(app: Flask, container: Container) -> None:
    path = "/api/courses/<int:course_id>/class-groups/<int:class_group_id>/attendance"

    @app.route(path, methods=["GET"], endpoint="attendance_load")
    @teacher_required
    def attendance_load(course_id: int, class_group_id: int):
        try:
            group = container.class_group_store.get(current_context(course_id), class_group_id)

            date_param = request.args.get("date")
            if not date_param:
                raise ValidationError("날짜 파라미터가 필요합니다.", field="date")
            day = parse_iso_date(date_param)

            statuses = container.attendance_ledger.load_for_date(group.class_group_id, day)
            return jsonify(
                {
                    "date": day.isoformat(),
                    "attendances": [AttendanceEntry(student_id=sid, status=st).to_dict() for sid, st in statuses.items()],
                    "recorded": container.attendance_ledger.exists_for_date(group.class_group_id, day),
                }
            ), 200
        except Exception as e:
            return error_response(e, fallback="출결 조회 중 오류가 발생했습니다.")

    @app.route(path, methods=["POST"], endpoint="attendance_save")
    @teacher_required
    def attendance_save(course_id: int, class_group_id: int):
        try:
            ctx = current_context(course_id)
            group = container.class_group_store.get(ctx, class_group_id)

            body = request.get_json(silent=True)
            if not isinstance(body, dict):
                raise ValidationError("입력 데이터가 올바르지 않습니다.")
            day = parse_iso_date(str(body.get("date") or ""))
            raw_entries = body.get("attendances", body.get("entries"))
            if not isinstance(raw_entries, list):
                raise ValidationError("출결 목록이 필요합니다.", field="attendances")
            entries = [AttendanceEntry.from_payload(r) for r in raw_entries]

            count = container.attendance_ledger.save(group.class_group_id, day, entries, teacher_id=ctx.teacher_id)
            return jsonify({"message": "출결이 성공적으로 저장되었습니다.", "count": count}), 200
        except Exception as e:
            return error_response(e, fallback="출결 저장 중 오류가 발생했습니다.")
