from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import current_context, error_response, teacher_required
from ..container import Container
from .model import ClassGroupInput


def register(app: Flask, container: Container) -> None:
    base = "/api/courses/<int:course_id>/class-groups"

    @app.route(base, methods=["GET"], endpoint="class_groups_list")
    @teacher_required
    def class_groups_list(course_id: int):
        try:
            groups = container.class_group_store.list(current_context(course_id))
            return jsonify({"classGroups": [g.to_dict() for g in groups]}), 200
        except Exception as e:
            return error_response(e, fallback="학반 조회 중 오류가 발생했습니다.")

    @app.route(base, methods=["POST"], endpoint="class_groups_create")
    @teacher_required
    def class_groups_create(course_id: int):
        try:
            data = ClassGroupInput.from_payload(request.get_json(silent=True))
            group = container.class_group_store.create(current_context(course_id), data)
            return jsonify({"message": "학반이 성공적으로 생성되었습니다.", "classGroup": group.to_dict()}), 201
        except Exception as e:
            return error_response(e, fallback="학반 생성 중 오류가 발생했습니다.")

    @app.route(f"{base}/<int:class_group_id>", methods=["PUT"], endpoint="class_groups_update")
    @teacher_required
    def class_groups_update(course_id: int, class_group_id: int):
        try:
            data = ClassGroupInput.from_payload(request.get_json(silent=True))
            group = container.class_group_store.update(current_context(course_id), class_group_id, data)
            return jsonify({"message": "학반이 성공적으로 수정되었습니다.", "classGroup": group.to_dict()}), 200
        except Exception as e:
            return error_response(e, fallback="학반 수정 중 오류가 발생했습니다.")

    @app.route(f"{base}/<int:class_group_id>", methods=["DELETE"], endpoint="class_groups_delete")
    @teacher_required
    def class_groups_delete(course_id: int, class_group_id: int):
        try:
            container.class_group_store.delete(current_context(course_id), class_group_id)
            return jsonify({"message": "학반이 성공적으로 삭제되었습니다."}), 200
        except Exception as e:
            return error_response(e, fallback="학반 삭제 중 오류가 발생했습니다.")
