from __future__ import annotations

from functools import wraps

from flask import current_app, jsonify, session

from ..core.enums import Role
from ..core.exceptions import AuthorizationError, NotFoundError, PersistenceError, ValidationError
from ..courses.model import CourseContext


def teacher_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return jsonify({"error": "로그인이 필요합니다."}), 401
        if session.get("role") != Role.TEACHER.value:
            return error_response(AuthorizationError("교사만 이용할 수 있습니다."))
        return view(*args, **kwargs)

    return wrapper


def current_context(course_id: int) -> CourseContext:
    return CourseContext(course_id=int(course_id), teacher_id=int(session["user_id"]))


def error_response(e: Exception, *, fallback: str = "요청 처리 중 오류가 발생했습니다."):
    """Map domain errors to JSON responses; anything else is logged and reported as 500."""

    if isinstance(e, ValidationError):
        body = {"error": str(e)}
        if e.field:
            body["field"] = e.field
        return jsonify(body), 400
    if isinstance(e, AuthorizationError):
        return jsonify({"error": str(e)}), 403
    if isinstance(e, NotFoundError):
        return jsonify({"error": str(e)}), 404
    if isinstance(e, PersistenceError):
        current_app.logger.error("%s: %s", fallback, e)
        return jsonify({"error": fallback}), 500

    current_app.logger.exception(fallback)
    return jsonify({"error": fallback}), 500
