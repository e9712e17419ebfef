from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Course:
    course_id: int
    teacher_id: int
    title: str


@dataclass(frozen=True)
class CourseContext:
    """Who is acting on which course. Supplied by the session, never stored here."""

    course_id: int
    teacher_id: int
