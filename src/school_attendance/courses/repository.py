from __future__ import annotations

from typing import Optional, Protocol

from .model import Course


class CourseRepository(Protocol):
    def get_owned(self, *, course_id: int, teacher_id: int) -> Optional[Course]:
        """Course if it exists and belongs to the teacher, else None."""

        raise NotImplementedError
