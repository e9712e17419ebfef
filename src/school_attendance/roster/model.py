from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.constants import UNKNOWN_STUDENT_NAME


@dataclass(frozen=True)
class StudentInfo:
    """Display tuple from the roster directory."""

    id: str
    name: Optional[str]
    email: str
    resolved: bool = True

    @property
    def display_name(self) -> str:
        return self.name or self.email or UNKNOWN_STUDENT_NAME

    @classmethod
    def unknown(cls, student_id: str) -> "StudentInfo":
        return cls(id=student_id, name=None, email="", resolved=False)
