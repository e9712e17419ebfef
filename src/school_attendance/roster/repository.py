from __future__ import annotations

from typing import Mapping, Protocol, Sequence

from .model import StudentInfo


class RosterDirectory(Protocol):
    """Read-only lookup of student profiles owned by the user directory."""

    def resolve(self, student_ids: Sequence[str]) -> Mapping[str, StudentInfo]:
        """Return only the ids that could be found."""

        raise NotImplementedError
