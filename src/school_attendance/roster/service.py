from __future__ import annotations

import logging
from typing import Sequence

from ..core.exceptions import PersistenceError
from .model import StudentInfo
from .repository import RosterDirectory

logger = logging.getLogger(__name__)


def resolve_roster(directory: RosterDirectory | None, student_ids: Sequence[str]) -> list[StudentInfo]:
    """Roster in the given order; ids the directory cannot resolve show as unknown.

    A directory outage degrades every row to unknown instead of failing the view.
    """
    found = {}
    if directory is not None and student_ids:
        try:
            found = dict(directory.resolve(list(student_ids)))
        except PersistenceError as e:
            logger.warning("roster directory unavailable, showing ids only: %s", e)

    return [found.get(sid) or StudentInfo.unknown(sid) for sid in student_ids]
