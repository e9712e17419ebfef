"""Course-scoped change notifications.

Views that show class groups subscribe for one course id and unsubscribe when
they close. Nothing here is global: the bus instance is created by the
container and handed to whoever needs it.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Callable, Iterator

from blinker import Signal

logger = logging.getLogger(__name__)

Listener = Callable[[int], None]


class ClassGroupEvents:
    def __init__(self) -> None:
        self._changed = Signal("class-groups-changed")

    @staticmethod
    def _sender(course_id: int) -> str:
        # blinker compares str senders by value
        return f"course:{int(course_id)}"

    def subscribe(self, course_id: int, listener: Listener) -> Callable[[], None]:
        """Register `listener(course_id)`; returns the matching unsubscribe callable."""
        sender = self._sender(course_id)

        def receiver(_sender: str) -> None:
            listener(int(course_id))

        self._changed.connect(receiver, sender=sender, weak=False)

        def unsubscribe() -> None:
            self._changed.disconnect(receiver, sender=sender)

        return unsubscribe

    @contextmanager
    def subscribed(self, course_id: int, listener: Listener) -> Iterator[None]:
        unsubscribe = self.subscribe(course_id, listener)
        try:
            yield
        finally:
            unsubscribe()

    def notify_changed(self, course_id: int) -> None:
        """Deliver to each listener of the course.

        Listeners run after the write is committed, so a failing listener is
        logged and never reported to the writer.
        """
        sender = self._sender(course_id)
        logger.debug("class groups changed for course %s", course_id)
        for receiver in list(self._changed.receivers_for(sender)):
            try:
                receiver(sender)
            except Exception:
                logger.exception("class-group listener failed for course %s", course_id)
