"""In-memory EventPublisher for tests and local runs."""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

from clientele.interfaces.event_publisher import EventPublisher, EventPublishError

if TYPE_CHECKING:
    from clientele.domain.events import CloudEvent

logger = logging.getLogger(__name__)


class InMemoryEventPublisher(EventPublisher):
    """Records published events in order.

    Call `fail_next` to make upcoming publishes raise, e.g. to exercise the
    "committed but not announced" path.
    """

    def __init__(self) -> None:
        self.events: list[CloudEvent] = []
        self._failures: list[EventPublishError] = []
        self._lock = threading.Lock()

    def fail_next(self, error: EventPublishError | None = None, times: int = 1) -> None:
        """Arm the publisher to raise `error` for the next `times` publishes."""
        error = error or EventPublishError("Broker rejected the event")
        with self._lock:
            self._failures.extend([error] * times)

    def publish(self, event: CloudEvent, timeout: float) -> None:
        with self._lock:
            if self._failures:
                raise self._failures.pop(0)
            self.events.append(event)
        logger.debug("Recorded event %s (%s) for %s", event.id, event.type.value, event.subject)
