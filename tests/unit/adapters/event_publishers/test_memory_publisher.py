"""Unit tests for the in-memory event publisher."""

from datetime import datetime, timezone

import pytest

from clientele.adapters.event_publishers import InMemoryEventPublisher
from clientele.domain.events import CloudEvent, CustomerEventType
from clientele.interfaces.event_publisher import EventPublishError, EventPublishTimeout


def _event(event_id: str = "e1") -> CloudEvent:
    return CloudEvent(
        id=event_id,
        type=CustomerEventType.UPDATED,
        subject="1",
        time=datetime(2024, 1, 1, tzinfo=timezone.utc),
        data={"id": 1},
    )


def test_records_events_in_order():
    """Published events are kept in publish order."""
    publisher = InMemoryEventPublisher()
    publisher.publish(_event("e1"), 1.0)
    publisher.publish(_event("e2"), 1.0)
    assert [e.id for e in publisher.events] == ["e1", "e2"]


def test_fail_next_raises_then_recovers():
    """An armed failure is raised once; later publishes succeed."""
    publisher = InMemoryEventPublisher()
    publisher.fail_next(EventPublishTimeout("slow broker"))

    with pytest.raises(EventPublishTimeout):
        publisher.publish(_event("e1"), 1.0)
    publisher.publish(_event("e2"), 1.0)

    assert [e.id for e in publisher.events] == ["e2"]


def test_fail_next_default_error_and_times():
    """By default a generic publish error is raised `times` times."""
    publisher = InMemoryEventPublisher()
    publisher.fail_next(times=2)
    for _ in range(2):
        with pytest.raises(EventPublishError):
            publisher.publish(_event(), 1.0)
    assert not publisher.events
