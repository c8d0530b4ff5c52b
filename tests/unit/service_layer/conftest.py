"""Fixtures for service layer tests: in-memory storage, a recording
publisher, deterministic ids and a controllable clock."""

from __future__ import annotations

import pytest

from clientele.adapters.event_publishers import InMemoryEventPublisher
from clientele.adapters.id_generators import SequenceIdGenerator, SimpleIdGenerator
from clientele.adapters.unit_of_work import InMemoryUnitOfWork
from clientele.bootstrap import build_message_bus
from clientele.service_layer.handlers import COMMAND_HANDLERS
from clientele.service_layer.messagebus import MessageBus
from tests.helpers.clock import FakeClock

# pylint: disable=redefined-outer-name


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def uow() -> InMemoryUnitOfWork:
    return InMemoryUnitOfWork()


@pytest.fixture
def publisher() -> InMemoryEventPublisher:
    return InMemoryEventPublisher()


@pytest.fixture
def bus(uow, publisher, clock) -> MessageBus:
    """A message bus wired to in-memory collaborators; ids start at 1001."""
    return build_message_bus(
        uow,
        COMMAND_HANDLERS,
        publisher=publisher,
        id_generator=SequenceIdGenerator(start=1001),
        event_ids=SimpleIdGenerator(),
        clock=clock,
        publish_timeout=0.5,
    )
