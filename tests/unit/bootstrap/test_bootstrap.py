"""Unit tests for application wiring."""

import functools

import pytest

from clientele import config
from clientele.adapters.event_publishers import (
    InMemoryEventPublisher,
    RedisStreamsEventPublisher,
)
from clientele.adapters.id_generators import SequenceIdGenerator, SimpleIdGenerator
from clientele.adapters.unit_of_work import InMemoryUnitOfWork, SqlAlchemyUnitOfWork
from clientele.bootstrap import AppContainer, bootstrap, inject_dependencies
from clientele.bootstrap.bootstrap import build_publisher
from clientele.config import Settings
from clientele.service_layer import commands
from tests.helpers.clock import T0, FakeClock


def test_inject_dependencies_binds_declared_parameters_only():
    def handler(cmd, uow, clock):
        return cmd, uow, clock

    bound = inject_dependencies(handler, {"uow": "U", "clock": "C", "publisher": "P"})

    assert isinstance(bound, functools.partial)
    assert bound.keywords == {"uow": "U", "clock": "C"}
    assert bound("cmd") == ("cmd", "U", "C")


def test_bootstrap_with_injected_collaborators(make_customer):
    uow, publisher = InMemoryUnitOfWork(), InMemoryEventPublisher()
    container = bootstrap(
        Settings(db_url="sqlite://", node_id=0, publish_timeout_s=1.5),
        uow=uow,
        publisher=publisher,
        id_generator=SequenceIdGenerator(start=5),
        event_ids=SimpleIdGenerator(),
        clock=FakeClock(),
    )

    assert isinstance(container, AppContainer)
    saved = container.message_bus.handle(commands.CreateCustomer(make_customer()))
    assert saved.id == 5
    assert saved.created_at == T0
    assert container.uow is uow
    assert publisher.events[0].id == SimpleIdGenerator().new_id()


def test_bootstrap_builds_defaults_from_settings(tmp_path):
    container = bootstrap(
        Settings(db_url=f"sqlite:///{tmp_path / 'c.db'}", node_id=4)
    )
    assert isinstance(container.uow, SqlAlchemyUnitOfWork)
    assert isinstance(container.publisher, InMemoryEventPublisher)
    container.uow.engine.dispose()


def test_bootstrap_reads_environment(monkeypatch):
    monkeypatch.delenv(config.DB_URL_ENV, raising=False)
    with pytest.raises(config.DatabaseUrlNotSetError):
        bootstrap()


def test_publisher_selection(caplog):
    redis_settings = Settings(
        db_url="sqlite://", node_id=0, redis_url="redis://localhost:6379/0"
    )
    publisher = build_publisher(redis_settings)
    assert isinstance(publisher, RedisStreamsEventPublisher)
    assert publisher.stream == "customer-events"

    assert isinstance(
        build_publisher(Settings(db_url="sqlite://", node_id=0)), InMemoryEventPublisher
    )
    assert config.REDIS_URL_ENV in caplog.text
