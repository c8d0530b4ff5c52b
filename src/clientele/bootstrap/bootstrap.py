"""Bootstrap the message bus with handlers, unit of work and collaborators."""

from __future__ import annotations

import functools
import inspect
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from clientele import config
from clientele.adapters.db.engine import make_engine
from clientele.adapters.event_publishers import (
    InMemoryEventPublisher,
    RedisStreamsEventPublisher,
)
from clientele.adapters.id_generators import TsidGenerator, ULIDGenerator
from clientele.adapters.unit_of_work import SqlAlchemyUnitOfWork
from clientele.service_layer.handlers import COMMAND_HANDLERS, Clock, utc_now
from clientele.service_layer.messagebus import MessageBus

if TYPE_CHECKING:
    from clientele.interfaces.event_publisher import EventPublisher
    from clientele.interfaces.id_generator import IdGenerator, NumericIdGenerator
    from clientele.interfaces.unit_of_work import AbstractUnitOfWork
    from clientele.service_layer.commands import Command

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AppContainer:
    """Wired application objects handed to entrypoints.

    `uow` is one unit of work reused by every call. A unit keeps its open
    connection on the instance, so it serves one ``with`` block at a time:
    a multi-threaded entrypoint gives each worker thread its own container,
    or its own `SqlAlchemyUnitOfWork` over the shared (thread-safe) engine.
    """

    message_bus: MessageBus
    uow: AbstractUnitOfWork
    publisher: EventPublisher
    settings: config.Settings


def build_write_uow(
    url: str, statement_timeout_ms: int | None = None
) -> AbstractUnitOfWork:
    """Build a new unit of work for the database at `url`."""
    engine = make_engine(url)
    return SqlAlchemyUnitOfWork(engine, statement_timeout_ms=statement_timeout_ms)


def build_publisher(settings: config.Settings) -> EventPublisher:
    """Redis Streams publisher when a Redis URL is configured, else in-memory."""
    if settings.redis_url:
        return RedisStreamsEventPublisher(settings.redis_url, settings.event_stream)
    logger.warning(
        "%s is not set; customer events are kept in memory and not delivered",
        config.REDIS_URL_ENV,
    )
    return InMemoryEventPublisher()


def build_message_bus(  # pylint: disable=too-many-arguments
    uow: AbstractUnitOfWork,
    command_handlers: Mapping[type[Command], Callable[..., Any]],
    *,
    publisher: EventPublisher,
    id_generator: NumericIdGenerator,
    event_ids: IdGenerator,
    clock: Clock = utc_now,
    publish_timeout: float = config.DEFAULT_PUBLISH_TIMEOUT_S,
) -> MessageBus:
    """Build a message bus with injected dependencies."""
    dependencies = {
        "uow": uow,
        "publisher": publisher,
        "id_generator": id_generator,
        "event_ids": event_ids,
        "clock": clock,
        "publish_timeout": publish_timeout,
    }
    injected_command_handlers = {
        command_type: inject_dependencies(handler, dependencies)
        for command_type, handler in command_handlers.items()
    }

    return MessageBus(uow, command_handlers=injected_command_handlers)


def bootstrap(  # pylint: disable=too-many-arguments
    settings: config.Settings | None = None,
    *,
    uow: AbstractUnitOfWork | None = None,
    publisher: EventPublisher | None = None,
    id_generator: NumericIdGenerator | None = None,
    event_ids: IdGenerator | None = None,
    clock: Clock = utc_now,
) -> AppContainer:
    """Assemble the application.

    Anything not passed in is built from `settings` (read from the
    environment when omitted).

    Raises:
        DatabaseUrlNotSetError: If settings are read and no DB URL is set.
        ConfigurationError: If an environment setting is malformed.
    """
    settings = settings or config.load_settings()
    uow = uow or build_write_uow(settings.db_url, settings.statement_timeout_ms)
    publisher = publisher or build_publisher(settings)
    id_generator = id_generator or TsidGenerator(settings.node_id)
    event_ids = event_ids or ULIDGenerator()

    logger.debug(
        "Bootstrapped with node id %s, publisher %s, publish timeout %ss",
        settings.node_id,
        type(publisher).__name__,
        settings.publish_timeout_s,
    )

    message_bus = build_message_bus(
        uow,
        COMMAND_HANDLERS,
        publisher=publisher,
        id_generator=id_generator,
        event_ids=event_ids,
        clock=clock,
        publish_timeout=settings.publish_timeout_s,
    )
    return AppContainer(
        message_bus=message_bus, uow=uow, publisher=publisher, settings=settings
    )


def inject_dependencies(
    handler: Callable, dependencies: Mapping[str, object]
) -> Callable:
    """Bind the dependencies a handler declares (by parameter name)."""
    params = inspect.signature(handler).parameters
    deps = {
        name: dependency for name, dependency in dependencies.items() if name in params
    }
    return functools.partial(handler, **deps)
