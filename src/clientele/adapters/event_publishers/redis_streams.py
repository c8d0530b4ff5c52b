"""Redis Streams EventPublisher.

Each CloudEvent becomes one stream entry (``XADD``) on the configured stream
(``customer-events`` by default). The entry carries a few routing fields plus
the structured-mode CloudEvent JSON. The stream is capped with an approximate
``MAXLEN`` so it cannot grow without bound.

The send timeout is enforced through redis-py socket timeouts; one client is
kept per distinct timeout value.
"""

from __future__ import annotations

import json
import logging
import threading
from collections.abc import Callable
from typing import TYPE_CHECKING

import redis

from clientele.config import DEFAULT_EVENT_STREAM
from clientele.interfaces.event_publisher import (
    EventPublisher,
    EventPublishError,
    EventPublishTimeout,
)

if TYPE_CHECKING:
    from clientele.domain.events import CloudEvent

logger = logging.getLogger(__name__)

ClientFactory = Callable[..., redis.Redis]


class RedisStreamsEventPublisher(EventPublisher):
    """Publish customer events to a Redis Stream.

    Args:
        redis_url: Connection URL, e.g. ``redis://localhost:6379/0``.
        stream: Stream key to append to.
        max_stream_length: Approximate cap passed as ``MAXLEN ~``.
        client_factory: Builds a client from a URL and socket options; defaults
            to `redis.Redis.from_url`.
    """

    def __init__(
        self,
        redis_url: str,
        stream: str = DEFAULT_EVENT_STREAM,
        *,
        max_stream_length: int = 100_000,
        client_factory: ClientFactory = redis.Redis.from_url,
    ) -> None:
        self.redis_url = redis_url
        self.stream = stream
        self.max_stream_length = max_stream_length
        self._client_factory = client_factory
        self._clients: dict[float, redis.Redis] = {}
        self._lock = threading.Lock()

    def _client(self, timeout: float) -> redis.Redis:
        with self._lock:
            if (client := self._clients.get(timeout)) is None:
                client = self._client_factory(
                    self.redis_url,
                    socket_timeout=timeout,
                    socket_connect_timeout=timeout,
                    decode_responses=True,
                )
                self._clients[timeout] = client
            return client

    def publish(self, event: CloudEvent, timeout: float) -> None:
        fields = {
            "id": event.id,
            "type": event.type.value,
            "subject": event.subject,
            "cloudevent": json.dumps(event.to_dict(), separators=(",", ":")),
        }
        try:
            entry_id = self._client(timeout).xadd(
                self.stream,
                fields,
                maxlen=self.max_stream_length,
                approximate=True,
            )
        except redis.exceptions.TimeoutError as e:
            raise EventPublishTimeout(
                f"Timed out after {timeout}s publishing {event.type.value} "
                f"for customer {event.subject}"
            ) from e
        except redis.exceptions.RedisError as e:
            raise EventPublishError(
                f"Failed to publish {event.type.value} for customer {event.subject}: {e}"
            ) from e

        logger.debug(
            "Published %s for customer %s to %s as %s",
            event.type.value,
            event.subject,
            self.stream,
            entry_id,
        )

    def close(self) -> None:
        """Close every client opened by this publisher."""
        with self._lock:
            for client in self._clients.values():
                client.close()
            self._clients.clear()
