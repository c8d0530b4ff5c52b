"""Event publisher adapters."""

from .memory import InMemoryEventPublisher
from .redis_streams import RedisStreamsEventPublisher

__all__ = ["InMemoryEventPublisher", "RedisStreamsEventPublisher"]
