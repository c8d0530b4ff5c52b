"""Event publisher interface.

Publishing is synchronous and bounded by a timeout. Delivery is at-least-once;
no ordering guarantee is assumed.
"""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from clientele.domain.events import CloudEvent

# pylint: disable=too-few-public-methods


class EventPublishError(Exception):
    """Raised when an event could not be handed to the broker."""


class EventPublishTimeout(EventPublishError):
    """Raised when the broker did not acknowledge within the timeout."""


class EventPublisher(abc.ABC):
    """Contract for an event publisher."""

    @abc.abstractmethod
    def publish(self, event: CloudEvent, timeout: float) -> None:
        """Publish `event`, waiting at most `timeout` seconds.

        Raises:
            EventPublishTimeout: If the broker did not answer in time.
            EventPublishError: On any other delivery failure.
        """
