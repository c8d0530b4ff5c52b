"""Customer events, shaped as CloudEvents 1.0 envelopes."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Any

from .codec import format_timestamp

EVENT_SOURCE = "/customer/events"
SPEC_VERSION = "1.0"
JSON_CONTENT_TYPE = "application/json"


class InvalidEventError(ValueError):
    """Raised when a CloudEvent envelope is malformed."""


class CustomerEventType(str, Enum):
    """Kinds of customer mutation announced to consumers."""

    CREATED = "Customer::created"
    UPDATED = "Customer::updated"
    DELETED = "Customer::deleted"


@dataclass(frozen=True, slots=True)
class CloudEvent:
    """A CloudEvents 1.0 envelope carrying a customer document.

    `data` is the persisted customer document (the pre-deletion snapshot for
    DELETED events). `subject` is the customer id as a string.
    """

    id: str
    type: CustomerEventType
    subject: str
    time: datetime
    data: dict[str, Any]
    source: str = EVENT_SOURCE
    datacontenttype: str = JSON_CONTENT_TYPE
    specversion: str = SPEC_VERSION

    def __post_init__(self) -> None:
        if not self.id.strip() or not self.subject.strip() or not self.source.strip():
            raise InvalidEventError("id, subject and source must be non-empty.")
        if self.time.tzinfo is None or self.time.utcoffset() != timedelta(0):
            raise InvalidEventError("time must be tz-aware UTC.")

    def to_dict(self) -> dict[str, Any]:
        """Structured-mode JSON representation."""
        return {
            "specversion": self.specversion,
            "id": self.id,
            "source": self.source,
            "type": self.type.value,
            "subject": self.subject,
            "time": format_timestamp(self.time),
            "datacontenttype": self.datacontenttype,
            "data": self.data,
        }
