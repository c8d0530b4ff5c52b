"""Ports for CLIENTELE: storage, identifiers, events, and units of work."""

from .customer_store import CustomerStore
from .event_publisher import EventPublisher, EventPublishError, EventPublishTimeout
from .id_generator import IdGenerator, NumericIdGenerator
from .results import Failure, FailureKind, Ok, StoreError, StoreResult
from .unit_of_work import AbstractUnitOfWork

__all__ = [
    "AbstractUnitOfWork",
    "CustomerStore",
    "EventPublishError",
    "EventPublishTimeout",
    "EventPublisher",
    "Failure",
    "FailureKind",
    "IdGenerator",
    "NumericIdGenerator",
    "Ok",
    "StoreError",
    "StoreResult",
]
