"""Tagged results returned by storage-facing calls.

Storage adapters never let driver exceptions escape. Each call returns either
`Ok(value)` or `Failure(kind, message, cause)`, and the service layer maps the
closed set of `FailureKind` values onto domain outcomes.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeAlias, TypeVar

T = TypeVar("T")

__all__ = ["Failure", "FailureKind", "Ok", "StoreError", "StoreResult"]


class FailureKind(Enum):
    """Closed set of storage failure categories."""

    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    UNAVAILABLE = "unavailable"
    INTERNAL = "internal"


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Successful storage call."""

    value: T


@dataclass(frozen=True, slots=True)
class Failure:
    """Failed storage call.

    Attributes:
        kind: Category used to pick the domain outcome.
        message: Caller-safe description.
        cause: Original exception, kept for logging only.
    """

    kind: FailureKind
    message: str
    cause: BaseException | None = None


StoreResult: TypeAlias = Ok[T] | Failure


class StoreError(Exception):
    """Raised when a transaction cannot be opened or committed.

    Wraps the classified `Failure` so callers handle it like any other result.
    """

    def __init__(self, failure: Failure) -> None:
        super().__init__(failure.message)
        self.failure = failure
