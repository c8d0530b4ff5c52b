"""Domain outcomes surfaced to callers of the customer service.

Every failure a caller can observe is one of five exceptions rooted at
`CustomerError`. Each class carries the wire semantics of its outcome so that
entrypoints can render it without a lookup table of their own.

| Outcome                    | status | retryable |
|----------------------------|--------|-----------|
| IllegalInputError          | 400    | no        |
| CustomerNotFoundError      | 404    | no        |
| CustomerConflictError      | 409    | no        |
| ServiceUnavailableError    | 503    | yes       |
| InternalServiceError       | 500    | no        |
"""

from __future__ import annotations

from typing import ClassVar

from .validation import FieldViolation


class CustomerError(Exception):
    """Base class for all customer service outcomes."""

    status: ClassVar[int] = 500
    title: ClassVar[str] = "Internal Error"
    retryable: ClassVar[bool] = False

    @property
    def error_code(self) -> str:
        """Stable machine-readable code derived from the title."""
        return self.title.upper().replace(" ", "_")


# ============================================================================
#                               Client errors
# ============================================================================


class IllegalInputError(CustomerError):
    """The request was rejected before touching storage.

    Attributes:
        violations: Field-qualified reasons, possibly empty for request-level
            problems (e.g. a path id that disagrees with the body).
    """

    status = 400
    title = "Validation Error"

    def __init__(
        self, message: str, violations: list[FieldViolation] | None = None
    ) -> None:
        super().__init__(message)
        self.violations = list(violations or [])

    @classmethod
    def from_violations(cls, violations: list[FieldViolation]) -> IllegalInputError:
        """Build an error whose message lists every violation."""
        return cls("; ".join(str(v) for v in violations), violations)


class CustomerNotFoundError(CustomerError):
    """No customer matches the requested id or email."""

    status = 404
    title = "Customer Not Found"


class CustomerConflictError(CustomerError):
    """The write would break a uniqueness or integrity rule."""

    status = 409
    title = "Customer Conflict"


# ============================================================================
#                               Server errors
# ============================================================================


class ServiceUnavailableError(CustomerError):
    """Storage is temporarily unavailable; retry with backoff."""

    status = 503
    title = "Service Unavailable"
    retryable = True


class InternalServiceError(CustomerError):
    """Anything unanticipated, including codec failures and failed publishes."""

    status = 500
    title = "Internal Error"
