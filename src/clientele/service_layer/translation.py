"""Translation of storage results and unexpected errors into domain outcomes."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, TypeVar, assert_never

from clientele.domain.codec import DocumentShapeError, from_document
from clientele.domain.errors import (
    CustomerConflictError,
    CustomerError,
    CustomerNotFoundError,
    IllegalInputError,
    InternalServiceError,
    ServiceUnavailableError,
)
from clientele.domain.model import Customer
from clientele.interfaces.results import Failure, FailureKind, Ok, StoreError, StoreResult

T = TypeVar("T")

logger = logging.getLogger(__name__)


def to_domain_error(failure: Failure) -> CustomerError:
    """Map a storage `Failure` onto its domain outcome."""
    match failure.kind:
        case FailureKind.NOT_FOUND:
            return CustomerNotFoundError(failure.message)
        case FailureKind.CONFLICT:
            return CustomerConflictError(failure.message)
        case FailureKind.UNAVAILABLE:
            return ServiceUnavailableError(failure.message)
        case FailureKind.INTERNAL:
            return InternalServiceError(failure.message)
        case _:
            assert_never(failure.kind)


def unwrap(result: StoreResult[T]) -> T:
    """Return the value of an `Ok`, or raise the domain outcome of a `Failure`."""
    match result:
        case Ok(value):
            return value
        case Failure() as failure:
            raise to_domain_error(failure) from failure.cause
        case _:
            assert_never(result)


def decode_customer(document: Any) -> Customer:
    """Decode a request document, reporting shape problems as IllegalInput."""
    try:
        return from_document(document)
    except DocumentShapeError as e:
        raise IllegalInputError.from_violations(e.violations) from e


def _log_outcome(action: str, error: CustomerError) -> None:
    if isinstance(error, InternalServiceError):
        logger.exception("Failed to %s: %s", action, error)
    elif isinstance(error, ServiceUnavailableError):
        logger.error("Failed to %s: %s", action, error)
    elif isinstance(error, IllegalInputError):
        logger.info("Rejected request to %s: %s", action, error)
    else:
        logger.warning("Failed to %s: %s", action, error)


@contextmanager
def domain_errors(action: str) -> Iterator[None]:
    """Make every failure inside the block surface as a `CustomerError`.

    - `CustomerError` passes through unchanged.
    - `StoreError` (transaction could not open or commit) is translated by kind.
    - Anything else becomes `InternalServiceError`, chained to the original.

    Every outcome is logged once, at a level matching its severity.

    Args:
        action: What was attempted, e.g. ``"create customer"``.
    """
    try:
        yield
    except CustomerError as e:
        _log_outcome(action, e)
        raise
    except StoreError as e:
        error = to_domain_error(e.failure)
        _log_outcome(action, error)
        raise error from e
    except Exception as e:  # pylint: disable=broad-except
        logger.exception("Unexpected error while trying to %s", action)
        raise InternalServiceError(f"Unexpected error while trying to {action}") from e
