"""Classification of SQLAlchemy errors into storage failures."""

from __future__ import annotations

import logging

from sqlalchemy import exc as sa_exc

from clientele.interfaces.results import Failure, FailureKind

logger = logging.getLogger(__name__)


def classify(error: Exception, action: str) -> Failure:
    """Map a driver/ORM exception onto a `Failure`.

    - `IntegrityError` (unique/primary key/check violations) -> CONFLICT
    - `OperationalError`, pool `TimeoutError`, `DisconnectionError` and any
      DBAPI error that invalidated its connection -> UNAVAILABLE
    - anything else -> INTERNAL

    Args:
        error: The exception raised by SQLAlchemy or the driver.
        action: Short description of what was attempted, used in the message.
    """
    if isinstance(error, sa_exc.IntegrityError):
        kind = FailureKind.CONFLICT
        message = f"Integrity violation while trying to {action}"
    elif isinstance(
        error,
        (sa_exc.OperationalError, sa_exc.TimeoutError, sa_exc.DisconnectionError),
    ) or (isinstance(error, sa_exc.DBAPIError) and error.connection_invalidated):
        kind = FailureKind.UNAVAILABLE
        message = f"Database unavailable while trying to {action}"
    else:
        kind = FailureKind.INTERNAL
        message = f"Unexpected database error while trying to {action}"

    logger.debug("%s classified as %s: %s", type(error).__name__, kind.name, error)
    return Failure(kind, message, error)
