"""RFC 7807 problem documents for customer service outcomes.

`to_problem` turns any `CustomerError` into a JSON-ready dict. The wire
semantics (status and title) come from the error class itself.

Example:
    ```python
    >>> problem = to_problem(CustomerNotFoundError("Customer not found with id: 7"),
    ...                      "/customers/7")
    >>> problem["status"], problem["errorCode"]
    (404, 'CUSTOMER_NOT_FOUND')
    ```
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from clientele.domain.codec import format_timestamp
from clientele.domain.errors import (
    CustomerError,
    IllegalInputError,
    InternalServiceError,
)

PROBLEM_TYPE_BASE = "https://api.example.com/errors"
INTERNAL_ERROR_DETAIL = "An unexpected error occurred"


def _detail(error: CustomerError) -> str:
    if isinstance(error, InternalServiceError) or type(error) is CustomerError:
        return INTERNAL_ERROR_DETAIL
    return str(error)


def _json_safe(value: Any) -> Any:
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, (list, tuple)):
        return [_json_safe(v) for v in value]
    if isinstance(value, dict):
        return {str(k): _json_safe(v) for k, v in value.items()}
    return str(value)


def to_problem(
    error: CustomerError, instance: str, *, now: datetime | None = None
) -> dict[str, Any]:
    """Render `error` as an RFC 7807 problem document.

    Args:
        error: The outcome to render.
        instance: URI reference identifying the failed request.
        now: Timestamp to stamp on the problem (defaults to the current time).

    Returns:
        A dict with ``type``, ``title``, ``status``, ``detail``, ``instance``,
        ``errorCode`` and ``timestamp``. Validation errors also carry
        ``errors``, one entry per violated field.
    """
    problem: dict[str, Any] = {
        "type": f"{PROBLEM_TYPE_BASE}/{error.status}",
        "title": error.title,
        "status": error.status,
        "detail": _detail(error),
        "instance": instance,
        "errorCode": error.error_code,
        "timestamp": format_timestamp(now or datetime.now(timezone.utc)),
    }
    if isinstance(error, IllegalInputError):
        problem["errors"] = [
            {
                "field": v.field,
                "message": v.message,
                "rejectedValue": _json_safe(v.rejected_value),
            }
            for v in error.violations
        ]
    return problem
