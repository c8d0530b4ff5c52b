"""Keyset pagination over customer ids.

Pages are addressed by the id of the last customer already seen, not by an
offset. Each page asks the store for one row more than requested; the extra
row only signals that another page exists. Per-page cost is therefore
independent of how many pages came before, and no count query is needed.

Ids are TSIDs, so ascending id order is approximately creation order.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from clientele.domain.errors import IllegalInputError
from clientele.domain.validation import FieldViolation

from .translation import unwrap

if TYPE_CHECKING:
    from clientele.domain.model import Customer
    from clientele.interfaces.customer_store import CustomerStore

DEFAULT_LIMIT = 20
MIN_LIMIT = 1
MAX_LIMIT = 100


@dataclass(frozen=True, slots=True)
class PageRequest:
    """A request for one page of customers.

    Attributes:
        cursor: Return customers with id strictly greater than this; ``None``
            starts from the beginning. An id that does not exist is fine.
        limit: Page size, between 1 and 100.

    Raises:
        IllegalInputError: If `limit` is out of range or `cursor` is negative.
    """

    cursor: int | None = None
    limit: int = DEFAULT_LIMIT

    def __post_init__(self) -> None:
        if isinstance(self.limit, bool) or not MIN_LIMIT <= self.limit <= MAX_LIMIT:
            raise IllegalInputError(
                f"limit must be between {MIN_LIMIT} and {MAX_LIMIT}",
                [
                    FieldViolation(
                        "limit",
                        f"must be between {MIN_LIMIT} and {MAX_LIMIT}",
                        self.limit,
                    )
                ],
            )
        if self.cursor is not None and self.cursor < 0:
            raise IllegalInputError(
                "cursor must not be negative",
                [FieldViolation("cursor", "must not be negative", self.cursor)],
            )


@dataclass(frozen=True, slots=True)
class CustomerPage:
    """One page of customers in ascending id order.

    Attributes:
        data: Up to `limit` customers.
        next_cursor: Id of the last customer in `data` when `has_more`, else ``None``.
        has_more: Whether a further page exists (as of this read).
        limit: The page size that was requested.
    """

    data: tuple[Customer, ...]
    next_cursor: int | None
    has_more: bool
    limit: int


def fetch_page(store: CustomerStore, request: PageRequest) -> CustomerPage:
    """Read one page from `store`.

    Raises:
        CustomerError: The domain outcome of a failed store call.
    """
    rows = unwrap(store.page_after(request.cursor, request.limit + 1))
    if len(rows) > request.limit:
        data = tuple(rows[: request.limit])
        return CustomerPage(
            data=data, next_cursor=data[-1].id, has_more=True, limit=request.limit
        )
    return CustomerPage(
        data=tuple(rows), next_cursor=None, has_more=False, limit=request.limit
    )
