"""In-memory CustomerStore for tests and demos.

Committed documents live in an `InMemoryCustomerTable` that several stores
(one per unit of work) can share. A store stages its writes and applies them
on `commit`; `rollback` discards them.

Writers serialize on the table's write lock, which a store takes on its first
write (or `get(..., for_update=True)`) and holds until commit or rollback, the
same lifetime as a database transaction lock.
"""

from __future__ import annotations

import copy
import logging
import threading
from typing import Any

from clientele.domain.codec import DocumentShapeError, from_document, to_document
from clientele.domain.model import Customer
from clientele.interfaces.customer_store import CustomerStore
from clientele.interfaces.results import Failure, FailureKind, Ok, StoreResult
from clientele.logging import mask_email

logger = logging.getLogger(__name__)

_DELETED = None


class InMemoryCustomerTable:
    """Committed customer documents keyed by id."""

    def __init__(self) -> None:
        self.rows: dict[int, dict[str, Any]] = {}
        self.write_lock = threading.Lock()


class InMemoryCustomerStore(CustomerStore):
    """CustomerStore backed by a dict, with transactional staging."""

    def __init__(self, table: InMemoryCustomerTable | None = None) -> None:
        self.table = table if table is not None else InMemoryCustomerTable()
        self._staged: dict[int, dict[str, Any] | None] = {}
        self._holds_lock = False

    # --- transaction control (driven by the unit of work) ---

    def _acquire(self) -> None:
        if not self._holds_lock:
            self.table.write_lock.acquire()  # pylint: disable=consider-using-with
            self._holds_lock = True

    def _release(self) -> None:
        if self._holds_lock:
            self._holds_lock = False
            self.table.write_lock.release()

    def commit(self) -> None:
        """Apply staged writes to the table."""
        for customer_id, document in self._staged.items():
            if document is _DELETED:
                self.table.rows.pop(customer_id, None)
            else:
                self.table.rows[customer_id] = document
        self._staged.clear()
        self._release()

    def rollback(self) -> None:
        """Discard staged writes."""
        self._staged.clear()
        self._release()

    # --- helpers ---

    def _view(self) -> dict[int, dict[str, Any]]:
        rows = dict(self.table.rows)
        for customer_id, document in self._staged.items():
            if document is _DELETED:
                rows.pop(customer_id, None)
            else:
                rows[customer_id] = document
        return rows

    @staticmethod
    def _decode(document: dict[str, Any]) -> StoreResult[Customer]:
        try:
            return Ok(from_document(copy.deepcopy(document)))
        except DocumentShapeError as e:
            return Failure(
                FailureKind.INTERNAL, "Stored customer document is malformed", e
            )

    @staticmethod
    def _has_email(document: dict[str, Any], email: str) -> bool:
        return any(
            isinstance(entry, dict) and entry.get("email") == email
            for entry in document.get("emails") or []
        )

    # --- reads ---

    def get(
        self, customer_id: int, *, for_update: bool = False
    ) -> StoreResult[Customer]:
        if for_update:
            self._acquire()
        if (document := self._view().get(customer_id)) is None:
            return Failure(
                FailureKind.NOT_FOUND, f"Customer not found with id: {customer_id}"
            )
        return self._decode(document)

    def exists(self, customer_id: int) -> StoreResult[bool]:
        return Ok(customer_id in self._view())

    def find_by_email(
        self, email: str, *, exclude_id: int | None = None
    ) -> StoreResult[Customer]:
        for customer_id in sorted(rows := self._view()):
            if customer_id != exclude_id and self._has_email(rows[customer_id], email):
                return self._decode(rows[customer_id])
        return Failure(FailureKind.NOT_FOUND, f"Customer not found with email: {email}")

    def page_after(
        self, cursor: int | None, limit: int
    ) -> StoreResult[list[Customer]]:
        rows = self._view()
        ids = sorted(i for i in rows if cursor is None or i > cursor)[:limit]
        page: list[Customer] = []
        for customer_id in ids:
            match self._decode(rows[customer_id]):
                case Ok(customer):
                    page.append(customer)
                case Failure() as failure:
                    return failure
        return Ok(page)

    # --- writes ---

    def save(self, customer: Customer) -> StoreResult[Customer]:
        if customer.id is None:
            return Failure(
                FailureKind.INTERNAL, "Customer must carry an id before it is saved"
            )
        self._acquire()
        rows = self._view()
        for email in sorted(set(customer.email_addresses)):
            for other_id, document in rows.items():
                if other_id != customer.id and self._has_email(document, email):
                    logger.info(
                        "Email %s already held by customer %s; rejecting write for %s",
                        mask_email(email),
                        other_id,
                        customer.id,
                    )
                    return Failure(
                        FailureKind.CONFLICT,
                        f"Email {email} is already in use by customer {other_id}",
                    )

        self._staged[customer.id] = to_document(customer)
        return Ok(customer)

    def delete(self, customer_id: int) -> StoreResult[None]:
        self._acquire()
        if customer_id not in self._view():
            return Failure(
                FailureKind.NOT_FOUND, f"Customer not found with id: {customer_id}"
            )
        self._staged[customer_id] = _DELETED
        return Ok(None)
