"""Customer store interface.

The store persists whole Customer aggregates as documents keyed by id. It is
the only writer of the persisted representation, and it runs the storage-level
email uniqueness check inside `save`, in the same transaction as the write.

All methods return a `StoreResult`; none raise for storage problems.
"""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from clientele.domain.model import Customer

    from .results import StoreResult


class CustomerStore(abc.ABC):
    """Contract for customer persistence."""

    @abc.abstractmethod
    def get(
        self, customer_id: int, *, for_update: bool = False
    ) -> StoreResult[Customer]:
        """Load one customer.

        Args:
            customer_id: Id of the customer.
            for_update: Lock the row until the enclosing transaction ends.

        Returns:
            `Ok(customer)`, or `Failure(NOT_FOUND)` when absent.
        """

    @abc.abstractmethod
    def exists(self, customer_id: int) -> StoreResult[bool]:
        """Return whether a customer with `customer_id` is stored."""

    @abc.abstractmethod
    def save(self, customer: Customer) -> StoreResult[Customer]:
        """Insert or replace `customer` by id.

        Before writing, every email in `customer` is locked for the rest of the
        transaction and checked against all *other* customers.

        Returns:
            `Ok(customer)`, or `Failure(CONFLICT)` if another customer already
            holds one of its emails.
        """

    @abc.abstractmethod
    def delete(self, customer_id: int) -> StoreResult[None]:
        """Hard-delete a customer; `Failure(NOT_FOUND)` when absent."""

    @abc.abstractmethod
    def find_by_email(
        self, email: str, *, exclude_id: int | None = None
    ) -> StoreResult[Customer]:
        """Find the customer whose document contains `email`.

        Args:
            email: Exact email value to look for.
            exclude_id: Ignore this customer (used to look for *other* holders).

        Returns:
            `Ok(customer)`, or `Failure(NOT_FOUND)` when no customer matches.
        """

    @abc.abstractmethod
    def page_after(
        self, cursor: int | None, limit: int
    ) -> StoreResult[list[Customer]]:
        """Return up to `limit` customers with id > `cursor`, ascending by id.

        A `cursor` of ``None`` starts from the lowest id.
        """
