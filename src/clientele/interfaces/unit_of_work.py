"""Unit of Work interface for CLIENTELE.

Defines the AbstractUnitOfWork contract: a context-managed unit of work
exposing a CustomerStore, with abstract commit/rollback methods.
"""

from __future__ import annotations

import abc

from .customer_store import CustomerStore


class AbstractUnitOfWork(abc.ABC):
    """Contract for a transactional unit of work.

    A unit may be entered many times in sequence, but it is not thread-safe:
    `customers` and any transaction state live on the instance for the
    duration of a ``with`` block. Give each thread its own unit.
    """

    customers: CustomerStore

    def __enter__(self) -> AbstractUnitOfWork:
        """Enter the unit of work context and return the unit.

        Implementations may acquire transactional resources here and raise
        `StoreError` if they cannot.
        """
        return self

    def __exit__(self, *args):
        """Exit the unit of work context.

        Default behavior is to roll back on exit.
        """
        self.rollback()

    @abc.abstractmethod
    def commit(self):
        """Persist changes and finalize the transaction.

        Raises:
            StoreError: If the transaction could not be committed.
        """

    @abc.abstractmethod
    def rollback(self):
        """Revert changes and clean up transactional resources."""
