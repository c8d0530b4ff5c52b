"""Interfaces for ID generators."""

import abc

# pylint: disable=too-few-public-methods


class IdGenerator(abc.ABC):
    """Contract for a string ID generator (event ids)."""

    @abc.abstractmethod
    def new_id(self) -> str:
        """Generate a new unique identifier."""


class NumericIdGenerator(abc.ABC):
    """Contract for a 64-bit ID generator (aggregate ids).

    Values returned by one instance strictly increase, so they can drive
    keyset pagination.
    """

    @abc.abstractmethod
    def new_id(self) -> int:
        """Generate a new unique, positive 64-bit identifier."""
