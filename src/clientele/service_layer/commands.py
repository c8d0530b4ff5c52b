"""Module defining Commands."""

from dataclasses import dataclass
from typing import Any

from clientele.domain.model import Customer


@dataclass(frozen=True)
class Command:
    """Base class for all commands."""


@dataclass(frozen=True)
class CreateCustomer(Command):
    """Create a customer. A supplied `customer.id` must not already exist."""

    customer: Customer


@dataclass(frozen=True)
class UpdateCustomer(Command):
    """Replace every client-owned field of an existing customer."""

    customer_id: int
    customer: Customer


@dataclass(frozen=True)
class PatchCustomer(Command):
    """Apply an RFC 7396 merge patch document to an existing customer."""

    customer_id: int
    patch: Any


@dataclass(frozen=True)
class DeleteCustomer(Command):
    """Hard-delete an existing customer."""

    customer_id: int
