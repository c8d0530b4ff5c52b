"""Read-only customer queries.

Queries bypass the message bus: they change nothing and publish nothing. Each
runs in its own unit of work, which is rolled back on exit.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from clientele.domain.errors import IllegalInputError
from clientele.domain.validation import FieldViolation, is_blank
from clientele.logging import mask_email

from .pagination import CustomerPage, PageRequest, fetch_page
from .translation import domain_errors, unwrap

if TYPE_CHECKING:
    from clientele.domain.model import Customer
    from clientele.interfaces.unit_of_work import AbstractUnitOfWork


def get_customer(customer_id: int, uow: AbstractUnitOfWork) -> Customer:
    """Return the customer with `customer_id` or raise CustomerNotFoundError."""
    with domain_errors(f"get customer {customer_id}"), uow:
        return unwrap(uow.customers.get(customer_id))


def find_customer_by_email(email: str, uow: AbstractUnitOfWork) -> Customer:
    """Return the customer holding `email` (exact match).

    Raises:
        IllegalInputError: If `email` is blank.
        CustomerNotFoundError: If no customer holds it.
    """
    with domain_errors(f"find customer by email {mask_email(email or '')}"):
        if is_blank(email):
            raise IllegalInputError(
                "email must not be blank",
                [FieldViolation("email", "must not be blank", email)],
            )
        with uow:
            return unwrap(uow.customers.find_by_email(email))


def list_customers(request: PageRequest, uow: AbstractUnitOfWork) -> CustomerPage:
    """Return one keyset page of customers (see `PageRequest`)."""
    with domain_errors(f"list customers after {request.cursor}"), uow:
        return fetch_page(uow.customers, request)
