"""Fixtures for generating customer test data."""

from __future__ import annotations

import itertools
from collections.abc import Callable
from typing import Any

import pytest

from clientele.domain.model import Address, Customer, Email, Phone

# pylint: disable=redefined-outer-name

_counter = itertools.count(1)  # for unique_email()


def unique_email(prefix: str = "customer") -> str:
    """Return an email address no other call in this session has returned."""
    return f"{prefix}.{next(_counter)}@example.com"


def customer_document(**overrides: Any) -> dict[str, Any]:
    """A valid customer document (camelCase keys) with sensible defaults.

    Keyword overrides replace top-level keys, e.g.
    ``customer_document(emails=[{"email": "a@x.io", "type": "WORK"}])``.
    """
    doc: dict[str, Any] = {
        "type": "INDIVIDUAL",
        "firstName": "Jane",
        "middleName": "Q",
        "lastName": "Doe",
        "addresses": [
            {
                "type": "HOME",
                "line1": "1 Main St",
                "city": "Springfield",
                "state": "IL",
                "postalCode": "62701",
                "country": "US",
            }
        ],
        "emails": [{"type": "PERSONAL", "email": unique_email(), "primary": True}],
        "phones": [{"type": "MOBILE", "countryCode": "1", "number": "555-0100"}],
    }
    doc.update(overrides)
    return doc


@pytest.fixture
def make_customer() -> Callable[..., Customer]:
    """Factory fixture: build a valid, unsaved `Customer`.

    Args (all keyword, defaults give a valid individual):
      - emails: tuple[str, ...] | None = one fresh unique address
      - first_name: str = "Jane"
      - last_name: str = "Doe"
      - any other `Customer` field as an override (e.g. ``id=...``)
    """

    def _make(
        *,
        emails: tuple[str, ...] | None = None,
        first_name: str = "Jane",
        last_name: str = "Doe",
        **overrides: Any,
    ) -> Customer:
        email_values = emails if emails is not None else (unique_email(),)
        fields: dict[str, Any] = {
            "type": "INDIVIDUAL",
            "first_name": first_name,
            "last_name": last_name,
            "addresses": (
                Address(
                    type="HOME",
                    line1="1 Main St",
                    city="Springfield",
                    state="IL",
                    postal_code="62701",
                    country="US",
                ),
            ),
            "emails": tuple(
                Email(email=address, type="PERSONAL", primary=i == 0)
                for i, address in enumerate(email_values)
            ),
            "phones": (Phone(type="MOBILE", country_code="1", number="555-0100"),),
        }
        fields.update(overrides)
        return Customer(**fields)

    return _make


@pytest.fixture
def make_document() -> Callable[..., dict[str, Any]]:
    """Factory fixture around `customer_document`."""
    return customer_document
