"""Customer aggregate and its embedded value objects.

The aggregate is a plain immutable record. Field-level rules live in
`clientele.domain.validation`; the JSON document form lives in
`clientele.domain.codec`. Attribute names are snake_case here and camelCase
in the stored document.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime

# pylint: disable=too-many-instance-attributes


@dataclass(frozen=True, slots=True)
class Address:
    """A postal address embedded in a customer."""

    type: str | None = None
    line1: str | None = None
    line2: str | None = None
    line3: str | None = None
    city: str | None = None
    state: str | None = None
    postal_code: str | None = None
    country: str | None = None


@dataclass(frozen=True, slots=True)
class Email:
    """An email address embedded in a customer.

    `primary` is informational only; several entries may claim it.
    """

    email: str | None = None
    type: str | None = None
    primary: bool = False


@dataclass(frozen=True, slots=True)
class Phone:
    """A phone number embedded in a customer."""

    type: str | None = None
    country_code: str | None = None
    number: str | None = None


@dataclass(frozen=True, slots=True)
class Customer:
    """The Customer aggregate root.

    Attributes:
        id: 64-bit TSID, assigned once by the service before first persistence.
        type: Classification of the customer (e.g. "INDIVIDUAL").
        first_name: Given name.
        last_name: Family name.
        middle_name: Optional middle name.
        suffix: Optional suffix (e.g. "Jr.").
        addresses: Ordered postal addresses.
        emails: Ordered email addresses; at least one is required.
        phones: Ordered phone numbers.
        created_at: Set once at creation (UTC).
        updated_at: Recomputed on every successful mutation (UTC).
    """

    type: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    middle_name: str | None = None
    suffix: str | None = None
    addresses: tuple[Address, ...] = field(default_factory=tuple)
    emails: tuple[Email, ...] = field(default_factory=tuple)
    phones: tuple[Phone, ...] = field(default_factory=tuple)
    id: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def email_addresses(self) -> tuple[str, ...]:
        """Every non-empty email value carried by this customer, in order."""
        return tuple(e.email for e in self.emails if e.email)

    def stamped(  # pylint: disable=redefined-builtin
        self, *, id: int, created_at: datetime, updated_at: datetime
    ) -> Customer:
        """Return a copy carrying the server-owned identity and timestamps."""
        return replace(self, id=id, created_at=created_at, updated_at=updated_at)
