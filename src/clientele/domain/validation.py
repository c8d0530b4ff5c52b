"""Field-level validation for the Customer aggregate.

`validate` is pure: it never raises for an invalid customer and instead returns
every violation it finds, each qualified with the document path of the
offending field (e.g. ``emails[0].email``). The same function checks create and
replace payloads, merge-patch results, and rows read back from storage.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

from .model import Address, Customer, Email, Phone

__all__ = ["FieldViolation", "is_blank", "validate"]

MUST_NOT_BE_BLANK = "must not be blank"
MUST_NOT_BE_EMPTY = "must not be empty"
INVALID_EMAIL = "must be a well-formed email address"

EMAIL_RE = re.compile(
    r"^[A-Za-z0-9.!#$%&'*+/=?^_`{|}~-]+"
    r"@[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?"
    r"(?:\.[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?)*$"
)
PHONE_NUMBER_RE = re.compile(r"^[0-9\-\+\(\) ]{7,20}$")


@dataclass(frozen=True, slots=True)
class FieldViolation:
    """A single broken field rule.

    Attributes:
        field: Document path of the field, e.g. ``addresses[1].postalCode``.
        message: Human-readable description of the rule that failed.
        rejected_value: The offending value, as supplied.
    """

    field: str
    message: str
    rejected_value: Any = None

    def __str__(self) -> str:
        return f"{self.field} {self.message}"


class _Checker:
    """Accumulates violations while walking an aggregate."""

    def __init__(self) -> None:
        self.violations: list[FieldViolation] = []

    def add(self, path: str, message: str, value: Any) -> None:
        self.violations.append(FieldViolation(path, message, value))

    def required(self, path: str, value: str | None, max_len: int) -> None:
        if is_blank(value):
            self.add(path, MUST_NOT_BE_BLANK, value)
            return
        self.optional(path, value, max_len)

    def optional(self, path: str, value: str | None, max_len: int) -> None:
        if value is not None and len(value) > max_len:
            self.add(path, f"size must be between 0 and {max_len}", value)


def _check_address(check: _Checker, prefix: str, address: Address) -> None:
    check.required(f"{prefix}.type", address.type, 50)
    check.required(f"{prefix}.line1", address.line1, 255)
    check.optional(f"{prefix}.line2", address.line2, 255)
    check.optional(f"{prefix}.line3", address.line3, 255)
    check.required(f"{prefix}.city", address.city, 100)
    check.required(f"{prefix}.state", address.state, 100)
    check.required(f"{prefix}.postalCode", address.postal_code, 20)
    check.required(f"{prefix}.country", address.country, 100)


def _check_email(check: _Checker, prefix: str, email: Email) -> None:
    if is_blank(email.email):
        check.add(f"{prefix}.email", MUST_NOT_BE_BLANK, email.email)
    elif not EMAIL_RE.match(email.email):
        check.add(f"{prefix}.email", INVALID_EMAIL, email.email)
    check.required(f"{prefix}.type", email.type, 50)


def _check_phone(check: _Checker, prefix: str, phone: Phone) -> None:
    check.required(f"{prefix}.type", phone.type, 50)
    check.required(f"{prefix}.countryCode", phone.country_code, 5)
    if phone.number is None or not PHONE_NUMBER_RE.match(phone.number):
        check.add(
            f"{prefix}.number",
            f'must match "{PHONE_NUMBER_RE.pattern}"',
            phone.number,
        )


def validate(customer: Customer) -> list[FieldViolation]:
    """Return every field violation found in `customer` (empty when valid)."""

    check = _Checker()
    check.required("type", customer.type, 50)
    check.required("firstName", customer.first_name, 100)
    check.optional("middleName", customer.middle_name, 100)
    check.required("lastName", customer.last_name, 100)
    check.optional("suffix", customer.suffix, 50)

    for i, address in enumerate(customer.addresses):
        _check_address(check, f"addresses[{i}]", address)

    if not customer.emails:
        check.add("emails", MUST_NOT_BE_EMPTY, [])
    for i, email in enumerate(customer.emails):
        _check_email(check, f"emails[{i}]", email)

    for i, phone in enumerate(customer.phones):
        _check_phone(check, f"phones[{i}]", phone)

    return check.violations


def is_blank(value: str | None) -> bool:
    """True when `value` is None or only whitespace."""
    return value is None or not value.strip()
