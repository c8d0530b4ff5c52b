"""Document codec for the Customer aggregate.

Converts between `Customer` and its JSON document (a plain `dict` with
camelCase keys). The document is what gets stored, patched, and published.

Rules:
- Optional values that are ``None`` are omitted from the document.
- Timestamps are ISO-8601 UTC with microseconds and a ``Z`` suffix.
- Unknown keys are ignored when decoding.
- Missing values decode to ``None`` so that `validate` reports them; values of
  the wrong JSON type are reported as a `DocumentShapeError` instead.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from .model import Address, Customer, Email, Phone
from .validation import FieldViolation

__all__ = [
    "MAX_ID",
    "DocumentShapeError",
    "format_timestamp",
    "from_document",
    "parse_timestamp",
    "to_document",
]

_ADDRESS_FIELDS = (
    ("type", "type"),
    ("line1", "line1"),
    ("line2", "line2"),
    ("line3", "line3"),
    ("city", "city"),
    ("state", "state"),
    ("postal_code", "postalCode"),
    ("country", "country"),
)
_PHONE_FIELDS = (
    ("type", "type"),
    ("country_code", "countryCode"),
    ("number", "number"),
)
_NAME_FIELDS = (
    ("type", "type"),
    ("first_name", "firstName"),
    ("middle_name", "middleName"),
    ("last_name", "lastName"),
    ("suffix", "suffix"),
)


# Ids are stored as signed 64-bit integers.
MAX_ID = 2**63 - 1


class DocumentShapeError(ValueError):
    """Raised when a document does not have the structure of a customer.

    Attributes:
        violations: One entry per malformed field.
    """

    def __init__(self, violations: list[FieldViolation]) -> None:
        super().__init__(
            "Malformed customer document: " + "; ".join(str(v) for v in violations)
        )
        self.violations = violations


# ============================================================================
#                                 Timestamps
# ============================================================================


def format_timestamp(value: datetime) -> str:
    """Render an aware datetime as ``YYYY-MM-DDTHH:MM:SS.ffffffZ``."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%fZ")


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp; naive values are taken as UTC.

    Raises:
        ValueError: If `value` is not ISO-8601.
        OverflowError: If the UTC instant falls outside the `datetime` range.
    """
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


# ============================================================================
#                                  Encoding
# ============================================================================


def _put(doc: dict[str, Any], key: str, value: Any) -> None:
    if value is not None:
        doc[key] = value


def _encode_fields(obj: object, fields: tuple[tuple[str, str], ...]) -> dict[str, Any]:
    doc: dict[str, Any] = {}
    for attr, key in fields:
        _put(doc, key, getattr(obj, attr))
    return doc


def _encode_email(email: Email) -> dict[str, Any]:
    doc: dict[str, Any] = {}
    _put(doc, "type", email.type)
    _put(doc, "email", email.email)
    doc["primary"] = email.primary
    return doc


def to_document(customer: Customer) -> dict[str, Any]:
    """Serialize a customer into its JSON document."""

    doc: dict[str, Any] = {}
    _put(doc, "id", customer.id)
    doc.update(_encode_fields(customer, _NAME_FIELDS))
    doc["addresses"] = [_encode_fields(a, _ADDRESS_FIELDS) for a in customer.addresses]
    doc["emails"] = [_encode_email(e) for e in customer.emails]
    doc["phones"] = [_encode_fields(p, _PHONE_FIELDS) for p in customer.phones]
    if customer.created_at is not None:
        doc["createdAt"] = format_timestamp(customer.created_at)
    if customer.updated_at is not None:
        doc["updatedAt"] = format_timestamp(customer.updated_at)
    return doc


# ============================================================================
#                                  Decoding
# ============================================================================


class _Decoder:
    """Reads typed values out of a document, collecting shape violations."""

    def __init__(self) -> None:
        self.violations: list[FieldViolation] = []

    def _bad(self, path: str, expected: str, value: Any) -> None:
        self.violations.append(FieldViolation(path, f"must be {expected}", value))

    def string(self, doc: dict[str, Any], key: str, path: str) -> str | None:
        value = doc.get(key)
        if value is None or isinstance(value, str):
            return value
        self._bad(path, "a string", value)
        return None

    def boolean(self, doc: dict[str, Any], key: str, path: str) -> bool:
        value = doc.get(key)
        if value is None:
            return False
        if isinstance(value, bool):
            return value
        self._bad(path, "a boolean", value)
        return False

    def identifier(self, doc: dict[str, Any], key: str) -> int | None:
        value = doc.get(key)
        if value is None:
            return None
        if isinstance(value, str) and value.isascii() and value.isdigit():
            value = int(value)
        if isinstance(value, int) and not isinstance(value, bool):
            if 0 < value <= MAX_ID:
                return value
        self._bad(key, f"an integer between 1 and {MAX_ID}", doc.get(key))
        return None

    def timestamp(self, doc: dict[str, Any], key: str) -> datetime | None:
        value = doc.get(key)
        if value is None:
            return None
        if isinstance(value, str):
            try:
                return parse_timestamp(value)
            except (ValueError, OverflowError):
                pass
        self._bad(key, "an ISO-8601 timestamp", value)
        return None

    def objects(self, doc: dict[str, Any], key: str) -> list[tuple[str, dict]]:
        value = doc.get(key)
        if value is None:
            return []
        if not isinstance(value, list):
            self._bad(key, "an array", value)
            return []
        items: list[tuple[str, dict]] = []
        for i, item in enumerate(value):
            path = f"{key}[{i}]"
            if isinstance(item, dict):
                items.append((path, item))
            else:
                self._bad(path, "an object", item)
        return items

    def strings(
        self, doc: dict[str, Any], prefix: str, fields: tuple[tuple[str, str], ...]
    ) -> dict[str, str | None]:
        sep = "." if prefix else ""
        return {
            attr: self.string(doc, key, f"{prefix}{sep}{key}") for attr, key in fields
        }


def from_document(doc: Any) -> Customer:
    """Build a customer from its JSON document.

    Raises:
        DocumentShapeError: If `doc` is not an object or holds values of the
            wrong JSON type. Content rules (blank names, bad email format, ...)
            are not checked here; see `clientele.domain.validation.validate`.
    """

    if not isinstance(doc, dict):
        raise DocumentShapeError([FieldViolation("$", "must be an object", doc)])

    dec = _Decoder()
    names = dec.strings(doc, "", _NAME_FIELDS)
    addresses = tuple(
        Address(**dec.strings(item, path, _ADDRESS_FIELDS))
        for path, item in dec.objects(doc, "addresses")
    )
    emails = tuple(
        Email(
            email=dec.string(item, "email", f"{path}.email"),
            type=dec.string(item, "type", f"{path}.type"),
            primary=dec.boolean(item, "primary", f"{path}.primary"),
        )
        for path, item in dec.objects(doc, "emails")
    )
    phones = tuple(
        Phone(**dec.strings(item, path, _PHONE_FIELDS))
        for path, item in dec.objects(doc, "phones")
    )
    customer = Customer(
        **names,
        addresses=addresses,
        emails=emails,
        phones=phones,
        id=dec.identifier(doc, "id"),
        created_at=dec.timestamp(doc, "createdAt"),
        updated_at=dec.timestamp(doc, "updatedAt"),
    )

    if dec.violations:
        raise DocumentShapeError(dec.violations)
    return customer
