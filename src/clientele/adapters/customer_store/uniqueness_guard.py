"""Storage-level email uniqueness check.

Email addresses live inside the JSON document, so no column constraint can
keep two customers from sharing one. Instead, every save runs this guard in
the same transaction, right before the INSERT/UPDATE:

1. Lock each distinct email for the rest of the transaction.
   - PostgreSQL: ``pg_advisory_xact_lock(key)`` where ``key`` is a signed
     64-bit BLAKE2b hash of the address. Keys are taken in ascending order so
     two writers sharing several addresses cannot deadlock.
   - SQLite: no-op. Transactions start with ``BEGIN IMMEDIATE`` (see
     `clientele.adapters.db.engine`), so the database write lock already
     serializes every writer.
2. Re-check, under the lock, whether any *other* customer holds the address.

Locks are released automatically on commit or rollback.
"""

from __future__ import annotations

import hashlib
import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from sqlalchemy import func, select, text, type_coerce
from sqlalchemy.dialects.postgresql import JSONB

from clientele.adapters.db.dialects import DialectName, UnsupportedDialect
from clientele.interfaces.results import Failure, FailureKind
from clientele.logging import mask_email

from .schema import customers

if TYPE_CHECKING:
    from sqlalchemy.engine import Connection
    from sqlalchemy.sql.elements import ColumnElement

logger = logging.getLogger(__name__)

_SQLITE_EMAIL_MATCH = (
    "EXISTS (SELECT 1 FROM json_each(customers.document, '$.emails') AS e "
    "WHERE json_extract(e.value, '$.email') = :email)"
)


def advisory_key(email: str) -> int:
    """Signed 64-bit lock key for an email address."""
    digest = hashlib.blake2b(email.encode("utf-8"), digest_size=8).digest()
    return int.from_bytes(digest, "big", signed=True)


def email_match(dialect: DialectName, email: str) -> ColumnElement[bool]:
    """Predicate: the customer document lists `email` in its ``emails`` array.

    On PostgreSQL this is ``document @> '{"emails": [{"email": ...}]}'`` and is
    served by the GIN index on ``document``.
    """
    if dialect is DialectName.POSTGRES:
        return type_coerce(customers.c.document, JSONB).contains(
            {"emails": [{"email": email}]}
        )
    if dialect is DialectName.SQLITE:
        return text(_SQLITE_EMAIL_MATCH).bindparams(email=email)  # type: ignore[return-value]
    raise UnsupportedDialect(f"Unsupported dialect: {dialect}")  # pragma: no cover


class EmailUniquenessGuard:
    """Lock-then-check of email ownership inside the current transaction."""

    def __init__(self, connection: Connection, dialect: DialectName) -> None:
        self.connection = connection
        self.dialect = dialect

    def _lock(self, emails: list[str]) -> None:
        if self.dialect is not DialectName.POSTGRES:
            return
        for key in sorted({advisory_key(email) for email in emails}):
            self.connection.execute(select(func.pg_advisory_xact_lock(key)))

    def _holder(self, email: str, exclude_id: int) -> int | None:
        stmt = (
            select(customers.c.id)
            .where(email_match(self.dialect, email), customers.c.id != exclude_id)
            .order_by(customers.c.id)
            .limit(1)
        )
        return self.connection.execute(stmt).scalar_one_or_none()

    def check(self, emails: Iterable[str], exclude_id: int) -> Failure | None:
        """Lock `emails` and look for another customer already holding one.

        Args:
            emails: Addresses carried by the customer being written.
            exclude_id: Id of that customer (its own row never conflicts).

        Returns:
            A CONFLICT `Failure` naming the first taken address, else ``None``.

        Raises:
            sqlalchemy.exc.SQLAlchemyError: Left to the caller to classify.
        """
        distinct = sorted(set(emails))
        self._lock(distinct)
        for email in distinct:
            if (holder := self._holder(email, exclude_id)) is not None:
                logger.info(
                    "Email %s already held by customer %s; rejecting write for %s",
                    mask_email(email),
                    holder,
                    exclude_id,
                )
                return Failure(
                    FailureKind.CONFLICT,
                    f"Email {email} is already in use by customer {holder}",
                )
        return None
