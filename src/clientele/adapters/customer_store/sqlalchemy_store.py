"""Implementation of CustomerStore using SQLAlchemy Core."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from sqlalchemy import literal, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError

from clientele.adapters.db.dialects import DialectName, UnsupportedDialect
from clientele.adapters.db.errors import classify
from clientele.domain.codec import DocumentShapeError, from_document, to_document
from clientele.interfaces.customer_store import CustomerStore
from clientele.interfaces.results import Failure, FailureKind, Ok, StoreResult
from clientele.logging import mask_email

from .schema import customers
from .uniqueness_guard import EmailUniquenessGuard, email_match

if TYPE_CHECKING:
    from sqlalchemy.engine import Connection
    from sqlalchemy.sql.dml import Insert

    from clientele.domain.model import Customer

logger = logging.getLogger(__name__)


def _not_found(customer_id: int) -> Failure:
    return Failure(FailureKind.NOT_FOUND, f"Customer not found with id: {customer_id}")


def _decode(document: Any) -> StoreResult[Customer]:
    try:
        return Ok(from_document(document))
    except DocumentShapeError as e:
        logger.error("Stored customer document is malformed: %s", e)
        return Failure(FailureKind.INTERNAL, "Stored customer document is malformed", e)


class SqlAlchemyCustomerStore(CustomerStore):
    """CustomerStore implementation that supports both PostgreSQL and SQLite.

    Operates on a caller-owned Connection; transaction boundaries belong to
    the unit of work.
    """

    def __init__(self, connection: Connection):
        self.connection = connection
        self.dialect = DialectName.from_sqlalchemy(connection)
        self._guard = EmailUniquenessGuard(connection, self.dialect)

    # --- reads ---

    def get(
        self, customer_id: int, *, for_update: bool = False
    ) -> StoreResult[Customer]:
        stmt = select(customers.c.document).where(customers.c.id == customer_id)
        if for_update:
            stmt = stmt.with_for_update()  # no-op on SQLite
        try:
            document = self.connection.execute(stmt).scalar_one_or_none()
        except SQLAlchemyError as e:
            return classify(e, f"load customer {customer_id}")
        if document is None:
            return _not_found(customer_id)
        return _decode(document)

    def exists(self, customer_id: int) -> StoreResult[bool]:
        stmt = select(literal(1)).where(customers.c.id == customer_id)
        try:
            found = self.connection.execute(stmt).first() is not None
        except SQLAlchemyError as e:
            return classify(e, f"check customer {customer_id}")
        return Ok(found)

    def find_by_email(
        self, email: str, *, exclude_id: int | None = None
    ) -> StoreResult[Customer]:
        stmt = (
            select(customers.c.document)
            .where(email_match(self.dialect, email))
            .order_by(customers.c.id)
            .limit(1)
        )
        if exclude_id is not None:
            stmt = stmt.where(customers.c.id != exclude_id)
        try:
            document = self.connection.execute(stmt).scalar_one_or_none()
        except SQLAlchemyError as e:
            return classify(e, f"find customer by email {mask_email(email)}")
        if document is None:
            return Failure(
                FailureKind.NOT_FOUND, f"Customer not found with email: {email}"
            )
        return _decode(document)

    def page_after(
        self, cursor: int | None, limit: int
    ) -> StoreResult[list[Customer]]:
        stmt = select(customers.c.document).order_by(customers.c.id).limit(limit)
        if cursor is not None:
            stmt = stmt.where(customers.c.id > cursor)
        try:
            documents = self.connection.execute(stmt).scalars().all()
        except SQLAlchemyError as e:
            return classify(e, f"list customers after {cursor}")

        page: list[Customer] = []
        for document in documents:
            match _decode(document):
                case Ok(customer):
                    page.append(customer)
                case Failure() as failure:
                    return failure
        return Ok(page)

    # --- writes ---

    def save(self, customer: Customer) -> StoreResult[Customer]:
        if None in (customer.id, customer.created_at, customer.updated_at):
            return Failure(
                FailureKind.INTERNAL,
                "Customer must carry id and timestamps before it is saved",
            )
        try:
            if conflict := self._guard.check(customer.email_addresses, customer.id):
                return conflict
            self.connection.execute(self._build_upsert(customer))
        except SQLAlchemyError as e:
            return classify(e, f"save customer {customer.id}")
        logger.debug("Saved customer %s", customer.id)
        return Ok(customer)

    def delete(self, customer_id: int) -> StoreResult[None]:
        stmt = customers.delete().where(customers.c.id == customer_id)
        try:
            result = self.connection.execute(stmt)
        except SQLAlchemyError as e:
            return classify(e, f"delete customer {customer_id}")
        if result.rowcount == 0:
            return _not_found(customer_id)
        return Ok(None)

    # --- dialect-specific upsert builder ---

    def _build_upsert(self, customer: Customer) -> Insert:
        values = {
            "id": customer.id,
            "document": to_document(customer),
            "created_at": customer.created_at,
            "updated_at": customer.updated_at,
        }
        if self.dialect is DialectName.POSTGRES:
            stmt = pg_insert(customers).values(**values)
        elif self.dialect is DialectName.SQLITE:
            stmt = sqlite_insert(customers).values(**values)
        else:
            msg = f"Unsupported dialect: {self.dialect}"  # pragma: no cover
            raise UnsupportedDialect(msg)  # pragma: no cover

        # created_at is never rewritten once the row exists
        return stmt.on_conflict_do_update(
            index_elements=[customers.c.id],
            set_={
                "document": stmt.excluded.document,
                "updated_at": stmt.excluded.updated_at,
            },
        )
