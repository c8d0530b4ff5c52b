"""Unit of Work implementations for CLIENTELE.

`SqlAlchemyUnitOfWork` opens one Connection (one transaction) per ``with``
block and exposes a `SqlAlchemyCustomerStore` bound to it.
`InMemoryUnitOfWork` does the same over an `InMemoryCustomerTable`.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError

from clientele.adapters.customer_store import (
    InMemoryCustomerStore,
    InMemoryCustomerTable,
    SqlAlchemyCustomerStore,
)
from clientele.adapters.db.dialects import DialectName
from clientele.adapters.db.errors import classify
from clientele.interfaces.results import StoreError
from clientele.interfaces.unit_of_work import AbstractUnitOfWork

if TYPE_CHECKING:
    from sqlalchemy.engine import Connection, Engine

logger = logging.getLogger(__name__)


class SqlAlchemyUnitOfWork(AbstractUnitOfWork):
    """SQLAlchemy-backed Unit of Work.

    Holds the current `connection` and `customers` store on the instance, so
    one unit serves one thread. Units built on the same engine may run
    concurrently.

    Args:
        engine: Engine to draw connections from (see `make_engine`).
        statement_timeout_ms: Per-statement limit applied to each transaction
            on PostgreSQL (``SET LOCAL statement_timeout``). ``None`` disables it.
    """

    def __init__(self, engine: Engine, statement_timeout_ms: int | None = None):
        self.engine = engine
        self.statement_timeout_ms = statement_timeout_ms
        self.connection: Connection

    def __enter__(self):
        try:
            self.connection = self.engine.connect()
        except SQLAlchemyError as e:
            raise StoreError(classify(e, "open a database connection")) from e
        try:
            self._apply_statement_timeout()
        except SQLAlchemyError as e:
            self.connection.close()
            raise StoreError(classify(e, "configure the transaction")) from e
        self.customers = SqlAlchemyCustomerStore(self.connection)
        return super().__enter__()

    def __exit__(self, *args):
        try:
            super().__exit__(*args)
        finally:
            self.connection.close()

    def _apply_statement_timeout(self) -> None:
        if self.statement_timeout_ms is None:
            return
        if DialectName.from_sqlalchemy(self.connection) is not DialectName.POSTGRES:
            return
        self.connection.execute(
            select(
                func.set_config(
                    "statement_timeout", str(self.statement_timeout_ms), True
                )
            )
        )

    def commit(self):
        try:
            self.connection.commit()
        except SQLAlchemyError as e:
            raise StoreError(classify(e, "commit the transaction")) from e

    def rollback(self):
        try:
            self.connection.rollback()
        except SQLAlchemyError:
            logger.warning("Rollback failed; connection will be discarded", exc_info=True)
            self.connection.invalidate()


class InMemoryUnitOfWork(AbstractUnitOfWork):
    """Unit of Work over an in-memory customer table.

    Attributes:
        table: Committed state shared by every ``with`` block of this unit
            (and by other units built on the same table).
        commits: Number of successful commits, for assertions in tests.
    """

    customers: InMemoryCustomerStore

    def __init__(self, table: InMemoryCustomerTable | None = None) -> None:
        self.table = table if table is not None else InMemoryCustomerTable()
        self.commits = 0

    def __enter__(self):
        self.customers = InMemoryCustomerStore(self.table)
        return super().__enter__()

    def commit(self):
        self.customers.commit()
        self.commits += 1

    def rollback(self):
        self.customers.rollback()
