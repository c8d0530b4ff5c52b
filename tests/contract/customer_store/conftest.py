"""Fixtures for CustomerStore contract tests.

`make_uow` builds fresh units of work over one backend. Units built by the
same factory share committed state, so several of them behave like separate
requests (or threads) against the same database.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from datetime import datetime, timezone
from typing import TYPE_CHECKING

import pytest

from clientele.adapters.customer_store import InMemoryCustomerTable
from clientele.adapters.unit_of_work import InMemoryUnitOfWork, SqlAlchemyUnitOfWork

if TYPE_CHECKING:
    from clientele.domain.model import Customer
    from clientele.interfaces.unit_of_work import AbstractUnitOfWork

# pylint: disable=redefined-outer-name

UowFactory = Callable[[], "AbstractUnitOfWork"]

STAMP = datetime(2024, 1, 1, tzinfo=timezone.utc)


@pytest.fixture(params=["memory", "sqlite_memory", "sqlite_file", "postgres"])
def make_uow(request: pytest.FixtureRequest) -> Iterable[UowFactory]:
    """Return a factory of units of work for the requested backend.

    Current params:
      - `"memory"` → `InMemoryUnitOfWork` over one shared table
      - `"sqlite_memory"` → SQLite in-memory (tables from metadata)
      - `"sqlite_file"` → SQLite temp file migrated with Alembic
      - `"postgres"` → Postgres 17 via Testcontainers (skipped without Docker)
    """
    match request.param:
        case "memory":
            table = InMemoryCustomerTable()
            yield lambda: InMemoryUnitOfWork(table)
        case "sqlite_memory":
            engine = request.getfixturevalue("sqlite_engine_memory")
            yield lambda: SqlAlchemyUnitOfWork(engine)
        case "sqlite_file":
            engine = request.getfixturevalue("sqlite_engine_file")
            yield lambda: SqlAlchemyUnitOfWork(engine)
        case "postgres":
            engine = request.getfixturevalue("postgres_engine")
            yield lambda: SqlAlchemyUnitOfWork(engine, statement_timeout_ms=5_000)
        case _:
            raise ValueError(f"unknown store type: {request.param}")


@pytest.fixture
def stored_customer(make_customer) -> Callable[..., Customer]:
    """Build a customer that already carries an id and timestamps."""

    def _make(customer_id: int, *emails: str, **overrides) -> Customer:
        return make_customer(
            id=customer_id,
            emails=emails or None,
            created_at=STAMP,
            updated_at=STAMP,
            **overrides,
        )

    return _make
