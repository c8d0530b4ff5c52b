"""Database engine factory.

Centralizes creation of SQLAlchemy Engines so every connection is configured
the same way:

- **SQLite**: connection PRAGMAs (WAL, busy timeout, ...) and ``BEGIN
  IMMEDIATE`` transactions. Taking the database write lock when a transaction
  starts is what serializes concurrent writers checking email uniqueness.
- **PostgreSQL**: pre-ping pooled connections so a restarted server surfaces
  as a fresh connection instead of an error on first use.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import create_engine, event
from sqlalchemy.engine import URL, make_url

if TYPE_CHECKING:
    from sqlite3 import Connection as SQLiteConnection

    from sqlalchemy.engine import Connection, Engine

SQLITE_NAMES = {"sqlite", "sqlite+pysqlite"}
SQLITE_BUSY_TIMEOUT_MS = 10_000


def is_sqlite(url: str | URL) -> bool:
    """Return True if the given SQLAlchemy URL or string corresponds to SQLite."""
    u = make_url(str(url))
    return u.get_backend_name() in SQLITE_NAMES


def make_engine(url: str | URL, *, echo: bool = False) -> Engine:
    """Create a SQLAlchemy Engine for the given URL.

    For SQLite the driver's own transaction handling is switched off and every
    transaction is opened with ``BEGIN IMMEDIATE``; the connection also gets:
        - ``foreign_keys=ON``
        - ``journal_mode=WAL`` (readers do not block the writer)
        - ``synchronous=NORMAL``
        - ``busy_timeout`` (writers wait for the lock instead of failing)

    Args:
        url: Database connection URL (str or :class:`URL`).
        echo: If True, log SQL statements.

    Returns:
        Engine: Configured SQLAlchemy Engine.
    """

    if not is_sqlite(url):
        return create_engine(url, echo=echo, pool_pre_ping=True)

    engine = create_engine(url, echo=echo)

    @event.listens_for(engine, "connect")
    def _sqlite_connect(dbapi_conn: SQLiteConnection, conn_record):  # type: ignore #pylint: disable=W0613
        dbapi_conn.isolation_level = None
        cur = dbapi_conn.cursor()
        cur.execute("PRAGMA foreign_keys=ON;")
        cur.execute("PRAGMA journal_mode=WAL;")
        cur.execute("PRAGMA synchronous=NORMAL;")
        cur.execute(f"PRAGMA busy_timeout={SQLITE_BUSY_TIMEOUT_MS};")
        cur.close()

    @event.listens_for(engine, "begin")
    def _sqlite_begin(conn: Connection):  # pylint: disable=W0613
        conn.exec_driver_sql("BEGIN IMMEDIATE")

    return engine
