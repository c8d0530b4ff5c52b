"""Supported database dialects.

Customer storage behaves differently per backend (JSONB containment and
advisory locks on PostgreSQL, ``json_each`` and a database-wide write lock on
SQLite). Dialect checks go through `DialectName` instead of raw strings.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sqlalchemy.engine import Connection, Engine


class UnsupportedDialect(Exception):
    """Raised when an unsupported database dialect is encountered."""


class DialectName(str, Enum):
    """Supported SQLAlchemy dialect names.

    Attributes:
        POSTGRES: PostgreSQL (``"postgresql"``); production backend.
        SQLITE:   SQLite (``"sqlite"``); development and tests.
    """

    POSTGRES = "postgresql"
    SQLITE = "sqlite"

    @classmethod
    def from_string(cls, dialect_str: str) -> DialectName:
        """Convert a raw or driver-qualified dialect string.

        Accepts aliases such as ``postgres``, ``pg`` and driver suffixes such
        as ``postgresql+psycopg`` or ``sqlite+pysqlite``.

        Raises:
            UnsupportedDialect: if the dialect is not supported.
        """
        base = (dialect_str or "").strip().lower().split("+", 1)[0]
        if base in {"postgres", "postgresql", "pg"}:
            return cls.POSTGRES
        if base == "sqlite":
            return cls.SQLITE
        raise UnsupportedDialect(f"Unsupported dialect: {dialect_str!r}")

    @classmethod
    def from_sqlalchemy(cls, obj: Engine | Connection) -> DialectName:
        """Read the dialect of an Engine or Connection.

        Raises:
            UnsupportedDialect: if `obj` has no dialect or it is not supported.
        """
        try:
            name = obj.dialect.name
        except AttributeError as e:
            raise UnsupportedDialect(
                f"Object {type(obj).__name__} does not expose .dialect.name"
            ) from e
        return cls.from_string(name)
