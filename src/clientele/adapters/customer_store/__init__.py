"""Customer store adapters (SQLAlchemy and in-memory)."""

from .memory import InMemoryCustomerStore, InMemoryCustomerTable
from .sqlalchemy_store import SqlAlchemyCustomerStore

__all__ = ["InMemoryCustomerStore", "InMemoryCustomerTable", "SqlAlchemyCustomerStore"]
