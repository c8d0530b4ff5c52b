"""Alembic migration scripts for CLIENTELE (forward-only)."""
