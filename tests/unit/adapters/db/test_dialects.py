"""Unit tests for dialect name parsing."""

import pytest

from clientele.adapters.db.dialects import DialectName, UnsupportedDialect


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("postgresql", DialectName.POSTGRES),
        ("postgres", DialectName.POSTGRES),
        ("PG", DialectName.POSTGRES),
        ("postgresql+psycopg", DialectName.POSTGRES),
        ("sqlite", DialectName.SQLITE),
        (" sqlite+pysqlite ", DialectName.SQLITE),
    ],
)
def test_from_string_aliases(raw, expected):
    """Aliases and driver suffixes resolve to the supported dialects."""
    assert DialectName.from_string(raw) is expected


@pytest.mark.parametrize("raw", ["mysql", "oracle+cx_oracle", "", None])
def test_from_string_rejects_unsupported(raw):
    """Anything other than PostgreSQL or SQLite is rejected."""
    with pytest.raises(UnsupportedDialect):
        DialectName.from_string(raw)


def test_from_sqlalchemy_requires_dialect():
    """Objects without a dialect are rejected."""
    with pytest.raises(UnsupportedDialect, match="does not expose"):
        DialectName.from_sqlalchemy(object())  # type: ignore[arg-type]
