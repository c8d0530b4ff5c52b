"""Unit tests for the CLI log level parser.

These tests exercise clientele.entrypoints.cli.helpers.log_level_parser.parse_log_level,
covering default behavior, override semantics, input normalization (commas/spaces),
case-insensitivity, and error handling for malformed input.
"""

import logging
import types

import click
import pytest

from clientele.entrypoints.cli.helpers.log_level_parser import parse_log_level


def make_ctx():
    """Create a minimal Click context stub; the callback never reads it."""
    return types.SimpleNamespace()


def test_empty_uses_defaults():
    """When no levels are provided, return the default library logger levels."""
    assert parse_log_level(make_ctx(), None, ()) == {
        "sqlalchemy": logging.WARNING,
        "alembic": logging.WARNING,
        "redis": logging.WARNING,
    }


def test_repeated_flags_override_order():
    """Later repeated CLI flags override earlier ones for the same logger."""
    value = ("sqlalchemy=INFO", "redis=ERROR", "sqlalchemy=WARNING")
    out = parse_log_level(make_ctx(), None, value)
    assert out["sqlalchemy"] == logging.WARNING
    assert out["redis"] == logging.ERROR


def test_envvar_string_with_commas_and_spaces():
    """Accept a plain string (e.g. from an env var) with commas and spaces."""
    out = parse_log_level(
        make_ctx(), None, "sqlalchemy=INFO,  clientele.adapters=DEBUG alembic=ERROR"
    )
    assert out["sqlalchemy"] == logging.INFO
    assert out["alembic"] == logging.ERROR
    assert out["clientele.adapters"] == logging.DEBUG


def test_case_insensitive_levels():
    """Level names should be parsed case-insensitively."""
    out = parse_log_level(make_ctx(), None, ("sqlalchemy=info", "redis=WaRnInG"))
    assert out["sqlalchemy"] == logging.INFO
    assert out["redis"] == logging.WARNING


@pytest.mark.parametrize("item", ["not-a-pair", "=INFO"])
def test_invalid_pair_raises(item):
    """Malformed NAME=LEVEL pairs should raise click.BadParameter."""
    with pytest.raises(click.BadParameter, match="NAME=LEVEL"):
        parse_log_level(make_ctx(), None, (item,))


def test_invalid_level_raises():
    """Unknown level names should raise click.BadParameter."""
    with pytest.raises(click.BadParameter, match="LOUD"):
        parse_log_level(make_ctx(), None, ("sqlalchemy=LOUD",))
