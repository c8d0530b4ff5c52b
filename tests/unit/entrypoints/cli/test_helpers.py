"""Unit tests for `clientele.entrypoints.cli.helpers`.

Covers URL sanitization and the OSC-8 hyperlink heuristic.
"""

from __future__ import annotations

import io

import pytest

from clientele.entrypoints.cli.helpers import hyperlink, hyperlinks, sanitize_url


class FakeTTY(io.StringIO):
    """StringIO that claims to be an interactive terminal."""

    def isatty(self) -> bool:
        return True


@pytest.fixture(autouse=True)
def _clean_osc8_env(monkeypatch):
    """Keep the runner's terminal variables out of the detection matrix."""
    for k in ("TERM_PROGRAM", "WT_SESSION", "VTE_VERSION", "TERM"):
        monkeypatch.delenv(k, raising=False)


@pytest.mark.parametrize(
    ("url", "expected"),
    [
        (
            "postgresql+psycopg://clientele:s3cr3t@db:5432/customers",
            "postgresql+psycopg://clientele:***@db:5432/customers",
        ),
        (
            "postgresql+psycopg://clientele@db/customers",
            "postgresql+psycopg://clientele@db/customers",
        ),
        ("sqlite:///customers.db", "sqlite:///customers.db"),
        ("sqlite:///:memory:", "sqlite:///:memory:"),
    ],
)
def test_sanitize_url(url: str, expected: str) -> None:
    """Mask passwords in URLs while leaving other cases unchanged."""
    assert sanitize_url(url) == expected


@pytest.mark.parametrize(
    ("env", "expected"),
    [
        ({"TERM_PROGRAM": "vscode"}, True),
        ({"TERM_PROGRAM": "iTerm.app"}, True),
        ({"TERM_PROGRAM": "WezTerm"}, True),
        ({"WT_SESSION": "1"}, True),
        ({"VTE_VERSION": "6000"}, True),
        ({"TERM": "alacritty"}, True),
        ({"TERM": "konsole-256color"}, True),
        ({"TERM": "xterm-256color"}, False),
        ({}, False),
    ],
)
def test_supports_osc8_matrix(monkeypatch, env, expected):
    """Each terminal signal is recognised on an interactive stream."""
    for k, v in env.items():
        monkeypatch.setenv(k, v)
    assert hyperlinks.supports_osc8(stream=FakeTTY()) is expected


def test_supports_osc8_non_tty(monkeypatch):
    """Piped output never gets escape sequences."""
    monkeypatch.setenv("TERM_PROGRAM", "vscode")
    assert hyperlinks.supports_osc8(stream=io.StringIO()) is False


def test_hyperlink_plain_text_fallback(monkeypatch):
    monkeypatch.setattr(hyperlinks, "supports_osc8", lambda stream=None: False)
    url = "https://www.rfc-editor.org/rfc/rfc7396"
    assert hyperlink(url) == url
    assert hyperlink(url, "RFC 7396") == f"RFC 7396 ({url})"


def test_hyperlink_osc8_escape(monkeypatch):
    monkeypatch.setattr(hyperlinks, "supports_osc8", lambda stream=None: True)
    assert hyperlink("https://cloudevents.io", "CloudEvents") == (
        "\x1b]8;;https://cloudevents.io\x07CloudEvents\x1b]8;;\x07"
    )
