"""Unit tests for :mod:`clientele.entrypoints.cli.helpers.messages`.

Glyph selection follows the encoding of Click's stderr stream, and every
status line is written, styled, to stderr so stdout stays machine-readable.
"""

import io
import sys

import click
import pytest

from clientele.entrypoints.cli.helpers.messages import (
    CAUTION,
    FAILURE,
    SUCCESS,
    _glyph,
    error,
    success,
    warn,
)

SET_YELLOW = "\x1b[33m"
SET_GREEN = "\x1b[32m"
SET_RED = "\x1b[31m"
SET_BOLD = "\x1b[1m"
RESET = "\x1b[0m"


class FakeTTY(io.StringIO):
    """A text stream that mimics a TTY with a fixed encoding."""

    def __init__(self, encoding: str):
        super().__init__()
        self._encoding = encoding

    @property
    def encoding(self) -> str:
        return self._encoding

    def isatty(self) -> bool:
        return True


@pytest.mark.parametrize(
    ("encoding", "expected"),
    [
        ("ascii", ["[!]", "[OK]", "[X]"]),
        ("utf-8", ["⚠️", "✅", "❌"]),
    ],
)
def test_glyphs_respect_stream_encoding(monkeypatch, encoding, expected):
    """Emoji are used only when stderr can encode them."""
    monkeypatch.setattr(click, "get_text_stream", lambda name: FakeTTY(encoding))
    assert [_glyph(c) for c in (CAUTION, SUCCESS, FAILURE)] == expected


def test_glyph_requeries_stream_each_call(monkeypatch):
    """The stream is looked up on every call, not cached."""
    encodings = iter(["ascii", "utf-8"])
    monkeypatch.setattr(click, "get_text_stream", lambda name: FakeTTY(next(encodings)))
    assert _glyph(CAUTION) == "[!]"
    assert _glyph(CAUTION) == "⚠️"


@pytest.mark.parametrize(
    ("encoding", "glyph", "color_code", "func"),
    [
        ("ascii", "[!]", SET_YELLOW, warn),
        ("utf-8", "⚠️", SET_YELLOW, warn),
        ("ascii", "[OK]", SET_GREEN, success),
        ("utf-8", "✅", SET_GREEN, success),
        ("ascii", "[X]", SET_RED, error),
        ("utf-8", "❌", SET_RED, error),
    ],
)
def test_messages_emit_styled_stderr(monkeypatch, encoding, glyph, color_code, func):
    """warn/success/error write bold, colored lines to stderr with the right glyph."""
    stream = FakeTTY(encoding)
    monkeypatch.setattr(click, "get_text_stream", lambda name: stream)
    monkeypatch.setattr(sys, "stderr", stream, raising=False)
    monkeypatch.delenv("NO_COLOR", raising=False)

    func("customer deleted")

    out = stream.getvalue()
    assert glyph in out
    assert "customer deleted" in out
    assert SET_BOLD in out
    assert color_code in out
    assert RESET in out


def test_success_writes_to_stderr_only(monkeypatch, capsys):
    """Status lines never reach stdout."""
    monkeypatch.setattr(click, "get_text_stream", lambda name: FakeTTY("utf-8"))
    success("Deleted customer 7")
    captured = capsys.readouterr()
    assert "Deleted customer 7" in captured.err
    assert captured.out == ""
