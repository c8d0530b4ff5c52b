"""Status lines for the clientele CLI.

Human-oriented notices go to **stderr** so that stdout carries only the JSON
documents the `customers` commands print. Glyphs fall back to ASCII on
terminals whose encoding cannot represent the emoji.
"""

import click

CAUTION = ("⚠️", "[!]")
SUCCESS = ("✅", "[OK]")
FAILURE = ("❌", "[X]")


def _glyph(choice: tuple[str, str]) -> str:
    """Return the emoji in `choice` if stderr can encode it, else the fallback."""
    emoji, fallback = choice
    encoding = getattr(click.get_text_stream("stderr"), "encoding", None) or "ascii"
    try:
        emoji.encode(encoding)
    except UnicodeEncodeError:
        return fallback
    return emoji


def warn(msg: str) -> None:
    """Emit a yellow, bold warning line to stderr.

    Example:
        ``⚠️  This will upgrade the customers schema.``
    """
    click.secho(f"{_glyph(CAUTION)}  {msg}", fg="yellow", bold=True, err=True)


def success(msg: str) -> None:
    """Emit a green, bold success line to stderr."""
    click.secho(f"{_glyph(SUCCESS)}  {msg}", fg="green", bold=True, err=True)


def error(msg: str) -> None:
    """Emit a red, bold error line to stderr."""
    click.secho(f"{_glyph(FAILURE)}  {msg}", fg="red", bold=True, err=True)
