"""OSC-8 terminal hyperlinks for CLI help text."""

import os
import sys
from typing import TextIO

_OSC8_PROGRAMS = frozenset({"apple_terminal", "vscode", "iterm.app", "wezterm", "kitty"})


def supports_osc8(stream: TextIO | None = None) -> bool:
    """Best-effort guess whether `stream` (default stdout) renders OSC-8 links.

    Piped or redirected streams never do. Otherwise the terminal is recognised
    from ``TERM_PROGRAM``, ``WT_SESSION``, ``VTE_VERSION`` or ``TERM``.
    """
    stream = stream or sys.stdout
    if not getattr(stream, "isatty", lambda: False)():
        return False
    return bool(
        (os.getenv("TERM_PROGRAM") or "").lower() in _OSC8_PROGRAMS
        or os.getenv("WT_SESSION")
        or os.getenv("VTE_VERSION")
        or os.getenv("TERM", "").startswith(("alacritty", "konsole"))
    )


def hyperlink(url: str, label: str | None = None) -> str:
    """Wrap `url` in OSC-8 escapes, or return plain text where unsupported."""
    label = label or url
    if not supports_osc8():
        return label if label == url else f"{label} ({url})"
    return f"\x1b]8;;{url}\x07{label}\x1b]8;;\x07"
