"""CLI helpers for CLIENTELE.

URL sanitization for safe display, OSC-8 hyperlinks when the terminal
supports them, log-level option parsing, and stderr status lines.
"""

from .db_url import sanitize_url
from .hyperlinks import hyperlink
from .messages import error, success, warn

__all__ = ["sanitize_url", "hyperlink", "error", "success", "warn"]
