"""Logging setup for the clientele CLI.

Two handlers hang off the root logger:

* a `rich` console handler on stderr, whose verbosity follows ``-v``/``-q``;
* a "flight recorder": a `MemoryHandler` that keeps the last N records at
  DEBUG granularity and dumps them to a file once a WARNING shows up.

Customer email addresses are personal data. Application code masks them with
`mask_email` at the call site; `EmailRedactionFilter` catches the rest (for
example bound parameters echoed by SQLAlchemy) before any handler writes them.
"""

from __future__ import annotations

import logging
import os
import platform
import re
import sys
from logging.handlers import MemoryHandler
from pathlib import Path
from typing import TYPE_CHECKING, Literal, TypeAlias

import alembic
import sqlalchemy
from rich.console import Console
from rich.logging import RichHandler

if TYPE_CHECKING:
    from logging import Logger

# pylint: disable=too-few-public-methods

PROJECT_PREFIX = "clientele"

FLIGHT_RECORDER_FORMAT = (
    "[%(asctime)s] [%(process)d:%(threadName)s] "
    "%(levelname)s %(name)s:%(lineno)d: %(message)s"
)

ColorSystem: TypeAlias = Literal["auto", "standard", "256", "truecolor", "windows"]

_EMAIL_RE = re.compile(r"[\w.+-]+@[\w-]+(?:\.[\w-]+)+")


def mask_email(email: str) -> str:
    """Return a log-safe rendering of an email address.

    Keeps the first character of the local part and the full domain, e.g.
    ``jane.doe@example.com`` -> ``j***@example.com``. Values without an ``@``
    are masked entirely.
    """
    local, sep, domain = email.partition("@")
    if not sep:
        return "***"
    return f"{local[:1]}***@{domain}"


class EmailRedactionFilter(logging.Filter):
    """Mask every email address found in a record's rendered message.

    The record's message is rendered once, scrubbed, and frozen (``args`` is
    cleared) so downstream formatters see the masked text.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        if "@" in message:
            record.msg = _EMAIL_RE.sub(lambda m: mask_email(m.group(0)), message)
            record.args = None
        return True


class ThirdPartyPrefixFilter(logging.Filter):
    """Tag records from other libraries with a short ``[lib]`` prefix.

    Sets `record.prefix` to e.g. ``[sqlalchemy]`` for third-party loggers and
    to an empty string for ``clientele.*`` loggers. Never drops a record.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name.startswith(PROJECT_PREFIX):
            record.prefix = ""
        else:
            record.prefix = f"[{record.name.split('.', 1)[0]}]"
        return True


def config_console_handler(
    level: int = logging.INFO,
    debug_mode: bool = False,
    color: bool = True,
    redact_emails: bool = True,
) -> RichHandler:
    """Build the stderr console handler.

    Args:
        level: Minimum level shown (forced to DEBUG in `debug_mode`).
        debug_mode: Show timestamps, full logger names and source paths
            instead of the short third-party prefix.
        color: ``False`` mirrors click-extra's ``--no-color``.
        redact_emails: Mask email addresses in every message.

    Returns:
        A `RichHandler` ready to attach to the root logger.
    """
    color_system: ColorSystem | None = "auto" if color else None
    handler = RichHandler(
        level=logging.DEBUG if debug_mode else level,
        console=Console(color_system=color_system, stderr=True),
        rich_tracebacks=True,
        show_time=False,
        show_path=debug_mode,
        enable_link_path=debug_mode,
    )
    if redact_emails:
        handler.addFilter(EmailRedactionFilter())
    if debug_mode:
        handler.setFormatter(logging.Formatter("%(asctime)s %(name)s: %(message)s"))
    else:
        handler.addFilter(ThirdPartyPrefixFilter())
        handler.setFormatter(logging.Formatter("%(prefix)s %(message)s"))
    return handler


def config_flight_recorder(
    path: Path,
    capacity: int = 2000,
    flush_level: int = logging.WARNING,
    flush_on_close: bool = False,
    redact_emails: bool = True,
) -> MemoryHandler:
    """Build the flight recorder writing to `path`.

    Up to `capacity` records are buffered. The buffer is written out when a
    record at `flush_level` or above arrives, and on close when
    `flush_on_close` is set. The file is truncated on every run. With
    `redact_emails` the recorder masks email addresses before buffering.
    """
    file_handler = logging.FileHandler(path, mode="w", encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(FLIGHT_RECORDER_FORMAT))

    recorder = MemoryHandler(
        capacity=capacity,
        flushLevel=flush_level,
        target=file_handler,
        flushOnClose=flush_on_close,
    )
    if redact_emails:
        recorder.addFilter(EmailRedactionFilter())
    return recorder


def log_startup(  # pylint: disable=too-many-arguments
    logger: Logger,
    *,
    app_version: str,
    level: int,
    handlers: list[logging.Handler],
    log_path: Path | None,
    flight_recorder: bool,
    logger_levels: dict[str, int],
) -> None:
    """Log a one-line startup summary plus DEBUG diagnostics.

    Args:
        logger: Logger used to emit startup messages.
        app_version: Application version string to display.
        level: Effective console logging level (numeric).
        handlers: Active logging handlers attached to the root logger.
        log_path: Path to the flight-recorder output file, or None.
        flight_recorder: Whether the in-memory flight recorder is enabled.
        logger_levels: Mapping of logger names to their configured numeric levels.
    """
    logger.info(
        "CLIENTELE %s (console=%s, flight-recorder=%s)",
        app_version,
        logging.getLevelName(level),
        "ON" if flight_recorder else "OFF",
    )

    diagnostics: dict[str, object] = {
        "Python": sys.version.split()[0],
        "Platform": f"{platform.system()} {platform.release()}",
        "PID": os.getpid(),
        "CWD": Path.cwd(),
        "SQLAlchemy": sqlalchemy.__version__,
        "Alembic": alembic.__version__,
        "Handlers": [type(h).__name__ for h in handlers],
        "Logger levels": {
            name: logging.getLevelName(lvl) for name, lvl in logger_levels.items()
        },
    }
    if flight_recorder:
        diagnostics["Flight recorder"] = log_path or "<none>"
    for key, value in diagnostics.items():
        logger.debug("%s: %s", key, value)
