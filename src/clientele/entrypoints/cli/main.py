"""CLIENTELE CLI entry point.

The root ``clientele`` command (built with Click-Extra) owns logging setup and
carries two groups:

- ``clientele db``: forward-only schema management
  (upgrade/current/heads/history/status).
- ``clientele customers``: create, read, update, patch, delete and list
  customers as JSON documents.

Examples
    $ clientele --version
    $ clientele db upgrade --force
    $ clientele customers create customer.json
    $ clientele -v customers list --limit 50
"""

import logging
from pathlib import Path
from typing import TYPE_CHECKING

import click
import click_extra as clickx
from platformdirs import user_log_dir

from clientele import __version__
from clientele.logging import (
    config_console_handler,
    config_flight_recorder,
    log_startup,
)

from .customers import customers as customers_group
from .db import db as db_group
from .helpers import hyperlink
from .helpers.log_level_parser import parse_log_level

if TYPE_CHECKING:
    from logging import Handler

logger = logging.getLogger(__name__)

DEFAULT_LOG_PATH = (
    Path(user_log_dir("clientele", appauthor=False, ensure_exists=True)) / "latest.log"
)

HELP = """CLIENTELE command-line interface.

    CLIENTELE stores customer profiles as JSON documents in PostgreSQL (or
    SQLite), keeps customer email addresses unique across the whole store, and
    announces every committed change as a CloudEvent.
    """


EPILOG = "\b\n" + "\n".join(
    [
        f"{click.style('See Also:', fg='blue', bold=True, underline=True)}",
        "  JSON Merge Patch: " + hyperlink("https://www.rfc-editor.org/rfc/rfc7396"),
        "  Problem Details : " + hyperlink("https://www.rfc-editor.org/rfc/rfc7807"),
        "  CloudEvents     : " + hyperlink("https://cloudevents.io/"),
    ]
)


def console_level(verbose_count: int, quiet_count: int) -> int:
    """WARNING, moved one level per ``-v`` (down) or ``-q`` (up), clamped."""
    level = logging.WARNING - 10 * verbose_count + 10 * quiet_count
    return max(logging.DEBUG, min(logging.CRITICAL, level))


@clickx.extra_group(
    version=__version__,
    help=HELP,
    params=[
        clickx.ColorOption(show_envvar=True),
        clickx.TimerOption(show_envvar=True),
        clickx.ExtraVersionOption(),
    ],
    epilog=EPILOG,
)
@click.option(
    "--verbose",
    "-v",
    "verbose_count",
    count=True,
    default=0,
    help="Show one more level of console logging per repetition (from WARNING).",
)
@click.option(
    "--quiet",
    "-q",
    "quiet_count",
    count=True,
    default=0,
    help="Show one less level of console logging per repetition (from WARNING).",
)
@click.option(
    "--debug/--no-debug",
    default=False,
    help="Enable debug mode (DEBUG console output with full logger names and paths).",
)
@click.option(
    "--log-path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=DEFAULT_LOG_PATH,
    envvar="CLIENTELE_LOG_PATH",
    show_default=True,
    show_envvar=True,
    help="File the flight recorder writes to.",
)
@click.option(
    "--flight-recorder-capacity",
    type=click.IntRange(min=1),
    default=2000,
    hidden=True,
    envvar="CLIENTELE_FLIGHT_RECORDER_CAPACITY",
    show_envvar=True,
    help="Number of log records the flight recorder keeps.",
)
@click.option(
    "--flight-recorder/--no-flight-recorder",
    "flight_recorder",
    default=True,
    show_envvar=True,
    help=(
        "Keep the last N log records at DEBUG granularity in memory and write "
        "them to --log-path when a WARNING or ERROR occurs (or on exit with "
        "--force-flush). Console verbosity is unchanged."
    ),
)
@click.option(
    "--force-flush/--no-force-flush",
    "force_flush_flight_recorder",
    default=False,
    show_default=True,
    show_envvar=True,
    help="Write the flight recorder buffer to --log-path on program exit.",
)
@click.option(
    "--redact-emails/--no-redact-emails",
    "redact_emails",
    default=True,
    show_default=True,
    show_envvar=True,
    help=(
        "Mask customer email addresses (j***@example.com) in console and "
        "flight recorder output."
    ),
)
@click.option(
    "-L",
    "--logger-level",
    "logger_levels",
    multiple=True,
    callback=parse_log_level,
    default=("sqlalchemy=WARNING", "alembic=WARNING"),
    show_default=True,
    show_envvar=True,
    help=(
        "Set MINIMUM LEVEL for specific LOGGERS (NAME=LEVEL). Applies to both "
        "console and flight recorder. Repeatable (e.g. -L sqlalchemy=INFO "
        "-L clientele.adapters=DEBUG) or via CLIENTELE_LOGGER_LEVELS."
    ),
)
@clickx.pass_context
def clientele(  # pylint: disable=too-many-arguments, too-many-positional-arguments
    ctx: click.Context,
    verbose_count: int,
    quiet_count: int,
    debug: bool,
    log_path: Path,
    flight_recorder_capacity: int,
    flight_recorder: bool,
    force_flush_flight_recorder: bool,
    redact_emails: bool,
    logger_levels: dict[str, int],
) -> None:
    """CLIENTELE command-line interface."""
    level = console_level(verbose_count, quiet_count)

    handlers: list[Handler] = [
        config_console_handler(
            level=level,
            debug_mode=debug,
            color=ctx.color is not False,
            redact_emails=redact_emails,
        )
    ]
    if flight_recorder:
        handlers.append(
            config_flight_recorder(
                path=log_path,
                capacity=flight_recorder_capacity,
                flush_on_close=force_flush_flight_recorder,
                redact_emails=redact_emails,
            )
        )

    # root passes everything; each handler applies its own level
    logging.basicConfig(level=logging.DEBUG, handlers=handlers, force=True)
    for name, lvl in logger_levels.items():
        logging.getLogger(name).setLevel(lvl)

    log_startup(
        logger,
        app_version=__version__,
        level=level,
        handlers=handlers,
        log_path=log_path,
        flight_recorder=flight_recorder,
        logger_levels=logger_levels,
    )

    ctx.call_on_close(logging.shutdown)


clientele.add_command(db_group)
clientele.add_command(customers_group)
