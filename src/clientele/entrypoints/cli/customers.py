"""CLIENTELE customers CLI.

Thin wrappers over the message bus (mutations) and the query functions
(reads). Input documents are read from a JSON file (``-`` for stdin); results
are printed to stdout as JSON. A failed operation prints an RFC 7807 problem
document to stdout and exits with a code derived from its status:

| status | exit code |
|--------|-----------|
| 400    | 2         |
| 404    | 3         |
| 409    | 4         |
| 503    | 5         |
| 500    | 1         |
"""

from __future__ import annotations

import json
from functools import wraps
from typing import TYPE_CHECKING, Any, ParamSpec, TextIO, TypeVar
from urllib.parse import quote

import click
import click_extra as clickx

from clientele import config
from clientele.bootstrap import AppContainer, bootstrap
from clientele.domain.codec import to_document
from clientele.domain.errors import CustomerError, IllegalInputError
from clientele.domain.validation import FieldViolation
from clientele.service_layer import commands, queries
from clientele.service_layer.pagination import DEFAULT_LIMIT, PageRequest
from clientele.service_layer.translation import decode_customer

from ..problem_details import to_problem
from .helpers import success

if TYPE_CHECKING:
    from collections.abc import Callable

    from clientele.domain.model import Customer

P = ParamSpec("P")
R = TypeVar("R")

EXIT_CODES = {400: 2, 404: 3, 409: 4, 503: 5, 500: 1}


def exit_code_for(error: CustomerError) -> int:
    """Process exit code for a failed operation."""
    return EXIT_CODES.get(error.status, 1)


def search_instance(email: str) -> str:
    """Problem ``instance`` for a lookup by email, with the address percent-encoded."""
    return f"/customers/search?email={quote(email, safe='@')}"


def _container() -> AppContainer:
    ctx = click.get_current_context()
    if isinstance(ctx.obj, AppContainer):
        return ctx.obj
    try:
        container = bootstrap()
    except config.DatabaseUrlNotSetError as e:
        raise click.ClickException(f"{config.DB_URL_ENV} is not set.") from e
    except config.ConfigurationError as e:
        raise click.ClickException(str(e)) from e
    ctx.find_root().obj = container
    return container


def _emit(payload: Any) -> None:
    click.echo(json.dumps(payload, indent=2, ensure_ascii=False))


def _emit_customer(customer: Customer) -> None:
    _emit(to_document(customer))


def _read_document(source: TextIO) -> Any:
    raw = source.read()
    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        raise IllegalInputError(
            f"Input is not valid JSON: {e.msg} (line {e.lineno}, column {e.colno})",
            [FieldViolation("$", "must be valid JSON")],
        ) from e


def reports_problems(
    instance: Callable[..., str],
) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """Render `CustomerError` as a problem document and exit accordingly.

    Args:
        instance: Builds the problem ``instance`` URI from the command's
            keyword arguments.
    """

    def decorator(fn: Callable[P, R]) -> Callable[P, R]:
        @wraps(fn)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            try:
                return fn(*args, **kwargs)
            except CustomerError as e:
                _emit(to_problem(e, instance(**kwargs)))
                raise click.exceptions.Exit(exit_code_for(e)) from e

        return wrapper

    return decorator


@click.group(cls=clickx.ExtraGroup)
def customers() -> None:
    """Create, read, update and delete customers."""


@customers.command()
@click.argument("source", type=click.File("r"))
@reports_problems(lambda **_: "/customers")
def create(source: TextIO) -> None:
    """Create a customer from the JSON document in SOURCE."""
    customer = decode_customer(_read_document(source))
    saved = _container().message_bus.handle(commands.CreateCustomer(customer))
    _emit_customer(saved)


@customers.command()
@click.argument("customer_id", type=int)
@reports_problems(lambda customer_id, **_: f"/customers/{customer_id}")
def get(customer_id: int) -> None:
    """Show the customer with CUSTOMER_ID."""
    _emit_customer(queries.get_customer(customer_id, _container().uow))


@customers.command("find-by-email")
@click.argument("email")
@reports_problems(lambda email, **_: search_instance(email))
def find_by_email(email: str) -> None:
    """Show the customer holding EMAIL (exact match)."""
    _emit_customer(queries.find_customer_by_email(email, _container().uow))


@customers.command()
@click.argument("customer_id", type=int)
@click.argument("source", type=click.File("r"))
@reports_problems(lambda customer_id, **_: f"/customers/{customer_id}")
def update(customer_id: int, source: TextIO) -> None:
    """Replace customer CUSTOMER_ID with the JSON document in SOURCE."""
    customer = decode_customer(_read_document(source))
    saved = _container().message_bus.handle(
        commands.UpdateCustomer(customer_id, customer)
    )
    _emit_customer(saved)


@customers.command()
@click.argument("customer_id", type=int)
@click.argument("source", type=click.File("r"))
@reports_problems(lambda customer_id, **_: f"/customers/{customer_id}")
def patch(customer_id: int, source: TextIO) -> None:
    """Apply the JSON merge patch (RFC 7396) in SOURCE to CUSTOMER_ID."""
    merge_patch = _read_document(source)
    saved = _container().message_bus.handle(
        commands.PatchCustomer(customer_id, merge_patch)
    )
    _emit_customer(saved)


@customers.command()
@click.argument("customer_id", type=int)
@reports_problems(lambda customer_id, **_: f"/customers/{customer_id}")
def delete(customer_id: int) -> None:
    """Delete customer CUSTOMER_ID."""
    _container().message_bus.handle(commands.DeleteCustomer(customer_id))
    success(f"Deleted customer {customer_id}")


@customers.command("list")
@click.option(
    "--after",
    "after",
    type=int,
    default=None,
    help="Only customers with an id greater than this cursor.",
)
@click.option(
    "--limit",
    "limit",
    type=int,
    default=DEFAULT_LIMIT,
    show_default=True,
    help="Page size (1-100).",
)
@reports_problems(
    lambda after, limit, **_: f"/customers?after={after or ''}&limit={limit}"
)
def list_(after: int | None, limit: int) -> None:
    """List one page of customers in ascending id order."""
    page = queries.list_customers(
        PageRequest(cursor=after, limit=limit), _container().uow
    )
    _emit(
        {
            "data": [to_document(c) for c in page.data],
            "nextCursor": page.next_cursor,
            "hasMore": page.has_more,
            "limit": page.limit,
        }
    )
