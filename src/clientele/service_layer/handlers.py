"""Service layer handlers for customer mutations.

Every handler follows the same shape:

1. Reject bad input before touching storage (IllegalInput).
2. In one unit of work: load what is needed, stamp server-owned fields, run
   the email pre-check, save (the store re-checks under lock), commit.
3. After the commit, publish a CloudEvent synchronously.

A failed publish is reported as `InternalServiceError` even though the write
is already committed and stays committed. Callers must not assume the
mutation was rolled back.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

from clientele.config import DEFAULT_PUBLISH_TIMEOUT_S
from clientele.domain.codec import to_document
from clientele.domain.errors import (
    CustomerConflictError,
    IllegalInputError,
    InternalServiceError,
)
from clientele.domain.events import CloudEvent, CustomerEventType
from clientele.domain.merge_patch import merge_patch
from clientele.domain.validation import FieldViolation, validate
from clientele.interfaces.event_publisher import EventPublishError, EventPublishTimeout

from . import commands
from .translation import decode_customer, domain_errors, unwrap
from .uniqueness import ensure_emails_available

if TYPE_CHECKING:
    from clientele.domain.model import Customer
    from clientele.interfaces.event_publisher import EventPublisher
    from clientele.interfaces.id_generator import IdGenerator, NumericIdGenerator
    from clientele.interfaces.unit_of_work import AbstractUnitOfWork

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]

#: Patch keys owned by the server; they are dropped from incoming patches.
SERVER_OWNED_KEYS = ("id", "createdAt", "updatedAt")


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def _next_updated_at(now: datetime, previous: datetime | None) -> datetime:
    return now if previous is None else max(now, previous)


def _check(customer: Customer) -> None:
    if violations := validate(customer):
        raise IllegalInputError.from_violations(violations)


def _announce(  # pylint: disable=too-many-arguments
    publisher: EventPublisher,
    event_ids: IdGenerator,
    clock: Clock,
    event_type: CustomerEventType,
    customer: Customer,
    timeout: float,
) -> None:
    event = CloudEvent(
        id=event_ids.new_id(),
        type=event_type,
        subject=str(customer.id),
        time=clock(),
        data=to_document(customer),
    )
    try:
        publisher.publish(event, timeout)
    except EventPublishTimeout as e:
        raise InternalServiceError(
            f"Customer {customer.id} was committed but publishing "
            f"{event_type.value} timed out after {timeout}s"
        ) from e
    except EventPublishError as e:
        raise InternalServiceError(
            f"Customer {customer.id} was committed but publishing "
            f"{event_type.value} failed"
        ) from e
    logger.debug("Published %s %s for customer %s", event_type.value, event.id, customer.id)


# ============================================================================
#                               Mutations
# ============================================================================


def create_customer(  # pylint: disable=too-many-arguments
    cmd: commands.CreateCustomer,
    uow: AbstractUnitOfWork,
    publisher: EventPublisher,
    id_generator: NumericIdGenerator,
    event_ids: IdGenerator,
    clock: Clock = utc_now,
    publish_timeout: float = DEFAULT_PUBLISH_TIMEOUT_S,
) -> Customer:
    """Validate, assign id and timestamps, persist, and announce a new customer."""

    with domain_errors("create customer"):
        _check(cmd.customer)

        with uow:
            if cmd.customer.id is not None and unwrap(
                uow.customers.exists(cmd.customer.id)
            ):
                raise CustomerConflictError(
                    f"Customer already exists with id: {cmd.customer.id}"
                )

            now = clock()
            customer = cmd.customer.stamped(
                id=id_generator.new_id(), created_at=now, updated_at=now
            )
            ensure_emails_available(uow.customers, customer)
            saved = unwrap(uow.customers.save(customer))
            uow.commit()

        logger.info("Created customer %s", saved.id)
        _announce(
            publisher, event_ids, clock, CustomerEventType.CREATED, saved, publish_timeout
        )
        return saved


def update_customer(  # pylint: disable=too-many-arguments
    cmd: commands.UpdateCustomer,
    uow: AbstractUnitOfWork,
    publisher: EventPublisher,
    event_ids: IdGenerator,
    clock: Clock = utc_now,
    publish_timeout: float = DEFAULT_PUBLISH_TIMEOUT_S,
) -> Customer:
    """Replace an existing customer, keeping its id and creation time."""

    with domain_errors(f"update customer {cmd.customer_id}"):
        if cmd.customer.id is not None and cmd.customer.id != cmd.customer_id:
            raise IllegalInputError(
                f"Customer id {cmd.customer.id} in the body does not match "
                f"id {cmd.customer_id} being updated",
                [FieldViolation("id", "must match the id being updated", cmd.customer.id)],
            )
        _check(cmd.customer)

        with uow:
            existing = unwrap(uow.customers.get(cmd.customer_id, for_update=True))
            customer = cmd.customer.stamped(
                id=cmd.customer_id,
                created_at=existing.created_at or clock(),
                updated_at=_next_updated_at(clock(), existing.updated_at),
            )
            ensure_emails_available(uow.customers, customer)
            saved = unwrap(uow.customers.save(customer))
            uow.commit()

        logger.info("Updated customer %s", saved.id)
        _announce(
            publisher, event_ids, clock, CustomerEventType.UPDATED, saved, publish_timeout
        )
        return saved


def patch_customer(  # pylint: disable=too-many-arguments
    cmd: commands.PatchCustomer,
    uow: AbstractUnitOfWork,
    publisher: EventPublisher,
    event_ids: IdGenerator,
    clock: Clock = utc_now,
    publish_timeout: float = DEFAULT_PUBLISH_TIMEOUT_S,
) -> Customer:
    """Merge-patch an existing customer and re-validate the result.

    `id`, `createdAt` and `updatedAt` in the patch are ignored. The merge,
    validation and save happen while the customer row is locked, so
    concurrent patches of the same customer cannot interleave. An empty patch
    still bumps `updatedAt` and publishes an update.
    """

    with domain_errors(f"patch customer {cmd.customer_id}"):
        if not isinstance(cmd.patch, dict):
            raise IllegalInputError(
                "Merge patch must be a JSON object",
                [FieldViolation("$", "must be a JSON object", cmd.patch)],
            )
        patch: dict[str, Any] = {
            k: v for k, v in cmd.patch.items() if k not in SERVER_OWNED_KEYS
        }

        with uow:
            existing = unwrap(uow.customers.get(cmd.customer_id, for_update=True))
            merged = decode_customer(merge_patch(to_document(existing), patch))
            customer = merged.stamped(
                id=cmd.customer_id,
                created_at=existing.created_at or clock(),
                updated_at=_next_updated_at(clock(), existing.updated_at),
            )
            _check(customer)
            ensure_emails_available(uow.customers, customer)
            saved = unwrap(uow.customers.save(customer))
            uow.commit()

        logger.info("Patched customer %s (%d keys)", saved.id, len(patch))
        _announce(
            publisher, event_ids, clock, CustomerEventType.UPDATED, saved, publish_timeout
        )
        return saved


def delete_customer(  # pylint: disable=too-many-arguments
    cmd: commands.DeleteCustomer,
    uow: AbstractUnitOfWork,
    publisher: EventPublisher,
    event_ids: IdGenerator,
    clock: Clock = utc_now,
    publish_timeout: float = DEFAULT_PUBLISH_TIMEOUT_S,
) -> None:
    """Hard-delete a customer and announce its last snapshot."""

    with domain_errors(f"delete customer {cmd.customer_id}"):
        with uow:
            snapshot = unwrap(uow.customers.get(cmd.customer_id, for_update=True))
            unwrap(uow.customers.delete(cmd.customer_id))
            uow.commit()

        logger.info("Deleted customer %s", cmd.customer_id)
        _announce(
            publisher,
            event_ids,
            clock,
            CustomerEventType.DELETED,
            snapshot,
            publish_timeout,
        )


COMMAND_HANDLERS: dict[type[commands.Command], Callable[..., Any]] = {
    commands.CreateCustomer: create_customer,
    commands.UpdateCustomer: update_customer,
    commands.PatchCustomer: patch_customer,
    commands.DeleteCustomer: delete_customer,
}
