"""Fast pre-check of email uniqueness.

Runs before any write and rejects the common duplicate case without paying for
locks. It is racy on its own; the store re-checks under a transaction-scoped
lock when saving.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from clientele.domain.errors import CustomerConflictError
from clientele.interfaces.results import Failure, FailureKind, Ok
from clientele.logging import mask_email

from .translation import to_domain_error

if TYPE_CHECKING:
    from clientele.domain.model import Customer
    from clientele.interfaces.customer_store import CustomerStore

logger = logging.getLogger(__name__)


def ensure_emails_available(store: CustomerStore, customer: Customer) -> None:
    """Raise `CustomerConflictError` if another customer holds any of the emails.

    Args:
        store: Store to look in.
        customer: Customer about to be written; its own id is excluded.
    """
    for email in sorted(set(customer.email_addresses)):
        match store.find_by_email(email, exclude_id=customer.id):
            case Ok(holder):
                logger.debug(
                    "Pre-check: %s already held by customer %s",
                    mask_email(email),
                    holder.id,
                )
                raise CustomerConflictError(
                    f"Email {email} is already in use by customer {holder.id}"
                )
            case Failure(kind=FailureKind.NOT_FOUND):
                continue
            case Failure() as failure:
                raise to_domain_error(failure) from failure.cause
