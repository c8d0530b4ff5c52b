"""Customer store schema.

One row per Customer aggregate. The whole aggregate lives in ``document``;
``id``, ``created_at`` and ``updated_at`` are duplicated as columns for
ordering and indexing and are kept in sync with the document on every write.

| Index                          | Purpose                               |
|--------------------------------|---------------------------------------|
| pk_customers (id)              | lookups and keyset scans (id > cursor)|
| ix_customers_created_at        | time-based queries                    |
| ix_customers_document (GIN)    | ``document @> ...`` containment (PG)  |

No uniqueness constraint can express "no two documents share an email"; that
rule is enforced by the store's save path.
"""

from __future__ import annotations

from sqlalchemy import Column, Index, Table

from clientele.adapters.db.metadata import metadata
from clientele.adapters.db.sa_types import BIGINT_ID, DOCUMENT_JSON, UTCDateTime

__all__ = ["customers"]

customers = Table(
    "customers",
    metadata,
    Column(
        "id",
        BIGINT_ID,
        primary_key=True,
        autoincrement=False,
        comment="Application-assigned TSID.",
    ),
    Column(
        "document",
        DOCUMENT_JSON,
        nullable=False,
        comment="Full customer aggregate as a JSON document.",
    ),
    Column(
        "created_at",
        UTCDateTime(),
        nullable=False,
        comment="Creation time (UTC); mirrors document.createdAt.",
    ),
    Column(
        "updated_at",
        UTCDateTime(),
        nullable=False,
        comment="Last mutation time (UTC); mirrors document.updatedAt.",
    ),
)

Index("ix_customers_created_at", customers.c.created_at)
Index(
    "ix_customers_document",
    customers.c.document,
    postgresql_using="gin",
).ddl_if(dialect="postgresql")
