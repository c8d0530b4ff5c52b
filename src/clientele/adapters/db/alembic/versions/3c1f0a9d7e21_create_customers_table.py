"""create customers table

Revision ID: 3c1f0a9d7e21
Revises:
Create Date: 2026-10-19 09:12:44.518302

"""

# pylint: disable=invalid-name

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# pylint: disable=no-member

# revision identifiers, used by Alembic.
revision: str = "3c1f0a9d7e21"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Upgrade schema."""

    op.create_table(
        "customers",
        sa.Column(
            "id",
            sa.BigInteger(),
            autoincrement=False,
            nullable=False,
            comment="Application-assigned TSID.",
        ),
        sa.Column(
            "document",
            sa.JSON(none_as_null=True).with_variant(
                postgresql.JSONB(none_as_null=True), "postgresql"
            ),
            nullable=False,
            comment="Full customer aggregate as a JSON document.",
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            comment="Creation time (UTC); mirrors document.createdAt.",
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            comment="Last mutation time (UTC); mirrors document.updatedAt.",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_customers")),
    )
    op.create_index(
        op.f("ix_customers_created_at"), "customers", ["created_at"], unique=False
    )

    if op.get_context().dialect.name == "postgresql":  # pylint: disable=R2004
        op.create_index(
            op.f("ix_customers_document"),
            "customers",
            ["document"],
            unique=False,
            postgresql_using="gin",
        )


def downgrade() -> None:
    """Downgrade schema."""

    if op.get_context().dialect.name == "postgresql":  # pylint: disable=R2004
        op.drop_index(op.f("ix_customers_document"), table_name="customers")
    op.drop_index(op.f("ix_customers_created_at"), table_name="customers")
    op.drop_table("customers")
