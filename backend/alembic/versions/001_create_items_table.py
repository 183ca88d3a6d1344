"""Create items table

Revision ID: 001
Revises: None
Create Date: 2026-10-18 00:00:00.000000+00:00

Rollback: downgrade() drops the table (all items are lost).
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the items table; column rationale lives in storefront/models/item.py."""
    op.create_table(
        "items",
        sa.Column("id", sa.Uuid(as_uuid=True), nullable=False, comment="Unique identifier"),
        sa.Column(
            "name",
            sa.String(255),
            nullable=False,
            comment="Display name, stored without surrounding whitespace",
        ),
        sa.Column("price", sa.Numeric(10, 2), nullable=False, comment="Unit price"),
        sa.Column(
            "ratings",
            sa.Integer(),
            nullable=False,
            server_default=sa.text("0"),
            comment="Number of ratings received",
        ),
        sa.Column(
            "sold_on",
            sa.Date(),
            nullable=True,
            comment="Day the item was sold; NULL while available",
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
            comment="When this item was created (UTC)",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_items"),
        sa.CheckConstraint("price >= 0", name="ck_items_price_non_negative"),
        sa.CheckConstraint("ratings >= 0", name="ck_items_ratings_non_negative"),
    )

    op.create_index(
        "idx_items_created_at",
        "items",
        [sa.text("created_at DESC")],
    )


def downgrade() -> None:
    op.drop_index("idx_items_created_at", table_name="items")
    op.drop_table("items")
