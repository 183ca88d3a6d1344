"""
Storefront Backend — Item SQLAlchemy Model
============================================

What:  ORM model representing the `items` table.
Who:   Persisted and queried by ItemService; wrapped by ItemDecorator for
       presentation; read by Alembic for migrations.

Table Design Rationale:
    - UUID primary key: non-sequential, safe to expose in URLs
    - price: NUMERIC(10, 2), never float, so money stays exact
    - ratings: plain counter; "featured" is a presentation question answered
      by ItemDecorator, not a stored flag
    - sold_on: DATE, NULL while the item is available
    - created_at: UTC with timezone; indexed DESC for newest-first listing

Query scopes:
    The classmethods at the bottom return composable `Select` statements so
    the service can write `Item.available().limit(20)` instead of repeating
    WHERE clauses.
"""

import uuid
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Optional

from sqlalchemy import (
    CheckConstraint,
    Date,
    DateTime,
    Index,
    Integer,
    Numeric,
    Select,
    String,
    Uuid,
    select,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column

from storefront.database import Base


class Item(Base):
    """
    A catalogue item.

    Lifecycle:
        1. Created through ItemService.create_item (sold_on = NULL)
        2. Sold through ItemService.mark_sold (sold_on = sale date)
        3. Never un-sold; selling twice is rejected by the service

    Satisfies the Ratable and Sellable capability protocols.
    """

    __tablename__ = "items"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        comment="Unique identifier",
    )

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Display name, stored without surrounding whitespace",
    )

    price: Mapped[Decimal] = mapped_column(
        Numeric(10, 2),
        nullable=False,
        comment="Unit price",
    )

    ratings: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        server_default=text("0"),
        comment="Number of ratings received",
    )

    sold_on: Mapped[Optional[date]] = mapped_column(
        Date,
        nullable=True,
        default=None,
        comment="Day the item was sold; NULL while available",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
        comment="When this item was created (UTC)",
    )

    __table_args__ = (
        Index("idx_items_created_at", created_at.desc()),
        CheckConstraint("price >= 0", name="ck_items_price_non_negative"),
        CheckConstraint("ratings >= 0", name="ck_items_ratings_non_negative"),
    )

    # ── Scopes ────────────────────────────────────────────────────────────

    @classmethod
    def recent(cls) -> Select:
        """All items, newest first."""
        return select(cls).order_by(cls.created_at.desc())

    @classmethod
    def featured(cls, threshold: int) -> Select:
        """Items rated strictly above `threshold`, newest first."""
        return cls.recent().where(cls.ratings > threshold)

    @classmethod
    def available(cls) -> Select:
        return cls.recent().where(cls.sold_on.is_(None))

    @classmethod
    def sold(cls) -> Select:
        return cls.recent().where(cls.sold_on.is_not(None))

    def __repr__(self) -> str:
        return f"<Item(id={self.id}, name='{self.name}', sold_on={self.sold_on})>"
