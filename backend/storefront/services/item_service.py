"""
Storefront Backend — Item Service (Business Logic)
====================================================

What:  The use cases of the catalogue: create, fetch, list and sell items.
Why:   Route handlers stay thin (HTTP only); everything a controller action
       used to do lives here and can be tested without HTTP.
How:   Stateless methods receive an AsyncSession per call, work on Item rows,
       and return response schemas built from an ItemDecorator.

Explicit steps instead of model callbacks:
    - Name normalisation happens in create_item before the row is added,
      not in an ORM "before insert" hook.
    - Recording a sale happens in mark_sold, which is the only code path
      that sets sold_on; there is no "after update" listener to discover.
    A reader sees every side effect of a use case in one method.

Error Handling Strategy:
    Our own errors (ValidationError, NotFoundError) propagate unchanged.
    Anything else raised while talking to the database is logged and wrapped
    in DatabaseError so internals never reach the client.
"""

import logging
from datetime import date, datetime, timezone
from typing import Callable, Dict, Optional
from uuid import UUID, uuid4

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.config import settings
from storefront.decorators.item_decorator import ItemDecorator
from storefront.exceptions import DatabaseError, NotFoundError, ValidationError
from storefront.models.item import Item
from storefront.schemas.item import ItemCreate, ItemListResponse, ItemResponse

logger = logging.getLogger(__name__)

# Scope name → Select factory
SCOPES: Dict[str, Callable[[], Select]] = {
    "all": Item.recent,
    "featured": lambda: Item.featured(settings.featured_ratings_threshold),
    "available": Item.available,
    "sold": Item.sold,
}

MAX_PAGE_SIZE = 100


def present(item: Item) -> ItemResponse:
    """Decorate `item` for this response and serialize it."""
    return ItemResponse.from_decorated(ItemDecorator.create(item))


class ItemService:
    """
    Business logic layer for item operations.

    Responsibilities:
        - create_item(): validate and persist a new item
        - get_item(): single item retrieval with not-found handling
        - list_items(): scoped, newest-first listing
        - mark_sold(): record a sale exactly once
    """

    async def create_item(self, db: AsyncSession, payload: ItemCreate) -> ItemResponse:
        """
        Persist a new item.

        Raises:
            ValidationError: The name is blank once surrounding whitespace is removed.
            DatabaseError: The insert failed.
        """
        name = payload.name.strip()
        if not name:
            raise ValidationError(message="Item name must not be blank", field="name")

        item = Item(
            id=uuid4(),
            name=name,
            price=payload.price,
            ratings=payload.ratings,
            sold_on=None,
            created_at=datetime.now(timezone.utc),
        )
        try:
            db.add(item)
            await db.flush()
        except Exception as e:
            logger.error("Database error creating item '%s': %s", name, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not create the item. Please try again.",
                context={"error_type": type(e).__name__},
            )

        logger.info("Item created: %s (%s)", item.id, item.name)
        return present(item)

    async def get_item(self, db: AsyncSession, item_id: UUID) -> ItemResponse:
        """
        Retrieve a single item by ID.

        Raises:
            NotFoundError: No item has this ID (→ 404)
            DatabaseError: Query execution failed (→ 500)
        """
        item = await self._load(db, item_id)
        return present(item)

    async def list_items(
        self,
        db: AsyncSession,
        scope: str = "all",
        limit: Optional[int] = None,
    ) -> ItemListResponse:
        """
        List items in a named scope, newest first.

        Args:
            db:    Async database session
            scope: One of SCOPES ('all', 'featured', 'available', 'sold')
            limit: Page size (1-100); defaults to settings.default_page_size

        Raises:
            ValidationError: Unknown scope or out-of-range limit
            DatabaseError: Query execution failed
        """
        if scope not in SCOPES:
            raise ValidationError(
                message=f"Unknown scope '{scope}'. Must be one of: {sorted(SCOPES)}",
                field="scope",
            )
        if limit is None:
            limit = settings.default_page_size
        if not 1 <= limit <= MAX_PAGE_SIZE:
            raise ValidationError(
                message=f"limit must be between 1 and {MAX_PAGE_SIZE}",
                field="limit",
            )

        query = SCOPES[scope]()
        try:
            result = await db.execute(query.limit(limit))
            items = list(result.scalars().all())

            count_query = select(func.count()).select_from(query.order_by(None).subquery())
            count_result = await db.execute(count_query)
            total_count = count_result.scalar() or 0
        except Exception as e:
            logger.error("Database error listing items (scope=%s): %s", scope, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve items. Please try again.",
                context={"scope": scope, "error_type": type(e).__name__},
            )

        return ItemListResponse(
            items=[present(item) for item in items],
            total_count=total_count,
            scope=scope,
        )

    async def mark_sold(
        self,
        db: AsyncSession,
        item_id: UUID,
        sold_on: Optional[date] = None,
    ) -> ItemResponse:
        """
        Record the sale of an item.

        Args:
            sold_on: Sale date; today (UTC) when omitted.

        Raises:
            NotFoundError: No item has this ID
            ValidationError: The item was already sold
            DatabaseError: The update failed
        """
        # Row lock: a concurrent sale waits here, then sees sold_on already set
        item = await self._load(db, item_id, for_update=True)
        if item.sold_on is not None:
            raise ValidationError(
                message=f"Item '{item.name}' was already sold on {item.sold_on.isoformat()}",
                field="sold_on",
                context={"item_id": str(item_id)},
            )

        item.sold_on = sold_on or datetime.now(timezone.utc).date()
        try:
            await db.flush()
        except Exception as e:
            logger.error("Database error selling item %s: %s", item_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not record the sale. Please try again.",
                context={"item_id": str(item_id), "error_type": type(e).__name__},
            )

        logger.info("Item %s sold on %s", item.id, item.sold_on.isoformat())
        return present(item)

    async def _load(self, db: AsyncSession, item_id: UUID, for_update: bool = False) -> Item:
        query = select(Item).where(Item.id == item_id)
        if for_update:
            query = query.with_for_update().execution_options(populate_existing=True)
        try:
            result = await db.execute(query)
            item = result.scalar_one_or_none()
        except Exception as e:
            logger.error("Database error fetching item %s: %s", item_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the item. Please try again.",
                context={"item_id": str(item_id)},
            )

        if item is None:
            raise NotFoundError(resource="item", resource_id=str(item_id))
        return item


item_service = ItemService()
