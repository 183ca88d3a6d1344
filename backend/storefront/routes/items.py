"""
Storefront Backend — Item Route Handlers
==========================================

What:  HTTP endpoints for the item catalogue.
How:   Each handler extracts request data, calls ItemService, and returns its
       schema. No business rules and no presentation logic live here.

Route Inventory:
    POST /api/items                 create an item            (201)
    GET  /api/items                 list items in a scope
    GET  /api/items/{item_id}       item detail
    POST /api/items/{item_id}/sell  record a sale
"""

import logging
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Body, Depends, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.database import get_db_session
from storefront.schemas.item import (
    ErrorResponse,
    ItemCreate,
    ItemListResponse,
    ItemResponse,
    SellRequest,
)
from storefront.services.item_service import item_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Items"])


@router.post(
    "/items",
    status_code=201,
    response_model=ItemResponse,
    responses={
        400: {"description": "Business rule violated", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Create an item",
)
async def create_item(
    payload: ItemCreate,
    db: AsyncSession = Depends(get_db_session),
) -> ItemResponse:
    return await item_service.create_item(db=db, payload=payload)


@router.get(
    "/items",
    response_model=ItemListResponse,
    responses={
        400: {"description": "Unknown scope", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="List items in a scope",
    description=(
        "Returns items newest first. `scope` narrows the listing to featured, "
        "available, or sold items. The scope's total size is also sent in the "
        "X-Total-Count header."
    ),
)
async def list_items(
    response: Response,
    scope: str = Query(
        default="all",
        description="One of: all, featured, available, sold",
    ),
    limit: Optional[int] = Query(
        default=None, ge=1, le=100,
        description="Items per page (max 100)",
    ),
    db: AsyncSession = Depends(get_db_session),
) -> ItemListResponse:
    result = await item_service.list_items(db=db, scope=scope, limit=limit)
    response.headers["X-Total-Count"] = str(result.total_count)
    return result


@router.get(
    "/items/{item_id}",
    response_model=ItemResponse,
    responses={
        404: {"description": "Item not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Get a single item by ID",
)
async def get_item(
    item_id: UUID,
    db: AsyncSession = Depends(get_db_session),
) -> ItemResponse:
    """Invalid UUIDs are rejected by FastAPI with 422 before reaching the service."""
    return await item_service.get_item(db=db, item_id=item_id)


@router.post(
    "/items/{item_id}/sell",
    response_model=ItemResponse,
    responses={
        400: {"description": "Item already sold", "model": ErrorResponse},
        404: {"description": "Item not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Record the sale of an item",
)
async def sell_item(
    item_id: UUID,
    payload: Optional[SellRequest] = Body(default=None),
    db: AsyncSession = Depends(get_db_session),
) -> ItemResponse:
    sold_on = payload.sold_on if payload else None
    return await item_service.mark_sold(db=db, item_id=item_id, sold_on=sold_on)
