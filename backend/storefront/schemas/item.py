"""
Storefront Backend — Pydantic Request/Response Schemas
=======================================================

What:  The API contract for items: what clients send and what they get back.
How:   FastAPI validates request bodies against these models, serializes
       responses through them, and builds the OpenAPI docs from them.

Responses are built from an ItemDecorator, never from the ORM row directly,
so presentation fields (`featured`, `status`) sit next to stored ones.
"""

import uuid
from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional, TYPE_CHECKING

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from storefront.decorators.item_decorator import ItemDecorator


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class ItemCreate(BaseModel):
    """Body of POST /api/items."""
    name: str = Field(min_length=1, max_length=255, description="Display name")
    price: Decimal = Field(ge=0, max_digits=10, decimal_places=2, description="Unit price")
    ratings: int = Field(default=0, ge=0, description="Initial ratings count")


class SellRequest(BaseModel):
    """Body of POST /api/items/{id}/sell. Omit sold_on to sell today (UTC)."""
    sold_on: Optional[date] = Field(default=None, description="Sale date (ISO 8601)")


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class ItemResponse(BaseModel):
    """
    What:  Full representation of an item as shown to clients.
    Who:   Returned by every item endpoint.

    Fields `featured` and `status` are computed by ItemDecorator; the rest
    are forwarded from the item itself.
    """
    id: uuid.UUID = Field(description="Unique item identifier (UUID)")
    name: str = Field(description="Display name")
    price: Decimal = Field(description="Unit price")
    ratings: int = Field(description="Number of ratings received")
    sold_on: Optional[date] = Field(default=None, description="Sale date, null while available")
    created_at: datetime = Field(description="When the item was created (UTC ISO 8601)")
    featured: bool = Field(description="Whether the item is highlighted in listings")
    status: str = Field(description="'Available' or 'Sold on <date>'")

    @classmethod
    def from_decorated(cls, item: "ItemDecorator") -> "ItemResponse":
        return cls(
            id=item.id,
            name=item.name,
            price=item.price,
            ratings=item.ratings,
            sold_on=item.sold_on,
            created_at=item.created_at,
            featured=item.is_featured(),
            status=item.status(),
        )


class ItemListResponse(BaseModel):
    """Response wrapper for GET /api/items."""
    items: List[ItemResponse] = Field(description="Items in the requested scope, newest first")
    total_count: int = Field(description="Number of items in the scope")
    scope: str = Field(description="Scope that was applied")


class ErrorResponse(BaseModel):
    """
    Standardized error body for all API errors.

    Example:
        {
            "error": "not_found",
            "message": "item with ID '...' was not found",
            "request_id": "1a2b3c4d"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Returned by GET /health."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
