"""
Storefront Backend — Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Environment overrides are applied BEFORE any storefront import so the
       settings singleton and the engine are built for testing.

Fixtures:
    ├── mock_db_session: AsyncMock standing in for AsyncSession
    ├── make_item: factory for transient Item rows (never flushed)
    └── test_client: HTTPX AsyncClient with the DB dependency overridden
"""

import os

os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["FEATURED_RATINGS_THRESHOLD"] = "5"
os.environ["DISPLAY_DATE_FORMAT"] = "%Y-%m-%d"

import uuid
from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from storefront.database import get_db_session
from storefront.models.item import Item


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        mock_db_session.execute.return_value.scalar_one_or_none.return_value = item
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def make_item():
    """
    Builds transient Item instances with every column populated.

    Usage:
        item = make_item(ratings=7, sold_on=date(2024, 3, 5))
    """
    def _make(**overrides):
        fields = {
            "id": uuid.uuid4(),
            "name": "Walnut Desk Lamp",
            "price": Decimal("49.90"),
            "ratings": 0,
            "sold_on": None,
            "created_at": datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc),
        }
        fields.update(overrides)
        return Item(**fields)

    return _make


@pytest_asyncio.fixture
async def test_client(mock_db_session):
    """
    HTTPX AsyncClient routed straight into the FastAPI app.

    The database dependency yields `mock_db_session`; patch
    `storefront.routes.items.item_service` to control service results.
    """
    from storefront.main import app

    async def _override_session():
        yield mock_db_session

    app.dependency_overrides[get_db_session] = _override_session
    transport = ASGITransport(app=app)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client
    finally:
        app.dependency_overrides.clear()
