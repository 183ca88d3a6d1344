"""
Storefront Backend — Item Service Unit Tests
===============================================

What:  Tests for ItemService business logic (create, get, list, sell).
How:   Uses the mock DB session; Item rows are transient instances.

What we test:
    ✅ Names are stripped before insert; blank names are rejected
    ✅ Responses carry the decorator's featured/status fields
    ✅ Missing items raise NotFoundError
    ✅ Scopes select the right rows and unknown scopes are rejected
    ✅ An item can only be sold once
    ✅ Unexpected database failures become DatabaseError
"""

from datetime import date, datetime, timezone
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock, patch
from uuid import uuid4

import pytest

from storefront.exceptions import DatabaseError, NotFoundError, ValidationError
from storefront.models.item import Item
from storefront.schemas.item import ItemCreate
from storefront.services.item_service import ItemService


def _row_result(item):
    result = MagicMock()
    result.scalar_one_or_none.return_value = item
    return result


def _list_results(items, total):
    rows = MagicMock()
    rows.scalars.return_value.all.return_value = items
    count = MagicMock()
    count.scalar.return_value = total
    return [rows, count]


def _compiled(call):
    """SQL text of the statement passed to db.execute in `call`."""
    return str(call.args[0])


class TestItemServiceCreate:
    """Tests for create_item."""

    def setup_method(self):
        self.service = ItemService()

    @pytest.mark.asyncio
    async def test_create_item_strips_name(self, mock_db_session):
        payload = ItemCreate(name="  Brass Compass  ", price=Decimal("19.90"), ratings=8)

        result = await self.service.create_item(mock_db_session, payload)

        assert result.name == "Brass Compass"
        assert result.price == Decimal("19.90")
        assert result.featured is True
        assert result.status == "Available"
        assert result.sold_on is None
        mock_db_session.add.assert_called_once()
        added = mock_db_session.add.call_args.args[0]
        assert isinstance(added, Item)
        assert added.name == "Brass Compass"
        assert result.id == added.id
        mock_db_session.flush.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_create_item_rejects_blank_name(self, mock_db_session):
        payload = ItemCreate(name="   ", price=Decimal("1.00"))

        with pytest.raises(ValidationError) as exc_info:
            await self.service.create_item(mock_db_session, payload)

        assert exc_info.value.field == "name"
        mock_db_session.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_create_item_flush_failure(self, mock_db_session):
        mock_db_session.flush = AsyncMock(side_effect=RuntimeError("connection reset"))
        payload = ItemCreate(name="Lamp", price=Decimal("5.00"))

        with pytest.raises(DatabaseError) as exc_info:
            await self.service.create_item(mock_db_session, payload)

        assert exc_info.value.context["error_type"] == "RuntimeError"


class TestItemServiceGet:
    """Tests for get_item retrieval."""

    def setup_method(self):
        self.service = ItemService()

    @pytest.mark.asyncio
    async def test_get_item_found(self, mock_db_session, make_item):
        item = make_item(ratings=2, sold_on=date(2024, 2, 29))
        mock_db_session.execute.return_value = _row_result(item)

        result = await self.service.get_item(mock_db_session, item.id)

        assert result.id == item.id
        assert result.name == item.name
        assert result.featured is False
        assert result.status == "Sold on 2024-02-29"

    @pytest.mark.asyncio
    async def test_get_item_not_found(self, mock_db_session):
        mock_db_session.execute.return_value = _row_result(None)

        with pytest.raises(NotFoundError) as exc_info:
            await self.service.get_item(mock_db_session, uuid4())

        assert exc_info.value.context["resource"] == "item"

    @pytest.mark.asyncio
    async def test_get_item_database_failure(self, mock_db_session):
        mock_db_session.execute = AsyncMock(side_effect=RuntimeError("boom"))

        with pytest.raises(DatabaseError):
            await self.service.get_item(mock_db_session, uuid4())


class TestItemServiceList:
    """Tests for list_items with scopes."""

    def setup_method(self):
        self.service = ItemService()

    @pytest.mark.asyncio
    async def test_list_items_empty(self, mock_db_session):
        mock_db_session.execute = AsyncMock(side_effect=_list_results([], 0))

        result = await self.service.list_items(mock_db_session)

        assert result.items == []
        assert result.total_count == 0
        assert result.scope == "all"

    @pytest.mark.asyncio
    async def test_list_items_presents_each_item(self, mock_db_session, make_item):
        items = [make_item(name="Globe", ratings=9), make_item(name="Atlas", ratings=1)]
        mock_db_session.execute = AsyncMock(side_effect=_list_results(items, 2))

        result = await self.service.list_items(mock_db_session, limit=10)

        assert [i.name for i in result.items] == ["Globe", "Atlas"]
        assert [i.featured for i in result.items] == [True, False]
        assert result.total_count == 2
        assert "LIMIT" in _compiled(mock_db_session.execute.await_args_list[0])

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "scope, fragment",
        [
            ("featured", "items.ratings >"),
            ("available", "items.sold_on IS NULL"),
            ("sold", "items.sold_on IS NOT NULL"),
        ],
    )
    async def test_list_items_applies_scope(self, mock_db_session, scope, fragment):
        mock_db_session.execute = AsyncMock(side_effect=_list_results([], 0))

        result = await self.service.list_items(mock_db_session, scope=scope)

        assert result.scope == scope
        rows_sql, count_sql = (_compiled(c) for c in mock_db_session.execute.await_args_list)
        assert fragment in rows_sql
        assert "ORDER BY items.created_at DESC" in rows_sql
        assert fragment in count_sql

    @pytest.mark.asyncio
    async def test_list_items_unknown_scope(self, mock_db_session):
        with pytest.raises(ValidationError, match="Unknown scope"):
            await self.service.list_items(mock_db_session, scope="discounted")
        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("limit", [0, 101])
    async def test_list_items_limit_out_of_range(self, mock_db_session, limit):
        with pytest.raises(ValidationError) as exc_info:
            await self.service.list_items(mock_db_session, limit=limit)
        assert exc_info.value.field == "limit"

    @pytest.mark.asyncio
    async def test_list_items_database_failure(self, mock_db_session):
        mock_db_session.execute = AsyncMock(side_effect=RuntimeError("timeout"))

        with pytest.raises(DatabaseError) as exc_info:
            await self.service.list_items(mock_db_session, scope="sold")

        assert exc_info.value.context["scope"] == "sold"


class TestItemServiceMarkSold:
    """Tests for mark_sold."""

    def setup_method(self):
        self.service = ItemService()

    @pytest.mark.asyncio
    async def test_mark_sold_with_date(self, mock_db_session, make_item):
        item = make_item()
        mock_db_session.execute.return_value = _row_result(item)

        result = await self.service.mark_sold(mock_db_session, item.id, sold_on=date(2024, 5, 1))

        assert item.sold_on == date(2024, 5, 1)
        assert result.status == "Sold on 2024-05-01"
        mock_db_session.flush.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_mark_sold_defaults_to_today_utc(self, mock_db_session, make_item):
        item = make_item()
        mock_db_session.execute.return_value = _row_result(item)
        frozen = datetime(2025, 7, 4, 23, 59, tzinfo=timezone.utc)

        with patch("storefront.services.item_service.datetime") as mock_datetime:
            mock_datetime.now.return_value = frozen
            result = await self.service.mark_sold(mock_db_session, item.id)

        assert item.sold_on == date(2025, 7, 4)
        assert result.sold_on == date(2025, 7, 4)

    @pytest.mark.asyncio
    async def test_mark_sold_twice_rejected(self, mock_db_session, make_item):
        item = make_item(sold_on=date(2024, 1, 2))
        mock_db_session.execute.return_value = _row_result(item)

        with pytest.raises(ValidationError, match="already sold"):
            await self.service.mark_sold(mock_db_session, item.id, sold_on=date(2024, 5, 1))

        assert item.sold_on == date(2024, 1, 2)
        mock_db_session.flush.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_mark_sold_locks_the_row(self, mock_db_session, make_item):
        """Concurrent sales serialize on the row, so the second one sees sold_on set."""
        item = make_item()
        mock_db_session.execute.return_value = _row_result(item)

        await self.service.mark_sold(mock_db_session, item.id, sold_on=date(2024, 5, 1))

        sql = _compiled(mock_db_session.execute.await_args)
        assert "FOR UPDATE" in sql
        assert "items.id =" in sql

    @pytest.mark.asyncio
    async def test_get_item_does_not_lock(self, mock_db_session, make_item):
        item = make_item()
        mock_db_session.execute.return_value = _row_result(item)

        await self.service.get_item(mock_db_session, item.id)

        assert "FOR UPDATE" not in _compiled(mock_db_session.execute.await_args)

    @pytest.mark.asyncio
    async def test_mark_sold_missing_item(self, mock_db_session):
        mock_db_session.execute.return_value = _row_result(None)

        with pytest.raises(NotFoundError):
            await self.service.mark_sold(mock_db_session, uuid4())
