"""Tests for remote store repositories"""
from decimal import Decimal
from unittest.mock import Mock

import pytest

from storefront.errors import RemoteUnavailable
from storefront.models import Order, OrderItem
from storefront.repositories import (
    CartRepository,
    CategoryRepository,
    OrderRepository,
    ProductRepository,
)


def _query(client):
    return client.table.return_value


@pytest.mark.asyncio
async def test_list_products_newest_first(mock_supabase_client, sample_product_rows):
    _query(mock_supabase_client).execute.return_value = Mock(data=sample_product_rows)

    products = await ProductRepository(mock_supabase_client).list_products()

    mock_supabase_client.table.assert_called_with("products")
    _query(mock_supabase_client).order.assert_called_once_with("created_at", desc=True)
    assert [p.id for p in products] == ["P1", "P2", "P3"]


@pytest.mark.asyncio
async def test_list_products_skips_invalid_rows(mock_supabase_client, sample_product_rows):
    rows = sample_product_rows + [{"id": "P9", "name": None, "price": -1}]
    _query(mock_supabase_client).execute.return_value = Mock(data=rows)

    products = await ProductRepository(mock_supabase_client).list_products()

    assert [p.id for p in products] == ["P1", "P2", "P3"]


@pytest.mark.asyncio
async def test_list_categories(mock_supabase_client, sample_category_rows):
    _query(mock_supabase_client).execute.return_value = Mock(data=sample_category_rows)

    categories = await CategoryRepository(mock_supabase_client).list_categories()

    mock_supabase_client.table.assert_called_with("categories")
    assert [c.name for c in categories] == ["Electronics", "Books"]


@pytest.mark.asyncio
async def test_list_categories_skips_invalid_rows(mock_supabase_client, sample_category_rows):
    rows = sample_category_rows + [{"id": "cat-9", "name": None}]
    _query(mock_supabase_client).execute.return_value = Mock(data=rows)

    categories = await CategoryRepository(mock_supabase_client).list_categories()

    assert [c.id for c in categories] == ["cat-1", "cat-2"]


class TestCartRepository:

    @pytest.mark.asyncio
    async def test_list_for_session_joins_products(self, mock_supabase_client):
        query = _query(mock_supabase_client)
        query.execute.return_value = Mock(data=[{"id": "C1"}])

        rows = await CartRepository(mock_supabase_client).list_for_session("session_1")

        mock_supabase_client.table.assert_called_with("cart_items")
        query.select.assert_called_once_with("*, products(*)")
        query.eq.assert_called_once_with("session_id", "session_1")
        assert rows == [{"id": "C1"}]

    @pytest.mark.asyncio
    async def test_list_for_session_handles_null_data(self, mock_supabase_client):
        _query(mock_supabase_client).execute.return_value = Mock(data=None)

        assert await CartRepository(mock_supabase_client).list_for_session("session_1") == []

    @pytest.mark.asyncio
    async def test_insert_returns_new_id(self, mock_supabase_client):
        query = _query(mock_supabase_client)
        query.execute.return_value = Mock(data=[{"id": 42, "quantity": 1}])

        cart_id = await CartRepository(mock_supabase_client).insert("session_1", "P1")

        query.insert.assert_called_once_with({"session_id": "session_1", "product_id": "P1", "quantity": 1})
        assert cart_id == "42"

    @pytest.mark.asyncio
    async def test_insert_without_returned_row_fails(self, mock_supabase_client):
        _query(mock_supabase_client).execute.return_value = Mock(data=[])

        with pytest.raises(RemoteUnavailable):
            await CartRepository(mock_supabase_client).insert("session_1", "P1")

    @pytest.mark.asyncio
    async def test_update_quantity(self, mock_supabase_client):
        query = _query(mock_supabase_client)

        await CartRepository(mock_supabase_client).update_quantity("C1", 3)

        query.update.assert_called_once_with({"quantity": 3})
        query.eq.assert_called_once_with("id", "C1")

    @pytest.mark.asyncio
    async def test_delete_by_id_and_by_session(self, mock_supabase_client):
        query = _query(mock_supabase_client)
        repo = CartRepository(mock_supabase_client)

        await repo.delete("C1")
        await repo.delete_for_session("session_1")

        assert query.delete.call_count == 2
        assert [c.args for c in query.eq.call_args_list] == [("id", "C1"), ("session_id", "session_1")]

    @pytest.mark.asyncio
    async def test_remote_errors_are_wrapped(self, mock_supabase_client):
        cause = ConnectionError("network down")
        _query(mock_supabase_client).execute.side_effect = cause

        with pytest.raises(RemoteUnavailable) as exc_info:
            await CartRepository(mock_supabase_client).update_quantity("C1", 2)

        assert exc_info.value.operation == "cart_items.update"
        assert exc_info.value.__cause__ is cause


class TestOrderRepository:

    @pytest.mark.asyncio
    async def test_create(self, mock_supabase_client):
        query = _query(mock_supabase_client)
        query.execute.return_value = Mock(data=[{
            "id": 9,
            "session_id": "session_1",
            "customer_name": "Ada",
            "customer_email": "ada@example.com",
            "customer_address": "1 Main St",
            "total_amount": 19.98,
            "status": "pending",
        }])

        order = await OrderRepository(mock_supabase_client).create(
            session_id="session_1",
            customer_name="Ada",
            customer_email="ada@example.com",
            customer_address="1 Main St",
            total_amount=Decimal("19.98"),
        )

        mock_supabase_client.table.assert_called_with("orders")
        query.insert.assert_called_once_with({
            "session_id": "session_1",
            "customer_name": "Ada",
            "customer_email": "ada@example.com",
            "customer_address": "1 Main St",
            "total_amount": 19.98,
            "status": "pending",
        })
        assert isinstance(order, Order)
        assert order.id == "9"
        assert order.total_amount == Decimal("19.98")

    @pytest.mark.asyncio
    async def test_create_with_malformed_row_fails(self, mock_supabase_client):
        _query(mock_supabase_client).execute.return_value = Mock(data=[{"id": "order-9"}])

        with pytest.raises(RemoteUnavailable) as exc_info:
            await OrderRepository(mock_supabase_client).create(
                session_id="session_1",
                customer_name="Ada",
                customer_email="ada@example.com",
                customer_address="1 Main St",
                total_amount=Decimal("19.98"),
            )

        assert exc_info.value.operation == "orders.insert"

    @pytest.mark.asyncio
    async def test_add_items_is_one_bulk_insert(self, mock_supabase_client):
        query = _query(mock_supabase_client)
        items = [
            OrderItem(order_id="order-9", product_id="P1", quantity=2, price="9.99"),
            OrderItem(order_id="order-9", product_id="P2", quantity=1, price="15.50"),
        ]

        await OrderRepository(mock_supabase_client).add_items("order-9", items)

        mock_supabase_client.table.assert_called_with("order_items")
        query.insert.assert_called_once_with([
            {"order_id": "order-9", "product_id": "P1", "quantity": 2, "price": 9.99},
            {"order_id": "order-9", "product_id": "P2", "quantity": 1, "price": 15.5},
        ])
        query.execute.assert_awaited_once()
