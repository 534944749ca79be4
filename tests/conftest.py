"""Pytest configuration and fixtures"""
import os
from unittest.mock import AsyncMock, Mock

import pytest

# Set test environment variables
os.environ.setdefault("SUPABASE_URL", "https://test.supabase.co")
os.environ.setdefault("SUPABASE_KEY", "test_key")

from storefront.cart import CartSynchronizer
from storefront.catalog import Catalog
from storefront.models import Category, Order, Product
from storefront.presenter import TextCartPresenter
from storefront.repositories import CartRepository, CategoryRepository, OrderRepository, ProductRepository

SESSION_ID = "session_1761712758000_abc123xyz"


@pytest.fixture
def mock_supabase_client():
    """Mock async Supabase client.

    Every builder method returns the same query mock; ``execute`` is awaited.
    """
    client = Mock()

    query = Mock()
    for method in ("select", "insert", "update", "delete", "eq", "order", "limit"):
        getattr(query, method).return_value = query
    query.execute = AsyncMock(return_value=Mock(data=[]))

    client.table.return_value = query
    return client


@pytest.fixture
def sample_category_rows():
    return [
        {"id": "cat-1", "name": "Electronics"},
        {"id": "cat-2", "name": "Books"},
    ]


@pytest.fixture
def sample_product_rows():
    """Products as PostgREST returns them, newest first."""
    return [
        {
            "id": "P1",
            "name": "Headphones",
            "description": "Wireless over-ear",
            "price": 9.99,
            "image_url": "https://img.test/p1.png",
            "category_id": "cat-1",
            "created_at": "2025-01-03T00:00:00Z",
        },
        {
            "id": "P2",
            "name": "Novel",
            "description": "Paperback",
            "price": "15.50",
            "image_url": "https://img.test/p2.png",
            "category_id": "cat-2",
            "created_at": "2025-01-02T00:00:00Z",
        },
        {
            "id": "P3",
            "name": "Mystery Box",
            "description": None,
            "price": 0,
            "image_url": None,
            "category_id": None,
            "created_at": "2025-01-01T00:00:00Z",
        },
    ]


@pytest.fixture
def sample_products(sample_product_rows):
    return [Product(**row) for row in sample_product_rows]


@pytest.fixture
async def catalog(sample_products, sample_category_rows):
    """Catalog loaded from mocked repositories."""
    products_repo = AsyncMock(spec=ProductRepository)
    products_repo.list_products.return_value = sample_products
    categories_repo = AsyncMock(spec=CategoryRepository)
    categories_repo.list_categories.return_value = [Category(**c) for c in sample_category_rows]

    catalog = Catalog(products_repo, categories_repo)
    await catalog.load()
    return catalog


@pytest.fixture
def cart_repo():
    repo = AsyncMock(spec=CartRepository)
    repo.list_for_session.return_value = []
    return repo


@pytest.fixture
def order_repo():
    repo = AsyncMock(spec=OrderRepository)
    repo.create.return_value = Order(
        id="order-1",
        session_id=SESSION_ID,
        customer_name="Ada",
        customer_email="ada@example.com",
        customer_address="1 Main St",
        total_amount="19.98",
    )
    return repo


@pytest.fixture
def presenter():
    return TextCartPresenter()


@pytest.fixture
def synchronizer(catalog, cart_repo, order_repo, presenter):
    return CartSynchronizer(
        session_id=SESSION_ID,
        cart_repo=cart_repo,
        order_repo=order_repo,
        catalog=catalog,
        listener=presenter,
    )


@pytest.fixture
def make_cart_row():
    """Build a cart_items row joined with its product."""
    def _make(cart_id: str, product_row: dict, quantity: int) -> dict:
        return {
            "id": cart_id,
            "session_id": SESSION_ID,
            "product_id": product_row["id"],
            "quantity": quantity,
            "products": product_row,
        }
    return _make


@pytest.fixture
def session_id():
    return SESSION_ID
