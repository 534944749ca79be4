"""
Storefront facade.

Wires session identity, repositories, catalog and cart synchronizer, and
performs startup in order: catalog first, then the session cart.

Usage:
    shop = await Storefront.create()
    await shop.add_to_cart(product_id)
    result = await shop.place_order("Ada", "ada@example.com", "1 Main St")
"""
from typing import List, Optional

from supabase._async.client import AsyncClient

from storefront.cart import CartListener, CartSnapshot, CartSynchronizer, CheckoutResult
from storefront.catalog import ALL_CATEGORIES, Catalog
from storefront.config import Settings, get_settings
from storefront.db import get_supabase
from storefront.errors import ERROR_CART_EMPTY, OrderError, OrderFailure
from storefront.logging import configure_logging, get_logger
from storefront.models import Product
from storefront.repositories import CartRepository, CategoryRepository, OrderRepository, ProductRepository
from storefront.session import SessionStore, create_session_store, get_or_create_session_id

logger = get_logger(__name__)


class Storefront:
    """One shopper's storefront: catalog plus session cart."""

    def __init__(self, catalog: Catalog, cart: CartSynchronizer):
        """Private constructor. Use Storefront.create() instead."""
        self.catalog = catalog
        self._cart = cart

    @classmethod
    async def create(
        cls,
        settings: Optional[Settings] = None,
        listener: Optional[CartListener] = None,
        client: Optional[AsyncClient] = None,
        session_store: Optional[SessionStore] = None,
    ) -> "Storefront":
        """Async factory: resolve the session, load the catalog, then the cart."""
        settings = settings or get_settings()
        configure_logging(settings)
        if client is None:
            client = await get_supabase(settings)
        if session_store is None:
            session_store = create_session_store(settings)

        session_id = await get_or_create_session_id(session_store)

        catalog = Catalog(ProductRepository(client), CategoryRepository(client))
        cart = CartSynchronizer(
            session_id=session_id,
            cart_repo=CartRepository(client),
            order_repo=OrderRepository(client),
            catalog=catalog,
            listener=listener,
        )

        await catalog.load()
        await cart.load()
        return cls(catalog, cart)

    @property
    def session_id(self) -> str:
        return self._cart.session_id

    @property
    def cart(self) -> CartSnapshot:
        return self._cart.snapshot()

    # ==================== CATALOG ====================

    def products(self, category: str = ALL_CATEGORIES) -> List[Product]:
        return self.catalog.filter(category)

    def category_name(self, product: Product) -> str:
        return self.catalog.category_name(product)

    # ==================== CART ====================

    async def add_to_cart(self, product_id: str) -> bool:
        return await self._cart.add_one(product_id)

    async def increase(self, cart_id: str) -> bool:
        return await self._cart.increase(cart_id)

    async def decrease(self, cart_id: str) -> bool:
        return await self._cart.decrease(cart_id)

    async def remove(self, cart_id: str) -> bool:
        return await self._cart.remove(cart_id)

    # ==================== CHECKOUT ====================

    async def place_order(self, name: str, email: str, address: str) -> CheckoutResult:
        """Submit the checkout form. Does nothing on an empty cart."""
        if self.cart.is_empty:
            logger.info(f"Checkout skipped: {ERROR_CART_EMPTY}")
            return CheckoutResult(error=OrderError(OrderFailure.EMPTY_CART))
        return await self._cart.checkout(name, email, address)
