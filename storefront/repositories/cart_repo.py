"""Cart Repository - cart_items rows for a session."""
from typing import Any, Dict, List

from storefront.db import Tables
from storefront.errors import RemoteUnavailable
from .base import BaseRepository


class CartRepository(BaseRepository):
    """cart_items database operations."""

    async def list_for_session(self, session_id: str) -> List[Dict[str, Any]]:
        """Get cart rows for a session joined with their product."""
        result = await self._execute(
            self.client.table(Tables.CART_ITEMS).select("*, products(*)").eq("session_id", session_id),
            "cart_items.select",
        )
        return result.data or []

    async def insert(self, session_id: str, product_id: str, quantity: int = 1) -> str:
        """Insert a cart row and return its id."""
        result = await self._execute(
            self.client.table(Tables.CART_ITEMS).insert({
                "session_id": session_id,
                "product_id": product_id,
                "quantity": quantity,
            }),
            "cart_items.insert",
        )
        if not result.data:
            raise RemoteUnavailable("cart_items.insert", "no row returned")
        return str(result.data[0]["id"])

    async def update_quantity(self, cart_id: str, quantity: int) -> None:
        await self._execute(
            self.client.table(Tables.CART_ITEMS).update({"quantity": quantity}).eq("id", cart_id),
            "cart_items.update",
        )

    async def delete(self, cart_id: str) -> None:
        await self._execute(
            self.client.table(Tables.CART_ITEMS).delete().eq("id", cart_id),
            "cart_items.delete",
        )

    async def delete_for_session(self, session_id: str) -> None:
        """Delete every cart row of a session."""
        await self._execute(
            self.client.table(Tables.CART_ITEMS).delete().eq("session_id", session_id),
            "cart_items.delete_session",
        )
