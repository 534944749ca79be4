"""Order Repository - orders and order_items inserts."""
from decimal import Decimal
from typing import List

from pydantic import ValidationError

from storefront.db import Tables
from storefront.errors import RemoteUnavailable
from storefront.models import Order, OrderItem
from storefront.money import to_float
from .base import BaseRepository


class OrderRepository(BaseRepository):
    """Order database operations."""

    async def create(
        self,
        session_id: str,
        customer_name: str,
        customer_email: str,
        customer_address: str,
        total_amount: Decimal,
        status: str = "pending",
    ) -> Order:
        """Create the order header row."""
        data = {
            "session_id": session_id,
            "customer_name": customer_name,
            "customer_email": customer_email,
            "customer_address": customer_address,
            "total_amount": to_float(total_amount),
            "status": status,
        }
        result = await self._execute(self.client.table(Tables.ORDERS).insert(data), "orders.insert")
        if not result.data:
            raise RemoteUnavailable("orders.insert", "no row returned")
        try:
            return Order(**result.data[0])
        except ValidationError as e:
            raise RemoteUnavailable("orders.insert", "invalid order row returned") from e

    async def add_items(self, order_id: str, items: List[OrderItem]) -> None:
        """Bulk insert order lines in one request."""
        rows = [
            {
                "order_id": order_id,
                "product_id": item.product_id,
                "quantity": item.quantity,
                "price": to_float(item.price),
            }
            for item in items
        ]
        await self._execute(self.client.table(Tables.ORDER_ITEMS).insert(rows), "order_items.insert")
