"""
Repository Pattern for remote store access

- ProductRepository / CategoryRepository: catalog reads
- CartRepository: cart_items rows for a session
- OrderRepository: orders and order_items inserts
"""
from .base import BaseRepository
from .cart_repo import CartRepository
from .order_repo import OrderRepository
from .product_repo import CategoryRepository, ProductRepository

__all__ = [
    "BaseRepository",
    "CartRepository",
    "CategoryRepository",
    "OrderRepository",
    "ProductRepository",
]
