"""Cart package: models and the cart synchronizer."""
from .models import CartLine, CartListener, CartSnapshot, CheckoutResult, NullCartListener, cart_total
from .service import CartSynchronizer

__all__ = [
    "CartLine",
    "CartListener",
    "CartSnapshot",
    "CheckoutResult",
    "CartSynchronizer",
    "NullCartListener",
    "cart_total",
]
