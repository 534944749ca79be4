"""
Storefront errors.

Message constants shown to the shopper plus the exception taxonomy used
between the repositories and the cart synchronizer.
"""
from enum import Enum

# Cart errors
ERROR_CART_LOAD_FAILED = "Could not load your cart"
ERROR_CART_ADD_FAILED = "Could not add the product to your cart"
ERROR_CART_UPDATE_FAILED = "Could not update the quantity"
ERROR_CART_REMOVE_FAILED = "Could not remove the item from your cart"
ERROR_CART_ITEM_NOT_FOUND = "Cart item not found"

# Catalog errors
ERROR_PRODUCT_NOT_FOUND = "Product not found"

# Order errors
ERROR_ORDER_FAILED = "Failed to place order. Please try again."
ERROR_CART_EMPTY = "Your cart is empty"


class StorefrontError(Exception):
    """Base class for storefront errors."""


class ConfigError(StorefrontError, ValueError):
    """Required configuration is missing or invalid."""


class RemoteUnavailable(StorefrontError):
    """The remote store could not complete an operation."""

    def __init__(self, operation: str, message: str = "remote store unavailable"):
        super().__init__(f"{operation}: {message}")
        self.operation = operation


class NotFound(StorefrontError):
    """An operation referenced a cart line or product that is not loaded."""


class OrderFailure(Enum):
    CREATE_FAILED = "create_failed"
    ITEMS_FAILED = "items_failed"
    EMPTY_CART = "empty_cart"


class OrderError(StorefrontError):
    """Checkout did not complete."""

    def __init__(self, reason: OrderFailure, order_id: str | None = None):
        super().__init__(ERROR_ORDER_FAILED if reason != OrderFailure.EMPTY_CART else ERROR_CART_EMPTY)
        self.reason = reason
        # Set for ITEMS_FAILED: the order row exists without line items
        self.order_id = order_id
