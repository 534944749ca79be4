"""Text presentation of the catalog and the cart.

Keeps no reference to the synchronizer: it only reacts to the callbacks
it is registered for and renders plain text.
"""
from decimal import Decimal
from typing import List, Tuple

from storefront.cart import CartLine
from storefront.catalog import ALL_CATEGORIES, Catalog
from storefront.logging import get_logger
from storefront.money import format_money

logger = get_logger(__name__)

EMPTY_CART_TEXT = "Your cart is empty"
NO_PRODUCTS_TEXT = "No products found"


class TextCartPresenter:
    """CartListener that keeps a rendered text view of the cart."""

    def __init__(self):
        self.lines: Tuple[CartLine, ...] = ()
        self.total: Decimal = Decimal("0")
        self.badge_count = 0
        self.refresh_count = 0
        self.pulses = 0
        self.errors: List[Tuple[str, str]] = []

    def on_cart_changed(self, lines: Tuple[CartLine, ...], total: Decimal) -> None:
        self.lines = lines
        self.total = total
        self.badge_count = sum(line.quantity for line in lines)
        self.refresh_count += 1

    def on_error(self, operation: str, message: str) -> None:
        logger.debug(f"Presenting error for {operation}: {message}")
        self.errors.append((operation, message))

    def on_item_added(self, line: CartLine) -> None:
        self.pulses += 1

    @property
    def total_text(self) -> str:
        return format_money(self.total if self.lines else 0)

    @property
    def last_error(self) -> str | None:
        return self.errors[-1][1] if self.errors else None

    @property
    def lines_text(self) -> str:
        """One row per cart line, or the empty-cart message."""
        if not self.lines:
            return EMPTY_CART_TEXT
        return "\n".join(
            f"{line.product.name}  {format_money(line.product.price)} x {line.quantity}  [{line.cart_id}]"
            for line in self.lines
        )

    def render_cart(self) -> str:
        if not self.lines:
            return f"{self.lines_text}\nTotal: {format_money(0)}"
        return f"{self.lines_text}\nItems: {self.badge_count}  Total: {self.total_text}"

    @staticmethod
    def render_products(catalog: Catalog, category: str = ALL_CATEGORIES) -> str:
        products = catalog.filter(category)
        if not products:
            return NO_PRODUCTS_TEXT

        cards = []
        for product in products:
            cards.append(
                f"[{catalog.category_name(product)}] {product.name}  {format_money(product.price)}  ({product.id})\n"
                f"    {product.description}"
            )
        return "\n".join(cards)
