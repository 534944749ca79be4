"""Cart models with Decimal-based pricing."""
from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Iterable, Optional, Protocol, Tuple

from storefront.errors import OrderError
from storefront.models import Product
from storefront.money import multiply


@dataclass
class CartLine:
    """One persisted product-quantity pairing of the session cart."""
    cart_id: str
    product: Product
    quantity: int

    @property
    def product_id(self) -> str:
        return self.product.id

    @property
    def line_total(self) -> Decimal:
        """Unit price times quantity, unrounded."""
        return multiply(self.product.price, self.quantity)

    def copy(self) -> "CartLine":
        return replace(self)


def cart_total(lines: Iterable[CartLine]) -> Decimal:
    """Sum of price * quantity, recomputed from scratch."""
    return sum((line.line_total for line in lines), Decimal("0"))


@dataclass(frozen=True)
class CartSnapshot:
    """Immutable view of the cart handed to the presentation layer."""
    lines: Tuple[CartLine, ...]

    @property
    def total(self) -> Decimal:
        return cart_total(self.lines)

    @property
    def item_count(self) -> int:
        """Badge count: total units across all lines."""
        return sum(line.quantity for line in self.lines)

    @property
    def is_empty(self) -> bool:
        return not self.lines


@dataclass(frozen=True)
class CheckoutResult:
    """Either an order id or the reason checkout stopped."""
    order_id: Optional[str] = None
    error: Optional[OrderError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class CartListener(Protocol):
    """Callbacks the presentation layer registers with the synchronizer."""

    def on_cart_changed(self, lines: Tuple[CartLine, ...], total: Decimal) -> None: ...

    def on_error(self, operation: str, message: str) -> None: ...

    def on_item_added(self, line: CartLine) -> None: ...


class NullCartListener:
    """Listener used when nothing is rendering the cart."""

    def on_cart_changed(self, lines, total) -> None:
        pass

    def on_error(self, operation, message) -> None:
        pass

    def on_item_added(self, line) -> None:
        pass
