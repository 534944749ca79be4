"""Cart synchronizer: keeps the local cart in step with the remote cart_items rows."""
import asyncio
from typing import List, Optional, Tuple

from pydantic import ValidationError

from storefront.catalog import Catalog
from storefront.errors import (
    ERROR_CART_ADD_FAILED,
    ERROR_CART_EMPTY,
    ERROR_CART_ITEM_NOT_FOUND,
    ERROR_CART_LOAD_FAILED,
    ERROR_CART_REMOVE_FAILED,
    ERROR_CART_UPDATE_FAILED,
    ERROR_ORDER_FAILED,
    ERROR_PRODUCT_NOT_FOUND,
    NotFound,
    OrderError,
    OrderFailure,
    RemoteUnavailable,
)
from storefront.logging import get_logger, for_log
from storefront.models import OrderItem, Product
from storefront.repositories import CartRepository, OrderRepository
from .models import CartLine, CartListener, CartSnapshot, CheckoutResult, NullCartListener, cart_total

logger = get_logger(__name__)


class CartSynchronizer:
    """
    Owns the in-memory cart of one session.

    Rules:
    - Every mutation is applied locally only after the remote call succeeded.
      A failed remote call leaves the local cart exactly as it was.
    - At most one line per product; no line with quantity <= 0.
    - Each successful operation fires exactly one ``on_cart_changed``;
      a failed one fires ``on_error`` instead.
    - Public operations run one at a time under a cart-wide lock. Quantities
      are read after the lock is taken, so rapid repeated clicks are applied
      in order instead of overwriting each other.
    """

    def __init__(
        self,
        session_id: str,
        cart_repo: CartRepository,
        order_repo: OrderRepository,
        catalog: Catalog,
        listener: Optional[CartListener] = None,
    ):
        self._session_id = session_id
        self._cart_repo = cart_repo
        self._order_repo = order_repo
        self._catalog = catalog
        self._listener = listener or NullCartListener()
        self._lines: List[CartLine] = []
        self._lock = asyncio.Lock()

    @property
    def session_id(self) -> str:
        return self._session_id

    @property
    def lines(self) -> Tuple[CartLine, ...]:
        return tuple(line.copy() for line in self._lines)

    def snapshot(self) -> CartSnapshot:
        return CartSnapshot(lines=self.lines)

    @property
    def total(self):
        return cart_total(self._lines)

    def _find_by_cart_id(self, cart_id: str) -> Optional[CartLine]:
        return next((line for line in self._lines if line.cart_id == cart_id), None)

    def _find_by_product_id(self, product_id: str) -> Optional[CartLine]:
        return next((line for line in self._lines if line.product_id == product_id), None)

    def _require_line(self, cart_id: str) -> CartLine:
        line = self._find_by_cart_id(cart_id)
        if line is None:
            raise NotFound(f"{ERROR_CART_ITEM_NOT_FOUND} {for_log(cart_id)}")
        return line

    def _notify_changed(self) -> None:
        snapshot = self.snapshot()
        self._listener.on_cart_changed(snapshot.lines, snapshot.total)

    def _fail(self, operation: str, message: str, error: Exception) -> None:
        logger.error(f"Error in {operation}: {error}")
        self._listener.on_error(operation, message)

    # ==================== LOAD ====================

    async def load(self) -> bool:
        """Replace the local cart with the session's remote rows.

        Best effort: on failure the cart is left as it was and the error is
        only logged.
        """
        async with self._lock:
            try:
                rows = await self._cart_repo.list_for_session(self._session_id)
            except RemoteUnavailable as e:
                logger.error(f"{ERROR_CART_LOAD_FAILED}: {e}")
                return False

            self._lines = self._lines_from_rows(rows)
            logger.info(
                f"Loaded {len(self._lines)} cart lines for session "
                f"{for_log(self._session_id)}"
            )
            self._notify_changed()
            return True

    @staticmethod
    def _lines_from_rows(rows: list) -> List[CartLine]:
        lines: List[CartLine] = []
        seen_products = set()
        for row in rows:
            cart_id = str(row.get("id"))
            product_data = row.get("products")
            quantity = row.get("quantity") or 0
            if not product_data:
                logger.warning(f"Skipping cart row {for_log(cart_id)}: product missing")
                continue
            if quantity <= 0:
                logger.warning(f"Skipping cart row {for_log(cart_id)}: quantity {quantity}")
                continue
            try:
                product = Product(**product_data)
            except ValidationError as e:
                logger.warning(f"Skipping cart row {for_log(cart_id)}: invalid product ({e.error_count()} errors)")
                continue
            if product.id in seen_products:
                # Two tabs can both insert a first row for the same product
                logger.warning(
                    f"Duplicate cart row {for_log(cart_id)} for product "
                    f"{for_log(product.id)}; keeping the first"
                )
                continue
            seen_products.add(product.id)
            lines.append(CartLine(cart_id=cart_id, product=product, quantity=int(quantity)))
        return lines

    # ==================== LINE OPERATIONS ====================

    async def add_one(self, product_id: str) -> bool:
        """Add one unit of a catalog product, creating its line if needed."""
        async with self._lock:
            product = self._catalog.get(product_id)
            if product is None:
                logger.warning(f"add_one: {ERROR_PRODUCT_NOT_FOUND} {for_log(product_id)}")
                return False

            existing = self._find_by_product_id(product_id)
            try:
                if existing:
                    new_quantity = existing.quantity + 1
                    await self._cart_repo.update_quantity(existing.cart_id, new_quantity)
                else:
                    cart_id = await self._cart_repo.insert(self._session_id, product_id, 1)
            except RemoteUnavailable as e:
                self._fail("add_one", ERROR_CART_ADD_FAILED, e)
                return False

            if existing:
                existing.quantity = new_quantity
                line = existing
            else:
                line = CartLine(cart_id=cart_id, product=product, quantity=1)
                self._lines.append(line)

            self._notify_changed()
            self._listener.on_item_added(line.copy())
            return True

    async def set_quantity(self, cart_id: str, quantity: int) -> bool:
        """Set a line's quantity; zero or less removes the line."""
        async with self._lock:
            try:
                line = self._require_line(cart_id)
            except NotFound as e:
                logger.warning(f"set_quantity: {e}")
                return False
            return await self._set_quantity(line, quantity)

    async def increase(self, cart_id: str) -> bool:
        async with self._lock:
            try:
                line = self._require_line(cart_id)
            except NotFound as e:
                logger.warning(f"increase: {e}")
                return False
            return await self._set_quantity(line, line.quantity + 1)

    async def decrease(self, cart_id: str) -> bool:
        async with self._lock:
            try:
                line = self._require_line(cart_id)
            except NotFound as e:
                logger.warning(f"decrease: {e}")
                return False
            return await self._set_quantity(line, line.quantity - 1)

    async def remove(self, cart_id: str) -> bool:
        """Delete a line remotely, then drop it locally."""
        async with self._lock:
            try:
                line = self._require_line(cart_id)
            except NotFound as e:
                logger.warning(f"remove: {e}")
                return False
            return await self._remove(line)

    async def _set_quantity(self, line: CartLine, quantity: int) -> bool:
        if quantity <= 0:
            return await self._remove(line)

        try:
            await self._cart_repo.update_quantity(line.cart_id, quantity)
        except RemoteUnavailable as e:
            self._fail("set_quantity", ERROR_CART_UPDATE_FAILED, e)
            return False

        line.quantity = quantity
        self._notify_changed()
        return True

    async def _remove(self, line: CartLine) -> bool:
        try:
            await self._cart_repo.delete(line.cart_id)
        except RemoteUnavailable as e:
            self._fail("remove", ERROR_CART_REMOVE_FAILED, e)
            return False

        self._lines = [other for other in self._lines if other.cart_id != line.cart_id]
        self._notify_changed()
        return True

    # ==================== CHECKOUT ====================

    async def checkout(
        self,
        customer_name: str,
        customer_email: str,
        customer_address: str,
    ) -> CheckoutResult:
        """
        Place an order from the current cart.

        1. Insert the order row (failure: CREATE_FAILED, cart untouched).
        2. Bulk insert one order item per line with the current unit price
           (failure: ITEMS_FAILED, cart untouched; the order row stays
           behind without items and is not rolled back).
        3. Delete the session's cart rows. A failure here is only logged;
           the order counts as placed and the local cart is cleared anyway.
        """
        async with self._lock:
            if not self._lines:
                self._listener.on_error("checkout", ERROR_CART_EMPTY)
                return CheckoutResult(error=OrderError(OrderFailure.EMPTY_CART))

            lines = [line.copy() for line in self._lines]
            total = cart_total(lines)

            try:
                order = await self._order_repo.create(
                    session_id=self._session_id,
                    customer_name=customer_name,
                    customer_email=customer_email,
                    customer_address=customer_address,
                    total_amount=total,
                )
            except RemoteUnavailable as e:
                self._fail("checkout", ERROR_ORDER_FAILED, e)
                return CheckoutResult(error=OrderError(OrderFailure.CREATE_FAILED))

            order_id = order.id

            items = [
                OrderItem(
                    order_id=order_id,
                    product_id=line.product_id,
                    quantity=line.quantity,
                    price=line.product.price,
                )
                for line in lines
            ]
            try:
                await self._order_repo.add_items(order_id, items)
            except RemoteUnavailable as e:
                logger.error(f"Order {for_log(order_id)} persisted without items")
                self._fail("checkout", ERROR_ORDER_FAILED, e)
                return CheckoutResult(error=OrderError(OrderFailure.ITEMS_FAILED, order_id=order_id))

            try:
                await self._cart_repo.delete_for_session(self._session_id)
            except RemoteUnavailable as e:
                logger.error(f"Error clearing cart after order {for_log(order_id)}: {e}")

            self._lines = []
            logger.info(
                f"Order {for_log(order_id)} placed by "
                f"{for_log(customer_email)}: {len(items)} items, total {total}"
            )
            self._notify_changed()
            return CheckoutResult(order_id=order_id)
