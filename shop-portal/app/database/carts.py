"""Cart storage for the shop portal"""

import threading
from datetime import datetime, timezone

from ..models.cart import Cart, CartItem
from ..models.product import Product


class StockExceededError(Exception):
    """Adding the requested quantity would exceed available stock"""

    def __init__(self, available: int):
        self.available = available
        super().__init__(f"Insufficient stock. Available: {available}")


class CartDatabase:
    """
    In-memory cart storage, one cart per customer.

    Every mutation runs inside a single lock so a stock check and the
    increment it guards are applied together.
    """

    def __init__(self):
        self.carts: dict[str, Cart] = {}
        self._lock = threading.Lock()

    def get_cart(self, user_id: str) -> Cart:
        """Get a copy of the customer's cart; an empty cart if none exists"""
        with self._lock:
            cart = self.carts.get(user_id)
            if not cart:
                return Cart(user_id=user_id)
            return cart.model_copy(deep=True)

    def add_item(
        self,
        user_id: str,
        product: Product,
        quantity: int = 1,
    ) -> Cart:
        """
        Atomically add quantity of a product to the customer's cart.

        Raises:
            StockExceededError: if the resulting quantity exceeds product.stock
        """
        with self._lock:
            cart = self.carts.get(user_id)
            if cart is None:
                cart = Cart(user_id=user_id)
                self.carts[user_id] = cart

            existing_item = next(
                (item for item in cart.items if item.product_id == product.id),
                None,
            )
            current = existing_item.quantity if existing_item else 0

            if current + quantity > product.stock:
                raise StockExceededError(max(product.stock - current, 0))

            if existing_item:
                existing_item.quantity += quantity
                existing_item.total_price = existing_item.unit_price * existing_item.quantity
            else:
                cart.items.append(
                    CartItem(
                        product_id=product.id,
                        product_name=product.name,
                        quantity=quantity,
                        unit_price=product.price,
                        total_price=product.price * quantity,
                    )
                )

            self._recalculate_totals(cart)
            return cart.model_copy(deep=True)

    def reset(self) -> None:
        with self._lock:
            self.carts.clear()

    def _recalculate_totals(self, cart: Cart) -> None:
        cart.item_count = sum(item.quantity for item in cart.items)
        cart.subtotal = sum(item.total_price for item in cart.items)
        cart.updated_at = datetime.now(timezone.utc)


# Singleton instance
cart_db = CartDatabase()
