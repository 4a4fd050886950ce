from typing import Callable, Dict, Iterable, List
import logging

from ..config import BASE_AMOUNT_MINOR
from ..models import CartEntry
from .cart import CartStore

logger = logging.getLogger("storefront.summary")


def compute_total(items: Iterable[CartEntry], base_amount: int = BASE_AMOUNT_MINOR) -> int:
    # Unit prices only; quantities are settled by the payment-intent endpoint.
    return sum((item.price for item in items), base_amount)


class CartSummary:
    """Read-only view of the cart that recomputes the total on every change."""

    def __init__(self, cart: CartStore, base_amount: int = BASE_AMOUNT_MINOR):
        self.cart = cart
        self.base_amount = base_amount
        self.total = compute_total(cart.cart_items, base_amount)
        self._listeners: List[Callable[["CartSummary"], None]] = []
        self._unsubscribe = cart.subscribe(self._on_cart_changed)

    @property
    def cart_items(self) -> List[CartEntry]:
        return self.cart.cart_items

    @property
    def cart_details(self) -> Dict[str, CartEntry]:
        return self.cart.cart_details

    @property
    def cart_count(self) -> int:
        return self.cart.cart_count

    def subscribe(self, listener: Callable[["CartSummary"], None]) -> None:
        self._listeners.append(listener)

    def close(self) -> None:
        self._unsubscribe()
        self._listeners.clear()

    def _on_cart_changed(self, cart: CartStore) -> None:
        self.total = compute_total(cart.cart_items, self.base_amount)
        logger.debug("Cart total is now %s (count=%s)", self.total, cart.cart_count)
        for listener in list(self._listeners):
            listener(self)
