"""
Cart-state capability used by the checkout flow.

The checkout only reads the cart (items, details, count) and clears it once
after a purchase. ``InMemoryCart`` is the local implementation; it notifies
subscribers on every change so the cart summary can recompute its total.
"""
from abc import ABC, abstractmethod
from typing import Callable, Dict, List
import logging

from ..models import CartEntry, Product

logger = logging.getLogger("storefront.cart")

CartListener = Callable[["CartStore"], None]


class CartStore(ABC):

    @property
    @abstractmethod
    def cart_items(self) -> List[CartEntry]:
        ...

    @property
    @abstractmethod
    def cart_details(self) -> Dict[str, CartEntry]:
        ...

    @property
    @abstractmethod
    def cart_count(self) -> int:
        ...

    @abstractmethod
    def clear_cart(self) -> None:
        ...

    @abstractmethod
    def subscribe(self, listener: CartListener) -> Callable[[], None]:
        """Register ``listener`` for cart changes; returns an unsubscribe callable."""


class InMemoryCart(CartStore):

    def __init__(self):
        self._details: Dict[str, CartEntry] = {}
        self._listeners: List[CartListener] = []

    @property
    def cart_items(self) -> List[CartEntry]:
        return list(self._details.values())

    @property
    def cart_details(self) -> Dict[str, CartEntry]:
        return dict(self._details)

    @property
    def cart_count(self) -> int:
        return sum(e.quantity for e in self._details.values())

    def add_item(self, product: Product, quantity: int = 1) -> None:
        current = self._details.get(product.id)
        if current is not None:
            quantity += current.quantity
        self._details[product.id] = CartEntry(
            id=product.id,
            name=product.name,
            price=product.price,
            currency=product.currency,
            quantity=quantity,
            image=product.image,
            sku=product.sku,
        )
        self._notify()

    def set_item_quantity(self, item_id: str, quantity: int) -> None:
        if quantity <= 0:
            self.remove_item(item_id)
            return
        entry = self._details[item_id]
        self._details[item_id] = entry.model_copy(update={"quantity": quantity})
        self._notify()

    def remove_item(self, item_id: str) -> None:
        if self._details.pop(item_id, None) is not None:
            self._notify()

    def clear_cart(self) -> None:
        self._details.clear()
        logger.info("Cart cleared")
        self._notify()

    def subscribe(self, listener: CartListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)
