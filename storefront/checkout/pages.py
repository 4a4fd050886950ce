from typing import Dict, List, Optional, Protocol
import logging

from ..config import SUCCESS_PATH
from .cart import CartStore

logger = logging.getLogger("storefront.pages")


class Page(Protocol):
    def render(self) -> str:
        ...


class SuccessPage:
    """Post-purchase page. The cart is cleared on the first render only."""

    message = "Thanks for your purchase ❤️"

    def __init__(self, cart: CartStore):
        self.cart = cart
        self._cleared = False

    def render(self) -> str:
        if not self._cleared:
            self._cleared = True
            self.cart.clear_cart()
        return f"<main><h1>{self.message}</h1></main>"


class Router:
    """Client-side routing: ``push`` records the path and renders its page."""

    def __init__(self, routes: Optional[Dict[str, Page]] = None):
        self.routes: Dict[str, Page] = dict(routes or {})
        self.history: List[str] = []

    @property
    def location(self) -> Optional[str]:
        return self.history[-1] if self.history else None

    def register(self, path: str, page: Page) -> None:
        self.routes[path] = page

    def push(self, path: str) -> Optional[str]:
        self.history.append(path)
        logger.info("Navigating to %s", path)
        page = self.routes.get(path)
        if page is None:
            return None
        return page.render()


def build_router(cart: CartStore) -> Router:
    return Router({SUCCESS_PATH: SuccessPage(cart)})
