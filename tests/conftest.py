"""
Pytest configuration and fixtures for the storefront checkout tests.
"""
from __future__ import annotations

from typing import Any, Callable, List, Optional

import httpx
import pytest

from storefront.checkout.cart import InMemoryCart
from storefront.checkout.pages import build_router
from storefront.checkout.provider import (
    PaymentMethodEvent,
    PaymentProvider,
    PaymentRequest,
)
from storefront.checkout.summary import CartSummary
from storefront.models import (
    ConfirmResult,
    PaymentIntent,
    PaymentMethod,
    PaymentRequestShippingAddress,
    Product,
)


class FakePaymentRequest(PaymentRequest):
    """In-memory payment sheet that records every call made on it."""

    def __init__(self, options, available: bool = True):
        self.options = options
        self.available = available
        self.updates: list = []
        self.listeners: dict[str, list] = {}
        self.calls: list[str] = []
        self.max_listeners = 0

    async def can_make_payment(self) -> bool:
        self.calls.append("can_make_payment")
        return self.available

    def update(self, options) -> None:
        self.calls.append("update")
        self.updates.append(options)

    def on(self, event, handler) -> None:
        self.calls.append("on")
        self.listeners.setdefault(event, []).append(handler)
        self.max_listeners = max(self.max_listeners, len(self.listeners[event]))

    def off(self, event, handler=None) -> None:
        self.calls.append("off")
        if handler is None:
            self.listeners.pop(event, None)
        elif handler in self.listeners.get(event, []):
            self.listeners[event].remove(handler)

    def listener_count(self, event: str = "paymentmethod") -> int:
        return len(self.listeners.get(event, []))

    async def emit(self, event: PaymentMethodEvent) -> None:
        for handler in list(self.listeners.get("paymentmethod", [])):
            await handler(event)


class FakeProvider(PaymentProvider):

    def __init__(self, available: bool = True):
        self.available = available
        self.requests: List[FakePaymentRequest] = []
        self.confirm_calls: list[tuple] = []
        self.confirm_results: list[ConfirmResult] = []

    def payment_request(self, options) -> FakePaymentRequest:
        request = FakePaymentRequest(options, available=self.available)
        self.requests.append(request)
        return request

    async def confirm_card_payment(self, client_secret, data=None, options=None) -> ConfirmResult:
        self.confirm_calls.append((client_secret, data, options))
        if self.confirm_results:
            return self.confirm_results.pop(0)
        return ConfirmResult(payment_intent=PaymentIntent(id="pi_test", status="succeeded"))


class RecordingTransport:
    """httpx handler returning queued responses and recording requests."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.responses: list[Any] = []
        self.observer: Optional[Callable[[httpx.Request], None]] = None

    def queue(self, response: Any) -> None:
        self.responses.append(response)

    def queue_secret(self, secret: str) -> None:
        self.queue(httpx.Response(200, json={"clientSecret": secret}))

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.observer is not None:
            self.observer(request)
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def products():
    return [
        Product(id="sku_straw", name="Strawberries", price=500),
        Product(id="sku_blue", name="Blueberries", price=1200),
    ]


@pytest.fixture
def cart(products):
    cart = InMemoryCart()
    for product in products:
        cart.add_item(product)
    return cart


@pytest.fixture
def summary(cart):
    return CartSummary(cart)


@pytest.fixture
def router(cart):
    return build_router(cart)


@pytest.fixture
def provider():
    return FakeProvider()


@pytest.fixture
def unavailable_provider():
    return FakeProvider(available=False)


@pytest.fixture
def transport():
    return RecordingTransport()


@pytest.fixture
async def http(transport):
    async with httpx.AsyncClient(
        transport=httpx.MockTransport(transport),
        base_url="http://testserver",
    ) as client:
        yield client


@pytest.fixture
def alerts():
    return []


@pytest.fixture
def make_event() -> Callable[..., PaymentMethodEvent]:
    def _make(payment_method_id: str = "pm_card_visa", **shipping: Optional[str]) -> PaymentMethodEvent:
        address = {
            "recipient": "Jenny Rosen",
            "phone": "+15555550100",
            "address_line": ["510 Townsend St"],
            "city": "San Francisco",
            "postal_code": "94103",
            "region": "CA",
            "country": "US",
        }
        address.update(shipping)
        return PaymentMethodEvent(
            payment_method=PaymentMethod(id=payment_method_id),
            shipping_address=PaymentRequestShippingAddress(**address),
            payer_name="Jenny Rosen",
            payer_email="jenny@example.com",
        )

    return _make
