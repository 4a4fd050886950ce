"""
Payment-request checkout controller.

Drives the handshake between the browser payment sheet, the payment-intent
endpoint and the payment provider:

    idle -> handle_ready -> secret_requested -> method_received
         -> confirming -> navigated | handle_ready (on failure)

A failed confirmation is reported to the payment sheet and the flow returns
to handle_ready, keeping the handle and client secret so the user can retry
from the button. The provider error is kept in ``last_error``.
"""
from enum import Enum
from typing import Callable, Optional
import logging

import httpx

from ..config import PAYMENT_INTENT_PATH, SUCCESS_PATH
from ..models import (
    PaymentError,
    PaymentIntentCreated,
    PaymentItem,
    PaymentRequestOptions,
    PaymentRequestUpdate,
    ShippingDetails,
)
from .handle import OwnedPaymentRequest
from .cart import CartStore
from .pages import Router, build_router
from .provider import PaymentMethodEvent, PaymentProvider
from .summary import CartSummary

logger = logging.getLogger("storefront.checkout")


class CheckoutState(str, Enum):
    IDLE = "idle"
    HANDLE_READY = "handle_ready"
    SECRET_REQUESTED = "secret_requested"
    METHOD_RECEIVED = "method_received"
    CONFIRMING = "confirming"
    NAVIGATED = "navigated"


class ClickEvent:
    """The payment button's click; ``prevent_default`` keeps the sheet closed."""

    def __init__(self):
        self.default_prevented = False

    def prevent_default(self) -> None:
        self.default_prevented = True


def _log_alert(message: str) -> None:
    logger.warning("ALERT: %s", message)


class PaymentHandshakeController:

    def __init__(
        self,
        summary: CartSummary,
        router: Router,
        http: httpx.AsyncClient,
        provider: Optional[PaymentProvider] = None,
        alert: Callable[[str], None] = _log_alert,
        intent_url: str = PAYMENT_INTENT_PATH,
        success_path: str = SUCCESS_PATH,
    ):
        self.summary = summary
        self.router = router
        self.http = http
        self.provider = provider
        self.alert = alert
        self.intent_url = intent_url
        self.success_path = success_path

        self.payment_request: Optional[OwnedPaymentRequest] = None
        self.client_secret: Optional[str] = None
        self.state = CheckoutState.IDLE
        self.last_error: Optional[PaymentError] = None
        self._initializing = False

        summary.subscribe(lambda _: self.update_handle())

    @property
    def button_visible(self) -> bool:
        return self.payment_request is not None

    # --- payment request handle ---

    async def initialize(self, provider: Optional[PaymentProvider] = None) -> bool:
        """Create the payment request once the provider is ready.

        Returns True when a handle is published. An unsupported browser is not
        an error: the button simply stays hidden.
        """
        if provider is not None:
            self.provider = provider
        if self.provider is None or self.payment_request is not None or self._initializing:
            return self.payment_request is not None

        self._initializing = True
        try:
            request = self.provider.payment_request(PaymentRequestOptions(
                total=PaymentItem(amount=self.summary.total, pending=True),
            ))
            if not await request.can_make_payment():
                logger.info("Payment Request API unavailable, button not rendered")
                return False
            self.payment_request = OwnedPaymentRequest(request)
            self.state = CheckoutState.HANDLE_READY
            return True
        finally:
            self._initializing = False

    def update_handle(self) -> None:
        if self.payment_request is None:
            return
        self.payment_request.update(PaymentRequestUpdate(
            total=PaymentItem(amount=self.summary.total, pending=False),
        ))

    # --- button ---

    async def handle_button_clicked(self, event: ClickEvent) -> None:
        if not self.summary.cart_count:
            event.prevent_default()
            self.alert("Cart is empty!")
            return
        if self.client_secret and self.payment_request is not None:
            # The amount may have changed: the old secret's listener goes
            # before a new secret can arrive.
            self.payment_request.detach()

        self.state = CheckoutState.SECRET_REQUESTED
        self.set_client_secret(await self.request_client_secret())

    async def request_client_secret(self) -> Optional[str]:
        payload = {
            item_id: entry.model_dump(mode="json")
            for item_id, entry in self.summary.cart_details.items()
        }
        try:
            response = await self.http.post(self.intent_url, json=payload)
            response.raise_for_status()
            return PaymentIntentCreated.model_validate(response.json()).client_secret
        except (httpx.HTTPError, ValueError):
            # pydantic's ValidationError and JSON decode errors are ValueErrors
            logger.exception("Could not create payment intent")
            return None

    def set_client_secret(self, client_secret: Optional[str]) -> None:
        self.client_secret = client_secret
        if client_secret:
            self.attach_confirmation_listener()
        elif self.payment_request is not None:
            self.state = CheckoutState.HANDLE_READY

    def attach_confirmation_listener(self) -> None:
        if self.payment_request is None or not self.client_secret:
            return
        client_secret = self.client_secret

        async def on_payment_method(event: PaymentMethodEvent) -> None:
            await self.handle_payment_method_received(event, client_secret)

        self.payment_request.attach(on_payment_method)

    # --- confirmation ---

    async def handle_payment_method_received(self, event: PaymentMethodEvent, client_secret: str) -> None:
        self.state = CheckoutState.METHOD_RECEIVED
        self.last_error = None
        shipping = ShippingDetails.from_payment_request(event.shipping_address)

        self.state = CheckoutState.CONFIRMING
        result = await self.provider.confirm_card_payment(
            client_secret,
            {
                "payment_method": event.payment_method.id,
                "shipping": shipping.model_dump(),
            },
            {"handle_actions": False},
        )
        if result.error is not None:
            logger.error("Payment confirmation failed: %s", result.error.message or result.error.code)
            event.complete("fail")
            self.last_error = result.error
            self.state = CheckoutState.HANDLE_READY
            return

        event.complete("success")
        # Second pass lets the provider run follow-up actions such as 3-D Secure.
        result = await self.provider.confirm_card_payment(client_secret)
        intent = result.payment_intent
        # TODO: surface an error or non-succeeded status to the user instead of stalling here.
        if intent is not None and intent.status == "succeeded":
            self.state = CheckoutState.NAVIGATED
            self.router.push(self.success_path)


def build_controller(
    cart: CartStore,
    http: httpx.AsyncClient,
    provider: Optional[PaymentProvider] = None,
    **kwargs,
) -> PaymentHandshakeController:
    """Wire a cart to a controller with its summary and success route."""
    return PaymentHandshakeController(
        CartSummary(cart), build_router(cart), http, provider=provider, **kwargs,
    )
