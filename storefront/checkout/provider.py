"""
Payment provider capability as seen by the checkout.

These are the seams to the provider's browser SDK: ``PaymentProvider`` mints
payment requests and confirms card payments, ``PaymentRequest`` is the native
payment sheet handle. Implementations live outside this package (the tests use
in-memory fakes).
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Literal, Optional

from ..models import (
    ConfirmResult,
    PaymentMethod,
    PaymentRequestOptions,
    PaymentRequestShippingAddress,
    PaymentRequestUpdate,
)

PAYMENT_METHOD_EVENT = "paymentmethod"

CompletionStatus = Literal["success", "fail"]


@dataclass
class PaymentMethodEvent:
    """Emitted by the payment sheet once the payer picked a method and address."""

    payment_method: PaymentMethod
    shipping_address: PaymentRequestShippingAddress
    payer_name: Optional[str] = None
    payer_email: Optional[str] = None
    on_complete: Optional[Callable[[CompletionStatus], None]] = field(default=None, repr=False)
    completed: Optional[CompletionStatus] = None

    def complete(self, status: CompletionStatus) -> None:
        # closes the payment sheet in the given state
        self.completed = status
        if self.on_complete is not None:
            self.on_complete(status)


PaymentMethodHandler = Callable[[PaymentMethodEvent], Awaitable[Any]]


class PaymentRequest(ABC):

    @abstractmethod
    async def can_make_payment(self) -> bool:
        ...

    @abstractmethod
    def update(self, options: PaymentRequestUpdate) -> None:
        ...

    @abstractmethod
    def on(self, event: str, handler: PaymentMethodHandler) -> None:
        ...

    @abstractmethod
    def off(self, event: str, handler: Optional[PaymentMethodHandler] = None) -> None:
        ...


class PaymentProvider(ABC):

    @abstractmethod
    def payment_request(self, options: PaymentRequestOptions) -> PaymentRequest:
        ...

    @abstractmethod
    async def confirm_card_payment(
        self,
        client_secret: str,
        data: Optional[dict] = None,
        options: Optional[dict] = None,
    ) -> ConfirmResult:
        """Confirm the PaymentIntent behind ``client_secret``.

        ``options={"handle_actions": False}`` asks the provider not to run
        follow-up actions (3-D Secure and the like) during this call.
        """
