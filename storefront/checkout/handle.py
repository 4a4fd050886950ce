from typing import Optional
import logging

from ..models import PaymentRequestUpdate
from .provider import PAYMENT_METHOD_EVENT, PaymentMethodHandler, PaymentRequest

logger = logging.getLogger("storefront.handle")


class OwnedPaymentRequest:
    """A payment request with a single payment-method listener slot.

    ``attach`` always detaches the current listener before subscribing the new
    one, so the underlying request never carries two listeners.
    """

    def __init__(self, request: PaymentRequest):
        self.request = request
        self.listener: Optional[PaymentMethodHandler] = None

    @property
    def has_listener(self) -> bool:
        return self.listener is not None

    def update(self, options: PaymentRequestUpdate) -> None:
        self.request.update(options)

    def attach(self, listener: PaymentMethodHandler) -> None:
        self.detach()
        self.request.on(PAYMENT_METHOD_EVENT, listener)
        self.listener = listener
        logger.debug("Payment method listener attached")

    def detach(self) -> None:
        if self.listener is None:
            return
        self.request.off(PAYMENT_METHOD_EVENT, self.listener)
        self.listener = None
        logger.debug("Payment method listener detached")
