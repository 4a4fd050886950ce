import os
import stripe

from ..config import CURRENCY

stripe.api_key = os.getenv("STRIPE_SECRET_KEY", "")

def payment_intent_id_from_secret(client_secret: str) -> str:
    # client secrets look like "pi_123_secret_abc"
    intent_id, sep, _ = client_secret.partition("_secret_")
    if not sep or not intent_id:
        raise ValueError("Malformed client secret")
    return intent_id

def create_payment_intent(
    amount_minor: int,
    currency: str = CURRENCY,
    metadata: dict | None = None,
):
    """
    Creates a card-only PaymentIntent. Apple Pay and Google Pay wallets are
    served through the 'card' type, so no redirect methods (and no return_url) are needed.
    """
    return stripe.PaymentIntent.create(
        amount=amount_minor,
        currency=currency,
        metadata=metadata or {},
        payment_method_types=["card"],
    )

def confirm_payment_intent(client_secret: str, payment_method: str | None = None):
    """
    Server-side confirmation by client secret, used by the simulation script
    in place of the browser payment sheet.
    """
    intent_id = payment_intent_id_from_secret(client_secret)
    if payment_method:
        return stripe.PaymentIntent.confirm(intent_id, payment_method=payment_method)
    return stripe.PaymentIntent.confirm(intent_id)
