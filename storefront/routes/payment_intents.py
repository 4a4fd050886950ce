
import json
import logging
from typing import Dict

import stripe
from fastapi import APIRouter, HTTPException

from ..config import BASE_AMOUNT_MINOR, CURRENCY, PAYMENT_INTENT_PATH
from ..db import get_conn
from ..models import CartEntry, PaymentIntentCreated
from ..payments.stripe_client import create_payment_intent

logger = logging.getLogger("storefront.payment_intents")

router = APIRouter(tags=["payments"])

def price_minor_for_product(conn, product_id: str) -> int:
    row = conn.execute("SELECT price FROM products WHERE id = ?", [product_id]).fetchone()
    if not row:
        raise HTTPException(status_code=400, detail=f"Unknown product id: {product_id}")
    return int(row[0])

def compute_amount(conn, cart_details: Dict[str, CartEntry]) -> int:
    # inventory prices only: the client-side price is display data
    amount = BASE_AMOUNT_MINOR
    for item_id, entry in cart_details.items():
        amount += price_minor_for_product(conn, entry.id or item_id) * entry.quantity
    return amount

@router.post(PAYMENT_INTENT_PATH, response_model=PaymentIntentCreated, summary="Create a PaymentIntent for the cart")
async def create_payment_intent_for_cart(cart_details: Dict[str, CartEntry]):
    if not cart_details:
        raise HTTPException(status_code=400, detail="Cart is empty")

    conn = get_conn()
    amount = compute_amount(conn, cart_details)

    try:
        pi = create_payment_intent(
            amount_minor=amount,
            currency=CURRENCY,
            metadata={"items": json.dumps({k: v.quantity for k, v in cart_details.items()})},
        )
    except stripe.StripeError as e:
        logger.exception("PaymentIntent creation failed amount=%s", amount)
        raise HTTPException(status_code=502, detail=f"Payment provider error: {e.user_message or 'unavailable'}")

    logger.info("Created PaymentIntent id=%s amount=%s", pi["id"], amount)
    return PaymentIntentCreated(client_secret=pi["client_secret"])
