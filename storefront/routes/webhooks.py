
import os
import logging
import stripe
from fastapi import APIRouter, Request, HTTPException

logger = logging.getLogger("storefront.webhooks")

router = APIRouter(tags=["webhooks"])

@router.post("/webhooks/stripe", summary="Stripe webhook")
async def stripe_webhook(request: Request):
    payload = await request.body()
    sig_header = request.headers.get("stripe-signature")
    webhook_secret = os.getenv("STRIPE_WEBHOOK_SECRET")
    if not webhook_secret:
        raise HTTPException(status_code=500, detail="STRIPE_WEBHOOK_SECRET not configured")
    if not sig_header:
        raise HTTPException(status_code=400, detail="Missing stripe-signature header")

    try:
        event = stripe.Webhook.construct_event(payload=payload, sig_header=sig_header, secret=webhook_secret)
    except (ValueError, stripe.SignatureVerificationError) as e:
        logger.warning("Rejected webhook: %s", e)
        raise HTTPException(status_code=400, detail=f"Webhook error: {e}")

    # StripeObject supports subscripting only, no dict methods
    logger.info("Webhook %s id=%s", event["type"], event["data"]["object"]["id"])
    return {"received": True}
