
import os, json
import httpx

from storefront.config import PAYMENT_INTENT_PATH
from storefront.payments.stripe_client import confirm_payment_intent

BASE = os.getenv("BASE_URL", "http://127.0.0.1:8000")

def main():
    products = httpx.get(f"{BASE}/products").json()
    print("[shopper] products:", json.dumps(products, indent=2))

    first = products[0]
    cart_details = {
        first["id"]: {
            "id": first["id"],
            "name": first["name"],
            "price": first["price"],
            "currency": first["currency"],
            "quantity": 2,
        }
    }

    print("[shopper] create payment intent...")
    res = httpx.post(f"{BASE}{PAYMENT_INTENT_PATH}", json=cart_details)
    res.raise_for_status()
    client_secret = res.json()["clientSecret"]
    print("[shopper] got client secret")

    # Stands in for the payment sheet: confirm with Stripe's test Visa card.
    print("[shopper] confirm...")
    pi = confirm_payment_intent(client_secret, payment_method="pm_card_visa")
    print("[shopper] status:", pi["status"])

if __name__ == "__main__":
    main()
