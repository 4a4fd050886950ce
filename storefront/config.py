import os

# Minor units (cents) added to every total as the flat shipping/handling fee.
BASE_AMOUNT_MINOR = 350

CURRENCY = "usd"
COUNTRY = "US"
TOTAL_LABEL = "Demo total"

SHIPPING_OPTION = {
    "id": "standard-global",
    "label": "Global shipping",
    "detail": "Handling and delivery fee",
    "amount": BASE_AMOUNT_MINOR,
}

PAYMENT_INTENT_PATH = "/.netlify/functions/create-payment-intent"
SUCCESS_PATH = "/success"

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
