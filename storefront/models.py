
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, Literal, List

from .config import COUNTRY, CURRENCY, SHIPPING_OPTION, TOTAL_LABEL

class Product(BaseModel):
    id: str = Field(..., max_length=100)
    name: str = Field(..., max_length=150)
    description: Optional[str] = None
    price: int                              # minor units, es. 400 = $4.00
    currency: str = CURRENCY
    image: Optional[str] = None
    sku: Optional[str] = None

class CartEntry(BaseModel):
    # cartDetails entries carry extra display fields (value, formattedValue...)
    model_config = ConfigDict(extra="allow")

    id: Optional[str] = None
    name: str
    price: int                              # unit price, minor units
    currency: str = CURRENCY
    quantity: int = Field(default=1, ge=1)

class PaymentIntentCreated(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    client_secret: str = Field(..., alias="clientSecret", min_length=1)

# --- payment request (browser payment sheet) ---

class PaymentItem(BaseModel):
    label: str = TOTAL_LABEL
    amount: int
    pending: bool = False

class ShippingOption(BaseModel):
    id: str
    label: str
    detail: str
    amount: int

class PaymentRequestOptions(BaseModel):
    country: str = COUNTRY
    currency: str = CURRENCY
    total: PaymentItem
    request_payer_name: bool = True
    request_payer_email: bool = True
    request_shipping: bool = True
    shipping_options: List[ShippingOption] = Field(
        default_factory=lambda: [ShippingOption(**SHIPPING_OPTION)]
    )

class PaymentRequestUpdate(BaseModel):
    total: PaymentItem

# --- shipping, as collected by the payment sheet and as sent to the provider ---

class PaymentRequestShippingAddress(BaseModel):
    recipient: Optional[str] = None
    phone: Optional[str] = None
    address_line: List[str] = Field(default_factory=list)
    city: Optional[str] = None
    postal_code: Optional[str] = None
    region: Optional[str] = None
    country: Optional[str] = Field(default=None, min_length=2, max_length=2)

class Address(BaseModel):
    line1: Optional[str] = None
    city: Optional[str] = None
    postal_code: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = Field(default=None, min_length=2, max_length=2)

class ShippingDetails(BaseModel):
    name: Optional[str] = None
    phone: Optional[str] = None
    address: Address

    @classmethod
    def from_payment_request(cls, shipping: PaymentRequestShippingAddress) -> "ShippingDetails":
        return cls(
            name=shipping.recipient,
            phone=shipping.phone,
            address=Address(
                line1=shipping.address_line[0] if shipping.address_line else None,
                city=shipping.city,
                postal_code=shipping.postal_code,
                state=shipping.region,
                country=shipping.country,
            ),
        )

# --- payment method, as returned by the payment sheet ---

class PaymentMethod(BaseModel):
    id: str
    type: str = "card"

# --- confirmation results ---

class PaymentError(BaseModel):
    type: Optional[str] = None
    code: Optional[str] = None
    message: Optional[str] = None

class PaymentIntent(BaseModel):
    id: str
    status: Literal[
        "requires_payment_method", "requires_confirmation", "requires_action",
        "processing", "requires_capture", "canceled", "succeeded",
    ]

class ConfirmResult(BaseModel):
    error: Optional[PaymentError] = None
    payment_intent: Optional[PaymentIntent] = None
