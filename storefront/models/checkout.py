"""Checkout and order models for the storefront"""

from pydantic import BaseModel, ConfigDict, field_validator
from typing import Optional
from datetime import datetime
from enum import Enum

from .cart import CartLineItem


class OrderStatus(str, Enum):
    # Only COMPLETED is reached today; PENDING and CANCELLED are reserved
    # for asynchronous payment confirmation.
    PENDING = "pending"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class PaymentMethod(str, Enum):
    CARD = "card"
    CASH_ON_DELIVERY = "cash_on_delivery"


class CheckoutForm(BaseModel):
    """Customer, shipping and payment details submitted at checkout"""
    customer_name: str = ""
    customer_email: str = ""
    customer_phone: str = ""
    address: str = ""
    city: str = ""
    postal_code: str = ""
    payment_method: PaymentMethod = PaymentMethod.CASH_ON_DELIVERY
    # Card fields, only read when payment_method is card
    card_number: Optional[str] = None
    expiry_date: Optional[str] = None
    cvv: Optional[str] = None


class OrderLineItem(CartLineItem):
    """Line item frozen into a committed order"""

    model_config = ConfigDict(frozen=True)


class Order(BaseModel):
    """Committed order; never modified after creation"""

    model_config = ConfigDict(frozen=True)

    id: str
    items: tuple[OrderLineItem, ...]
    total_price: float
    customer_name: str
    customer_email: str
    customer_phone: str
    address: str
    city: str
    postal_code: str
    payment_method: PaymentMethod
    card_number: Optional[str] = None
    expiry_date: Optional[str] = None
    status: OrderStatus
    created_at: datetime

    @field_validator("items", mode="before")
    @classmethod
    def _freeze_items(cls, value):
        # cart line items are copied field by field into frozen order lines
        if isinstance(value, (list, tuple)):
            return tuple(
                item.model_dump() if isinstance(item, CartLineItem) else item
                for item in value
            )
        return value


class CheckoutResponse(BaseModel):
    """Response from checkout"""
    success: bool
    order_id: Optional[str] = None
    error_message: Optional[str] = None
