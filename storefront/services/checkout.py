"""Checkout orchestration: the only path that creates orders"""

import asyncio
import logging
import threading
import time
from datetime import datetime, timezone
from typing import Optional

from ..database.carts import CartStore
from ..database.orders import OrderStore
from ..errors import (
    CheckoutValidationError,
    EmptyCartError,
    PaymentTimeoutError,
)
from ..models.cart import CartLineItem
from ..models.checkout import CheckoutForm, Order, OrderStatus, PaymentMethod
from .payment import PaymentGateway, PaymentRequest, SimulatedPaymentGateway
from .validation import digits_only, validate_checkout

logger = logging.getLogger(__name__)


class OrderIdGenerator:
    """Process-wide ``ORD-<n>`` ids from a strictly increasing clock reading"""

    def __init__(self, prefix: str = "ORD"):
        self.prefix = prefix
        self._last = 0
        self._lock = threading.Lock()

    def next_id(self) -> str:
        with self._lock:
            # microseconds since the epoch, bumped if the clock has not moved
            value = max(time.time_ns() // 1000, self._last + 1)
            self._last = value
        return f"{self.prefix}-{value}"


order_ids = OrderIdGenerator()


def mask_card_number(card_number: str) -> str:
    """Keep the last four digits, e.g. ``************4242``"""
    digits = digits_only(card_number)
    return digits[-4:].rjust(16, "*")


def total_price(items: list[CartLineItem]) -> float:
    return sum(item.price * item.quantity for item in items)


class CheckoutOrchestrator:
    """
    Turns a cart snapshot and a checkout form into a committed order.

    Steps, in order: validate the form, refuse an empty cart, authorize
    payment, build the order, append it to the order store, clear the cart.
    The cart is only cleared once the order has been written.
    """

    def __init__(
        self,
        cart_store: CartStore,
        order_store: OrderStore,
        gateway: Optional[PaymentGateway] = None,
        payment_timeout: Optional[float] = 30.0,
        id_generator: OrderIdGenerator = order_ids,
    ):
        self.cart_store = cart_store
        self.order_store = order_store
        self.gateway = gateway or SimulatedPaymentGateway()
        self.payment_timeout = payment_timeout
        self.id_generator = id_generator

    async def place_order(self, cart_snapshot: list[CartLineItem], form: CheckoutForm) -> str:
        """
        Place an order and return its id.

        Raises:
            CheckoutValidationError: a form field is missing or malformed
            EmptyCartError: the snapshot has no line items
            PaymentError: payment was declined or timed out; nothing was written
        """
        result = validate_checkout(form)
        if not result.is_valid:
            logger.info(f"Checkout rejected: {result.field.value} {result.reason.value}")
            raise CheckoutValidationError(result)

        if not cart_snapshot:
            logger.info("Checkout rejected: cart is empty")
            raise EmptyCartError()

        items = [item.model_copy(deep=True) for item in cart_snapshot]
        amount = total_price(items)
        is_card = form.payment_method == PaymentMethod.CARD

        authorization = await self._authorize(
            PaymentRequest(
                amount=amount,
                method=form.payment_method,
                card_number=digits_only(form.card_number) if is_card else None,
                expiry_date=form.expiry_date if is_card else None,
                cvv=form.cvv if is_card else None,
            )
        )

        order = Order(
            id=self.id_generator.next_id(),
            items=items,
            total_price=amount,
            customer_name=form.customer_name,
            customer_email=form.customer_email,
            customer_phone=form.customer_phone,
            address=form.address,
            city=form.city,
            postal_code=form.postal_code,
            payment_method=form.payment_method,
            card_number=mask_card_number(form.card_number) if is_card else None,
            expiry_date=form.expiry_date if is_card else None,
            status=OrderStatus.COMPLETED,
            created_at=datetime.now(timezone.utc),
        )

        self.order_store.add_order(order)
        self.cart_store.clear()

        logger.info(
            f"Order {order.id} created: {order.total_price:.2f} - "
            f"{len(order.items)} line item(s), {order.payment_method.value}, "
            f"payment ref {authorization.reference}"
        )
        return order.id

    async def _authorize(self, request: PaymentRequest):
        try:
            return await asyncio.wait_for(self.gateway.authorize(request), self.payment_timeout)
        except asyncio.TimeoutError as e:
            logger.warning(f"Payment authorization timed out after {self.payment_timeout}s")
            raise PaymentTimeoutError("Payment authorization timed out") from e
