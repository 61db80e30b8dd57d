# Checkout services

from .validation import CheckoutField, FieldErrorReason, ValidationResult, validate_checkout
from .payment import (
    PaymentGateway,
    SimulatedPaymentGateway,
    HttpPaymentGateway,
    PaymentRequest,
    PaymentAuthorization,
)
from .checkout import CheckoutOrchestrator, OrderIdGenerator, mask_card_number

__all__ = [
    "CheckoutField",
    "FieldErrorReason",
    "ValidationResult",
    "validate_checkout",
    "PaymentGateway",
    "SimulatedPaymentGateway",
    "HttpPaymentGateway",
    "PaymentRequest",
    "PaymentAuthorization",
    "CheckoutOrchestrator",
    "OrderIdGenerator",
    "mask_card_number",
]
