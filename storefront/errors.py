"""Storefront exceptions"""

from typing import Optional


class StorefrontError(Exception):
    """Base class for storefront errors"""


class StorageCorruptedError(StorefrontError):
    """A persisted record could not be decoded"""

    def __init__(self, key: str, reason: str):
        self.key = key
        self.reason = reason
        super().__init__(f"Corrupt record under '{key}': {reason}")


class CheckoutError(StorefrontError):
    """Checkout could not be completed"""

    retryable = False


class CheckoutValidationError(CheckoutError):
    """The checkout form has a missing or malformed field"""

    def __init__(self, result):
        self.result = result
        super().__init__(result.message)

    @property
    def field(self):
        return self.result.field


class EmptyCartError(CheckoutError):
    """Checkout attempted with no line items"""

    def __init__(self, message: str = "Cart is empty"):
        super().__init__(message)


class PaymentError(CheckoutError):
    """Payment authorization failed; the buyer may try again"""

    retryable = True

    def __init__(self, message: str, reference: Optional[str] = None):
        self.reference = reference
        super().__init__(message)


class PaymentDeclinedError(PaymentError):
    """The payment gateway declined the charge"""


class PaymentTimeoutError(PaymentError):
    """The payment gateway did not answer in time"""
