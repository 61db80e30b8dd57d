"""
Checkout form validation.

Checks run in a fixed order and stop at the first failure, so the form can
surface one error at a time in the same order the fields appear.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..models.checkout import CheckoutForm, PaymentMethod

EXPIRY_PATTERN = re.compile(r"\d{2}/\d{2}", re.ASCII)
MIN_PHONE_DIGITS = 9
CARD_DIGITS = 16


class CheckoutField(str, Enum):
    """Checkout form fields, in validation order"""
    CUSTOMER_NAME = "customer_name"
    CUSTOMER_EMAIL = "customer_email"
    CUSTOMER_PHONE = "customer_phone"
    ADDRESS = "address"
    CITY = "city"
    POSTAL_CODE = "postal_code"
    CARD_NUMBER = "card_number"
    EXPIRY_DATE = "expiry_date"
    CVV = "cvv"


class FieldErrorReason(str, Enum):
    REQUIRED = "required"
    INVALID = "invalid"


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating a checkout form"""
    is_valid: bool
    field: Optional[CheckoutField] = None
    reason: Optional[FieldErrorReason] = None
    message: Optional[str] = None

    @classmethod
    def ok(cls) -> "ValidationResult":
        return cls(is_valid=True)

    @classmethod
    def required(cls, field: CheckoutField) -> "ValidationResult":
        return cls(
            is_valid=False,
            field=field,
            reason=FieldErrorReason.REQUIRED,
            message="This field is required",
        )

    @classmethod
    def invalid(cls, field: CheckoutField, message: str) -> "ValidationResult":
        return cls(
            is_valid=False,
            field=field,
            reason=FieldErrorReason.INVALID,
            message=message,
        )


def digits_only(value: str) -> str:
    return re.sub(r"\D", "", value, flags=re.ASCII)


def _blank(value: Optional[str]) -> bool:
    return not value or not value.strip()


def validate_checkout(form: CheckoutForm) -> ValidationResult:
    """Validate a checkout form, returning the first failing field"""
    if _blank(form.customer_name):
        return ValidationResult.required(CheckoutField.CUSTOMER_NAME)

    if _blank(form.customer_email):
        return ValidationResult.required(CheckoutField.CUSTOMER_EMAIL)
    if "@" not in form.customer_email:
        return ValidationResult.invalid(
            CheckoutField.CUSTOMER_EMAIL, "Please enter a valid email"
        )

    if _blank(form.customer_phone):
        return ValidationResult.required(CheckoutField.CUSTOMER_PHONE)
    if len(digits_only(form.customer_phone)) < MIN_PHONE_DIGITS:
        return ValidationResult.invalid(
            CheckoutField.CUSTOMER_PHONE,
            f"Phone number must have at least {MIN_PHONE_DIGITS} digits",
        )

    if _blank(form.address):
        return ValidationResult.required(CheckoutField.ADDRESS)
    if _blank(form.city):
        return ValidationResult.required(CheckoutField.CITY)
    if _blank(form.postal_code):
        return ValidationResult.required(CheckoutField.POSTAL_CODE)

    if form.payment_method != PaymentMethod.CARD:
        return ValidationResult.ok()

    if _blank(form.card_number):
        return ValidationResult.required(CheckoutField.CARD_NUMBER)
    if len(digits_only(form.card_number)) != CARD_DIGITS:
        return ValidationResult.invalid(
            CheckoutField.CARD_NUMBER, f"Card number must be {CARD_DIGITS} digits"
        )

    # Format only: month range and expiry in the past are not checked
    if _blank(form.expiry_date):
        return ValidationResult.required(CheckoutField.EXPIRY_DATE)
    if not EXPIRY_PATTERN.fullmatch(form.expiry_date):
        return ValidationResult.invalid(
            CheckoutField.EXPIRY_DATE, "Expiry date must be in MM/YY format"
        )

    if _blank(form.cvv):
        return ValidationResult.required(CheckoutField.CVV)
    if len(digits_only(form.cvv)) not in (3, 4):
        return ValidationResult.invalid(CheckoutField.CVV, "CVV must be 3-4 digits")

    return ValidationResult.ok()
