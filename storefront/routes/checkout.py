"""Checkout API routes"""

import logging
from fastapi import APIRouter, HTTPException, Depends

from ..models.checkout import CheckoutForm, CheckoutResponse
from ..core.session import StorefrontSession, get_session
from ..errors import (
    CheckoutValidationError,
    EmptyCartError,
    PaymentDeclinedError,
    PaymentError,
    PaymentTimeoutError,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/checkout", tags=["Checkout"])


@router.post("", response_model=CheckoutResponse)
async def checkout(
    form: CheckoutForm,
    session: StorefrontSession = Depends(get_session),
):
    """
    Place an order for the current cart.

    Validation problems come back as 422 naming the first bad field, an
    empty cart as 400. Payment failures are retryable: 402 when declined,
    504 when the gateway timed out.
    """
    cart_snapshot = session.cart.snapshot()

    try:
        order_id = await session.checkout.place_order(cart_snapshot, form)
    except CheckoutValidationError as e:
        raise HTTPException(
            status_code=422,
            detail={
                "field": e.result.field.value,
                "reason": e.result.reason.value,
                "message": e.result.message,
            },
        )
    except EmptyCartError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except PaymentDeclinedError as e:
        logger.warning(f"Payment declined for session {session.session_id}: {e}")
        raise HTTPException(status_code=402, detail={"message": str(e), "retryable": True})
    except PaymentTimeoutError as e:
        logger.warning(f"Payment timed out for session {session.session_id}")
        raise HTTPException(status_code=504, detail={"message": str(e), "retryable": True})
    except PaymentError as e:
        logger.warning(f"Payment failed for session {session.session_id}: {e}")
        raise HTTPException(status_code=502, detail={"message": str(e), "retryable": True})

    return CheckoutResponse(success=True, order_id=order_id)
