"""
Payment authorization gateways.

The storefront ships with a simulated gateway that waits a fixed delay and
approves every charge. An HTTP gateway is used instead when a gateway URL is
configured; it maps declines and timeouts onto distinct, retryable errors.
"""

import asyncio
import logging
import uuid
from dataclasses import dataclass
from typing import Optional

import httpx

from ..errors import PaymentDeclinedError, PaymentError, PaymentTimeoutError
from ..models.checkout import PaymentMethod

logger = logging.getLogger(__name__)


@dataclass
class PaymentRequest:
    """Charge to authorize. The CVV lives only as long as this object."""
    amount: float
    method: PaymentMethod
    card_number: Optional[str] = None
    expiry_date: Optional[str] = None
    cvv: Optional[str] = None
    currency: str = "DZD"


@dataclass
class PaymentAuthorization:
    """Successful authorization"""
    reference: str
    approved: bool = True


class PaymentGateway:
    """Interface for payment authorization"""

    async def authorize(self, request: PaymentRequest) -> PaymentAuthorization:
        raise NotImplementedError

    async def close(self) -> None:
        pass


class SimulatedPaymentGateway(PaymentGateway):
    """Stand-in for an external payment call: fixed latency, always approves"""

    def __init__(self, delay_seconds: float = 1.5):
        self.delay_seconds = delay_seconds

    async def authorize(self, request: PaymentRequest) -> PaymentAuthorization:
        await asyncio.sleep(self.delay_seconds)
        reference = f"SIM-{uuid.uuid4().hex[:12].upper()}"
        logger.debug(f"Simulated {request.method.value} authorization {reference} for {request.amount:.2f}")
        return PaymentAuthorization(reference=reference)


class HttpPaymentGateway(PaymentGateway):
    """
    Payment gateway reached over HTTP.

    Expects ``POST {base_url}/authorize`` to answer with
    ``{"approved": bool, "reference": str, "reason": str?}``. A 402 response
    or ``approved: false`` is a decline.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._http_client = httpx.AsyncClient(timeout=timeout, transport=transport)

    async def close(self) -> None:
        """Close HTTP client"""
        await self._http_client.aclose()

    async def authorize(self, request: PaymentRequest) -> PaymentAuthorization:
        if request.method == PaymentMethod.CASH_ON_DELIVERY:
            # Collected by the courier; nothing to authorize up front
            return PaymentAuthorization(reference=f"COD-{uuid.uuid4().hex[:12].upper()}")

        body = {
            "amount": round(request.amount, 2),
            "currency": request.currency,
            "card_number": request.card_number,
            "expiry_date": request.expiry_date,
            "cvv": request.cvv,
        }

        try:
            response = await self._http_client.post(f"{self.base_url}/authorize", json=body)
        except httpx.TimeoutException as e:
            raise PaymentTimeoutError("Payment gateway timed out") from e
        except httpx.HTTPError as e:
            logger.error(f"Payment gateway unreachable: {e}")
            raise PaymentError("Payment gateway unavailable") from e

        if response.status_code == 402:
            data = response.json() if response.content else {}
            raise PaymentDeclinedError(
                data.get("reason", "Payment declined"),
                reference=data.get("reference"),
            )

        if response.status_code >= 400:
            logger.error(f"Payment gateway failed: {response.status_code} - {response.text}")
            raise PaymentError(f"Payment gateway error ({response.status_code})")

        data = response.json()
        if not data.get("approved"):
            raise PaymentDeclinedError(
                data.get("reason", "Payment declined"),
                reference=data.get("reference"),
            )

        return PaymentAuthorization(reference=data["reference"])
