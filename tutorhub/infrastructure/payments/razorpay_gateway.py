"""Razorpay implementation of the payment gateway port."""

from __future__ import annotations

import logging
from typing import Any

import razorpay
from fastapi.concurrency import run_in_threadpool
from razorpay.errors import BadRequestError, GatewayError, ServerError, SignatureVerificationError

from tutorhub.modules.bookings.exceptions import PaymentGatewayError
from tutorhub.modules.bookings.gateway import GatewayOrder

logger = logging.getLogger(__name__)


class RazorpayGateway:
    """Thin async wrapper over the blocking Razorpay SDK client."""

    def __init__(self, key_id: str, key_secret: str, client: Any | None = None) -> None:
        self.key_id = key_id
        self._client = client or razorpay.Client(auth=(key_id, key_secret))

    async def create_order(
        self,
        *,
        amount_cents: int,
        currency: str,
        receipt: str,
        notes: dict[str, str],
    ) -> GatewayOrder:
        # Razorpay amounts are in the currency's smallest unit (cents / paise).
        payload = {
            "amount": amount_cents,
            "currency": currency,
            "receipt": receipt[:40],
            "notes": notes,
        }
        try:
            order = await run_in_threadpool(self._client.order.create, data=payload)
        except (BadRequestError, GatewayError, ServerError, OSError) as exc:
            logger.error("Razorpay order creation failed for %s: %s", receipt, exc)
            raise PaymentGatewayError("Payment initiation failed") from exc

        logger.info("Created Razorpay order %s for receipt %s", order["id"], receipt)
        return GatewayOrder(
            id=order["id"],
            amount_cents=int(order.get("amount", amount_cents)),
            currency=order.get("currency", currency),
            receipt=order.get("receipt", payload["receipt"]),
        )

    def verify_payment_signature(self, *, order_id: str, payment_id: str, signature: str) -> bool:
        try:
            self._client.utility.verify_payment_signature(
                {
                    "razorpay_order_id": order_id,
                    "razorpay_payment_id": payment_id,
                    "razorpay_signature": signature,
                }
            )
        except SignatureVerificationError:
            return False
        return True


__all__ = ["RazorpayGateway"]
