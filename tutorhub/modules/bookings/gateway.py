"""Payment gateway port used by the booking service."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass(slots=True)
class GatewayOrder:
    id: str
    amount_cents: int
    currency: str
    receipt: str


class PaymentGateway(Protocol):
    key_id: str

    async def create_order(
        self,
        *,
        amount_cents: int,
        currency: str,
        receipt: str,
        notes: dict[str, str],
    ) -> GatewayOrder:
        ...

    def verify_payment_signature(self, *, order_id: str, payment_id: str, signature: str) -> bool:
        ...
