"""Domain models for wallet operations."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from tutorhub.core.money import from_cents

TRANSACTION_EARNING = "earning"
TRANSACTION_WITHDRAWAL = "withdrawal"


@dataclass(slots=True)
class WalletBalance:
    faculty_id: str
    currency: str
    balance_cents: int
    updated_at: Optional[datetime] = None

    @property
    def amount(self) -> Decimal:
        return from_cents(self.balance_cents)


@dataclass(slots=True)
class WalletTransactionRecord:
    id: str
    faculty_id: str
    currency: str
    amount_cents: int
    type: str
    booking_id: Optional[str]
    withdrawal_id: Optional[str]
    description: Optional[str]
    created_at: datetime

    @property
    def amount(self) -> Decimal:
        return from_cents(self.amount_cents)
