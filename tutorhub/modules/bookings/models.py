"""Domain models for bookings."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from tutorhub.core.money import from_cents

STATUS_PENDING = "pending"
STATUS_COMPLETED = "completed"

PAYMENT_SUCCESSFUL = "successful"
PAYMENT_FREE = "free"


@dataclass(slots=True)
class Booking:
    id: str
    student_id: str
    faculty_id: str
    topic: str
    price_cents: int
    currency: str
    status: str
    payment_status: str
    gateway_order_id: Optional[str]
    gateway_payment_id: Optional[str]
    created_at: Optional[datetime]
    completed_at: Optional[datetime] = None

    @property
    def price(self) -> Decimal:
        return from_cents(self.price_cents)


@dataclass(slots=True)
class CheckoutSession:
    """A pending booking plus what the client needs to open gateway checkout."""

    booking: Booking
    gateway_key_id: str


@dataclass(slots=True)
class EarningsSummary:
    currency: str
    total_cents: int

    @property
    def total(self) -> Decimal:
        return from_cents(self.total_cents)


@dataclass(slots=True)
class RecentEarning:
    booking_id: str
    student_name: str
    topic: str
    price_cents: int
    currency: str
    created_at: Optional[datetime]

    @property
    def price(self) -> Decimal:
        return from_cents(self.price_cents)


@dataclass(slots=True)
class FacultyDashboard:
    total_earnings: list[EarningsSummary] = field(default_factory=list)
    weekly_earnings: list[EarningsSummary] = field(default_factory=list)
    completed_bookings: int = 0
    unique_students: int = 0
    recent_earnings: list[RecentEarning] = field(default_factory=list)
