"""Booking checkout, payment verification and faculty earnings."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from tutorhub.core.config import get_settings
from tutorhub.core.money import net_of_fee, to_cents
from tutorhub.db.models import Booking as BookingModel
from tutorhub.infrastructure.database.repositories.booking_repository import SqlBookingRepository
from tutorhub.modules.accounts import AccountNotFoundError, AccountService
from tutorhub.modules.platform_settings import PlatformSettingService
from tutorhub.modules.wallets import WalletService

from .exceptions import (
    BookingAlreadyExistsError,
    BookingAlreadySettledError,
    BookingNotFoundError,
    FacultyNotFoundError,
    InvalidBookingError,
    InvalidPaymentSignatureError,
)
from .gateway import PaymentGateway
from .models import (
    PAYMENT_FREE,
    PAYMENT_SUCCESSFUL,
    STATUS_COMPLETED,
    STATUS_PENDING,
    Booking,
    CheckoutSession,
    EarningsSummary,
    FacultyDashboard,
    RecentEarning,
)
from .repository import BookingRepository

logger = logging.getLogger(__name__)


def _default_currencies() -> frozenset[str]:
    return get_settings().supported_currencies


def _default_receipt_prefix() -> str:
    return get_settings().razorpay.receipt_prefix


@dataclass(slots=True)
class BookingService:
    repository: BookingRepository
    accounts: AccountService
    wallets: WalletService
    platform: PlatformSettingService
    gateway: PaymentGateway
    currencies: frozenset[str] = field(default_factory=_default_currencies)
    receipt_prefix: str = field(default_factory=_default_receipt_prefix)

    @classmethod
    def with_session(cls, session: AsyncSession, gateway: PaymentGateway) -> "BookingService":
        return cls(
            SqlBookingRepository(session),
            AccountService.with_session(session),
            WalletService.with_session(session),
            PlatformSettingService.with_session(session),
            gateway,
        )

    async def create_booking(
        self,
        *,
        student_id: str,
        faculty_id: str,
        topic: str,
        price: Decimal | int | str,
        currency: str,
    ) -> CheckoutSession:
        """Open a gateway order and record a pending booking against it."""
        try:
            price_cents = to_cents(price)
        except ValueError as exc:
            raise InvalidBookingError(str(exc)) from exc
        if price_cents <= 0:
            raise InvalidBookingError("Price must be positive")
        code = (currency or "").upper()
        if code not in self.currencies:
            raise InvalidBookingError(f"Unsupported currency: {currency}")

        try:
            faculty = await self.accounts.get_faculty(faculty_id)
        except AccountNotFoundError as exc:
            raise FacultyNotFoundError(faculty_id) from exc

        receipt = f"{self.receipt_prefix}_{student_id[:8]}_{int(datetime.now(timezone.utc).timestamp())}"
        order = await self.gateway.create_order(
            amount_cents=price_cents,
            currency=code,
            receipt=receipt,
            notes={"student_id": student_id, "faculty_id": faculty.id, "topic": topic[:200]},
        )
        booking = await self.repository.create(
            student_id=student_id,
            faculty_id=faculty.id,
            topic=topic,
            price_cents=price_cents,
            currency=code,
            gateway_order_id=order.id,
        )
        logger.info("Booking %s opened with order %s", booking.id, order.id)
        return CheckoutSession(booking=self._to_domain(booking), gateway_key_id=self.gateway.key_id)

    async def create_free_booking(self, *, student_id: str, faculty_id: str, topic: str, currency: str) -> Booking:
        """Record a zero-priced session as completed straight away; nothing is credited."""
        code = (currency or "").upper()
        if code not in self.currencies:
            raise InvalidBookingError(f"Unsupported currency: {currency}")
        try:
            faculty = await self.accounts.get_faculty(faculty_id)
        except AccountNotFoundError as exc:
            raise FacultyNotFoundError(faculty_id) from exc

        if await self.repository.exists_for(student_id, faculty.id, topic):
            raise BookingAlreadyExistsError("You have already booked this session.")

        booking = await self.repository.create(
            student_id=student_id,
            faculty_id=faculty.id,
            topic=topic,
            price_cents=0,
            currency=code,
            gateway_order_id=None,
            status=STATUS_COMPLETED,
            payment_status=PAYMENT_FREE,
            completed_at=datetime.now(timezone.utc),
        )
        logger.info("Free booking %s confirmed for student %s", booking.id, student_id)
        return self._to_domain(booking)

    async def verify_payment(
        self,
        *,
        order_id: str,
        payment_id: str,
        signature: str,
        student_id: Optional[str] = None,
    ) -> Booking:
        """Complete a paid booking and credit the faculty's share exactly once."""
        booking = await self.repository.get_by_order_id(order_id)
        if booking is None or (student_id is not None and booking.student_id != student_id):
            raise BookingNotFoundError(order_id)
        if booking.status != STATUS_PENDING:
            raise BookingAlreadySettledError(booking.id)

        # A forged signature leaves the booking pending for the genuine callback.
        if not self.gateway.verify_payment_signature(order_id=order_id, payment_id=payment_id, signature=signature):
            logger.warning("Invalid payment signature for order %s", order_id)
            raise InvalidPaymentSignatureError(order_id)

        async with self.repository.atomic():
            settled = await self.repository.settle(
                booking.id,
                status=STATUS_COMPLETED,
                payment_status=PAYMENT_SUCCESSFUL,
                payment_id=payment_id,
                completed_at=datetime.now(timezone.utc),
            )
            if settled is None:
                raise BookingAlreadySettledError(booking.id)
            completed = self._to_domain(settled)

            fee = await self.platform.get_platform_fee()
            await self.wallets.credit_earnings(
                faculty_id=completed.faculty_id,
                currency=completed.currency,
                amount_cents=net_of_fee(completed.price_cents, fee),
                booking_id=completed.id,
                description=f"{completed.topic} (platform fee {fee}%)",
            )

        logger.info("Booking %s completed via payment %s", completed.id, payment_id)
        return completed

    async def list_for_student(self, student_id: str, limit: int = 50, offset: int = 0) -> list[Booking]:
        rows = await self.repository.list_for_student(student_id, limit, offset)
        return [self._to_domain(row) for row in rows]

    async def list_for_faculty(self, faculty_id: str, limit: int = 50, offset: int = 0) -> list[Booking]:
        rows = await self.repository.list_for_faculty(faculty_id, limit, offset)
        return [self._to_domain(row) for row in rows]

    async def faculty_dashboard(
        self,
        faculty_id: str,
        *,
        weekly_window_days: int = 7,
        recent_limit: int = 5,
        now: Optional[datetime] = None,
    ) -> FacultyDashboard:
        since = (now or datetime.now(timezone.utc)) - timedelta(days=weekly_window_days)
        totals = await self.repository.completed_totals(faculty_id)
        weekly = await self.repository.completed_totals(faculty_id, since=since)
        completed, students = await self.repository.completed_counts(faculty_id)
        recent = await self.repository.recent_completed(faculty_id, recent_limit)
        return FacultyDashboard(
            total_earnings=[EarningsSummary(currency, cents) for currency, cents in totals.items()],
            weekly_earnings=[EarningsSummary(currency, cents) for currency, cents in weekly.items()],
            completed_bookings=completed,
            unique_students=students,
            recent_earnings=[
                RecentEarning(
                    booking_id=booking.id,
                    student_name=name,
                    topic=booking.topic,
                    price_cents=booking.price_cents,
                    currency=booking.currency,
                    created_at=booking.created_at,
                )
                for booking, name in recent
            ],
        )

    async def completed_booking_count(self) -> int:
        completed, _ = await self.repository.completed_counts()
        return completed

    async def count_for_faculty(self, faculty_id: str) -> int:
        return await self.repository.count_for_faculty(faculty_id)

    async def revenue_by_currency(self) -> list[EarningsSummary]:
        totals = await self.repository.completed_totals()
        return [EarningsSummary(currency, cents) for currency, cents in totals.items()]

    async def weekly_booking_counts(self, *, days: int = 7, now: Optional[datetime] = None) -> dict[int, int]:
        """Bookings of the last ``days`` days per weekday (0 is Sunday), completed or not."""
        since = (now or datetime.now(timezone.utc)) - timedelta(days=days)
        return await self.repository.counts_by_weekday(since)

    @staticmethod
    def _to_domain(model: BookingModel) -> Booking:
        return Booking(
            id=model.id,
            student_id=model.student_id,
            faculty_id=model.faculty_id,
            topic=model.topic,
            price_cents=model.price_cents,
            currency=model.currency,
            status=model.status,
            payment_status=model.payment_status,
            gateway_order_id=model.gateway_order_id,
            gateway_payment_id=model.gateway_payment_id,
            created_at=model.created_at,
            completed_at=model.completed_at,
        )
