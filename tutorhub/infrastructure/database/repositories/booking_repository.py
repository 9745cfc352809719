"""SQLAlchemy implementation for bookings and their earnings aggregates"""

from __future__ import annotations

from datetime import datetime
from typing import Sequence

from sqlalchemy import Integer, cast, desc, distinct, extract, func, literal_column, select, update
from sqlalchemy.ext.asyncio import AsyncSession, AsyncSessionTransaction

from tutorhub.db.models import Account, Booking


class SqlBookingRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def atomic(self) -> AsyncSessionTransaction:
        return self.session.begin_nested()

    async def create(
        self,
        *,
        student_id: str,
        faculty_id: str,
        topic: str,
        price_cents: int,
        currency: str,
        gateway_order_id: str | None,
        status: str = "pending",
        payment_status: str = "pending",
        completed_at: datetime | None = None,
    ) -> Booking:
        booking = Booking(
            student_id=student_id,
            faculty_id=faculty_id,
            topic=topic,
            price_cents=price_cents,
            currency=currency,
            status=status,
            payment_status=payment_status,
            gateway_order_id=gateway_order_id,
            completed_at=completed_at,
        )
        self.session.add(booking)
        await self.session.flush()
        await self.session.refresh(booking)
        return booking

    async def get_by_order_id(self, order_id: str) -> Booking | None:
        stmt = (
            select(Booking)
            .where(Booking.gateway_order_id == order_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def settle(
        self,
        booking_id: str,
        *,
        status: str,
        payment_status: str,
        payment_id: str | None,
        completed_at: datetime | None,
    ) -> Booking | None:
        """Move a booking out of ``pending``; ``None`` when it already left."""
        stmt = (
            update(Booking)
            .where(Booking.id == booking_id, Booking.status == "pending")
            .values(
                status=status,
                payment_status=payment_status,
                gateway_payment_id=payment_id,
                completed_at=completed_at,
            )
            .execution_options(synchronize_session="fetch")
            .returning(Booking)
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def list_for_student(self, student_id: str, limit: int, offset: int) -> Sequence[Booking]:
        stmt = (
            select(Booking)
            .where(Booking.student_id == student_id)
            .order_by(desc(Booking.created_at))
            .offset(offset)
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return result.scalars().all()

    async def list_for_faculty(self, faculty_id: str, limit: int, offset: int) -> Sequence[Booking]:
        stmt = (
            select(Booking)
            .where(Booking.faculty_id == faculty_id)
            .order_by(desc(Booking.created_at))
            .offset(offset)
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return result.scalars().all()

    async def exists_for(self, student_id: str, faculty_id: str, topic: str) -> bool:
        stmt = select(Booking.id).where(
            Booking.student_id == student_id,
            Booking.faculty_id == faculty_id,
            Booking.topic == topic,
        )
        result = await self.session.execute(stmt.limit(1))
        return result.first() is not None

    async def count_for_faculty(self, faculty_id: str) -> int:
        stmt = select(func.count(Booking.id)).where(Booking.faculty_id == faculty_id)
        return int((await self.session.execute(stmt)).scalar_one())

    async def completed_totals(self, faculty_id: str | None = None, since: datetime | None = None) -> dict[str, int]:
        """Gross completed revenue per currency, platform-wide when ``faculty_id`` is None."""
        stmt = (
            select(Booking.currency, func.sum(Booking.price_cents))
            .where(Booking.status == "completed")
            .group_by(Booking.currency)
            .order_by(Booking.currency)
        )
        if faculty_id is not None:
            stmt = stmt.where(Booking.faculty_id == faculty_id)
        if since is not None:
            stmt = stmt.where(Booking.completed_at >= since)
        result = await self.session.execute(stmt)
        return {currency: int(total or 0) for currency, total in result.all()}

    async def completed_counts(self, faculty_id: str | None = None) -> tuple[int, int]:
        """Number of completed bookings and of distinct students behind them."""
        stmt = select(func.count(Booking.id), func.count(distinct(Booking.student_id))).where(
            Booking.status == "completed"
        )
        if faculty_id is not None:
            stmt = stmt.where(Booking.faculty_id == faculty_id)
        completed, students = (await self.session.execute(stmt)).one()
        return int(completed), int(students)

    async def counts_by_weekday(self, since: datetime) -> dict[int, int]:
        """Bookings created since ``since`` per weekday, 0 being Sunday."""
        if self.session.get_bind().dialect.name == "sqlite":
            weekday = cast(func.strftime(literal_column("'%w'"), Booking.created_at), Integer)
        else:
            weekday = cast(extract("dow", Booking.created_at), Integer)
        stmt = (
            select(weekday, func.count(Booking.id))
            .where(Booking.created_at >= since)
            .group_by(weekday)
            .order_by(weekday)
        )
        result = await self.session.execute(stmt)
        return {int(day): int(count) for day, count in result.all()}

    async def recent_completed(self, faculty_id: str, limit: int) -> Sequence[tuple[Booking, str]]:
        student_name = func.coalesce(Account.full_name, Account.username)
        stmt = (
            select(Booking, student_name)
            .join(Account, Account.id == Booking.student_id)
            .where(Booking.faculty_id == faculty_id, Booking.status == "completed")
            .order_by(desc(Booking.completed_at), desc(Booking.created_at))
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [(booking, name) for booking, name in result.all()]
