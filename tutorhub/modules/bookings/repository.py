"""Repository protocol for bookings."""

from __future__ import annotations

from datetime import datetime
from typing import Any, AsyncContextManager, Protocol, Sequence

from tutorhub.db.models import Booking as BookingModel


class BookingRepository(Protocol):
    def atomic(self) -> AsyncContextManager[Any]:
        ...

    async def create(
        self,
        *,
        student_id: str,
        faculty_id: str,
        topic: str,
        price_cents: int,
        currency: str,
        gateway_order_id: str | None,
        status: str = ...,
        payment_status: str = ...,
        completed_at: datetime | None = None,
    ) -> BookingModel:
        ...

    async def get_by_order_id(self, order_id: str) -> BookingModel | None:
        ...

    async def settle(
        self,
        booking_id: str,
        *,
        status: str,
        payment_status: str,
        payment_id: str | None,
        completed_at: datetime | None,
    ) -> BookingModel | None:
        ...

    async def list_for_student(self, student_id: str, limit: int, offset: int) -> Sequence[BookingModel]:
        ...

    async def list_for_faculty(self, faculty_id: str, limit: int, offset: int) -> Sequence[BookingModel]:
        ...

    async def exists_for(self, student_id: str, faculty_id: str, topic: str) -> bool:
        ...

    async def count_for_faculty(self, faculty_id: str) -> int:
        ...

    async def completed_totals(self, faculty_id: str | None = None, since: datetime | None = None) -> dict[str, int]:
        ...

    async def completed_counts(self, faculty_id: str | None = None) -> tuple[int, int]:
        ...

    async def counts_by_weekday(self, since: datetime) -> dict[int, int]:
        ...

    async def recent_completed(self, faculty_id: str, limit: int) -> Sequence[tuple[BookingModel, str]]:
        ...
