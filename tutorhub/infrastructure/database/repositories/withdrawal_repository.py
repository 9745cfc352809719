"""SQLAlchemy implementation for the withdrawal request store"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Sequence

from sqlalchemy import desc, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession, AsyncSessionTransaction

from tutorhub.db.models import Account, WithdrawalRequest


class SqlWithdrawalRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def atomic(self) -> AsyncSessionTransaction:
        return self.session.begin_nested()

    async def create(
        self,
        *,
        faculty_id: str,
        amount_cents: int,
        currency: str,
        payment_details: dict[str, Any],
    ) -> WithdrawalRequest:
        request = WithdrawalRequest(
            faculty_id=faculty_id,
            amount_cents=amount_cents,
            currency=currency,
            payment_details=payment_details,
        )
        self.session.add(request)
        await self.session.flush()
        await self.session.refresh(request)
        return request

    async def get(self, request_id: str) -> WithdrawalRequest | None:
        stmt = (
            select(WithdrawalRequest)
            .where(WithdrawalRequest.id == request_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def transition(
        self,
        request_id: str,
        *,
        expected_status: str,
        new_status: str,
        processed_at: datetime,
    ) -> WithdrawalRequest | None:
        """Compare-and-set the status; ``None`` means another writer got there first."""
        stmt = (
            update(WithdrawalRequest)
            .where(
                WithdrawalRequest.id == request_id,
                WithdrawalRequest.status == expected_status,
            )
            .values(status=new_status, processed_at=processed_at)
            .execution_options(synchronize_session="fetch")
            .returning(WithdrawalRequest)
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def list_pending_with_faculty(self) -> Sequence[tuple[WithdrawalRequest, Account]]:
        stmt = (
            select(WithdrawalRequest, Account)
            .join(Account, Account.id == WithdrawalRequest.faculty_id)
            .where(WithdrawalRequest.status == "pending")
            .order_by(WithdrawalRequest.created_at, WithdrawalRequest.id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return [(request, account) for request, account in result.all()]

    async def list_for_faculty(self, faculty_id: str, limit: int, offset: int) -> Sequence[WithdrawalRequest]:
        stmt = (
            select(WithdrawalRequest)
            .where(WithdrawalRequest.faculty_id == faculty_id)
            .order_by(desc(WithdrawalRequest.created_at))
            .offset(offset)
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return result.scalars().all()

    async def pending_totals(self) -> dict[str, tuple[int, int]]:
        """Pending request count and amount per currency."""
        stmt = (
            select(
                WithdrawalRequest.currency,
                func.count(),
                func.coalesce(func.sum(WithdrawalRequest.amount_cents), 0),
            )
            .where(WithdrawalRequest.status == "pending")
            .group_by(WithdrawalRequest.currency)
        )
        result = await self.session.execute(stmt)
        return {currency: (int(count), int(total)) for currency, count, total in result.all()}
