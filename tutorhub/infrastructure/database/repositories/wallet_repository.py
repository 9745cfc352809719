"""SQLAlchemy implementation for the faculty wallet store"""

from __future__ import annotations

from typing import Sequence

from sqlalchemy import desc, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from tutorhub.db.models import FacultyWallet, WalletTransaction


class SqlWalletRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_wallet(self, faculty_id: str, currency: str) -> FacultyWallet | None:
        stmt = (
            select(FacultyWallet)
            .where(
                FacultyWallet.faculty_id == faculty_id,
                FacultyWallet.currency == currency,
            )
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def list_wallets(self, faculty_id: str) -> Sequence[FacultyWallet]:
        stmt = (
            select(FacultyWallet)
            .where(FacultyWallet.faculty_id == faculty_id)
            .order_by(FacultyWallet.currency)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalars().all()

    async def credit(self, faculty_id: str, currency: str, amount_cents: int) -> FacultyWallet:
        wallet = await self._apply_delta(faculty_id, currency, amount_cents)
        if wallet is not None:
            return wallet

        # First earning in this currency: create the row inside a savepoint so a
        # concurrent creator only costs us a retry, not the whole transaction.
        try:
            async with self.session.begin_nested():
                wallet = FacultyWallet(faculty_id=faculty_id, currency=currency, balance_cents=amount_cents)
                self.session.add(wallet)
                await self.session.flush()
        except IntegrityError:
            wallet = await self._apply_delta(faculty_id, currency, amount_cents)
            if wallet is None:
                raise
            return wallet
        await self.session.refresh(wallet)
        return wallet

    async def debit_if_sufficient(self, faculty_id: str, currency: str, amount_cents: int) -> FacultyWallet | None:
        """Decrement the balance only while it still covers ``amount_cents``."""
        stmt = (
            update(FacultyWallet)
            .where(
                FacultyWallet.faculty_id == faculty_id,
                FacultyWallet.currency == currency,
                FacultyWallet.balance_cents >= amount_cents,
            )
            .values(balance_cents=FacultyWallet.balance_cents - amount_cents)
            .execution_options(synchronize_session="fetch")
            .returning(FacultyWallet)
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def _apply_delta(self, faculty_id: str, currency: str, delta_cents: int) -> FacultyWallet | None:
        stmt = (
            update(FacultyWallet)
            .where(
                FacultyWallet.faculty_id == faculty_id,
                FacultyWallet.currency == currency,
            )
            .values(balance_cents=FacultyWallet.balance_cents + delta_cents)
            .execution_options(synchronize_session="fetch")
            .returning(FacultyWallet)
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def add_transaction(
        self,
        *,
        faculty_id: str,
        currency: str,
        amount_cents: int,
        type: str,
        booking_id: str | None = None,
        withdrawal_id: str | None = None,
        description: str | None = None,
    ) -> WalletTransaction:
        tx = WalletTransaction(
            faculty_id=faculty_id,
            currency=currency,
            amount_cents=amount_cents,
            type=type,
            booking_id=booking_id,
            withdrawal_id=withdrawal_id,
            description=description,
        )
        self.session.add(tx)
        await self.session.flush()
        await self.session.refresh(tx)
        return tx

    async def list_transactions(self, faculty_id: str, limit: int, offset: int) -> Sequence[WalletTransaction]:
        stmt = (
            select(WalletTransaction)
            .where(WalletTransaction.faculty_id == faculty_id)
            .order_by(desc(WalletTransaction.created_at))
            .offset(offset)
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return result.scalars().all()

    async def ledger_total(self, faculty_id: str, currency: str) -> int:
        stmt = select(func.coalesce(func.sum(WalletTransaction.amount_cents), 0)).where(
            WalletTransaction.faculty_id == faculty_id,
            WalletTransaction.currency == currency,
        )
        return int((await self.session.execute(stmt)).scalar_one())
