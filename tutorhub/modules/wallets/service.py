"""Wallet domain service"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from tutorhub.db.models import FacultyWallet as WalletModel, WalletTransaction as WalletTransactionModel
from tutorhub.infrastructure.database.repositories.wallet_repository import SqlWalletRepository

from .exceptions import InvalidWalletAmountError, WalletDebitRejectedError
from .models import TRANSACTION_EARNING, TRANSACTION_WITHDRAWAL, WalletBalance, WalletTransactionRecord
from .repository import WalletRepository

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class WalletService:
    """Materialized per-(faculty, currency) balances plus their ledger.

    Every balance change writes a ledger row in the same transaction, so a
    wallet always equals the sum of its transactions.
    """

    repository: WalletRepository

    @classmethod
    def with_session(cls, session: AsyncSession) -> "WalletService":
        return cls(SqlWalletRepository(session))

    async def get_balance(self, faculty_id: str, currency: str) -> WalletBalance:
        """Current balance; a faculty with no wallet in ``currency`` has zero."""
        wallet = await self.repository.get_wallet(faculty_id, currency)
        if wallet is None:
            return WalletBalance(faculty_id=faculty_id, currency=currency, balance_cents=0)
        return self._to_balance(wallet)

    async def list_balances(self, faculty_id: str) -> list[WalletBalance]:
        rows = await self.repository.list_wallets(faculty_id)
        return [self._to_balance(row) for row in rows]

    async def credit_earnings(
        self,
        *,
        faculty_id: str,
        currency: str,
        amount_cents: int,
        booking_id: Optional[str] = None,
        description: Optional[str] = None,
    ) -> WalletBalance:
        if amount_cents < 0:
            raise InvalidWalletAmountError(f"Credit must not be negative: {amount_cents}")
        wallet = await self.repository.credit(faculty_id, currency, amount_cents)
        await self.repository.add_transaction(
            faculty_id=faculty_id,
            currency=currency,
            amount_cents=amount_cents,
            type=TRANSACTION_EARNING,
            booking_id=booking_id,
            description=description or "Booking earnings",
        )
        logger.info("Credited %s %s cents to faculty %s", currency, amount_cents, faculty_id)
        return self._to_balance(wallet)

    async def debit_for_withdrawal(
        self,
        *,
        faculty_id: str,
        currency: str,
        amount_cents: int,
        withdrawal_id: str,
        description: Optional[str] = None,
    ) -> WalletBalance:
        """Debit the wallet, refusing when the balance would go negative."""
        if amount_cents <= 0:
            raise InvalidWalletAmountError(f"Debit must be positive: {amount_cents}")
        wallet = await self.repository.debit_if_sufficient(faculty_id, currency, amount_cents)
        if wallet is None:
            raise WalletDebitRejectedError(faculty_id, currency, amount_cents)
        await self.repository.add_transaction(
            faculty_id=faculty_id,
            currency=currency,
            amount_cents=-amount_cents,
            type=TRANSACTION_WITHDRAWAL,
            withdrawal_id=withdrawal_id,
            description=description or "Withdrawal payout",
        )
        return self._to_balance(wallet)

    async def list_transactions(self, faculty_id: str, limit: int = 20, offset: int = 0) -> list[WalletTransactionRecord]:
        rows = await self.repository.list_transactions(faculty_id, limit, offset)
        return [self._to_transaction(row) for row in rows]

    async def ledger_total(self, faculty_id: str, currency: str) -> int:
        return await self.repository.ledger_total(faculty_id, currency)

    @staticmethod
    def _to_balance(model: WalletModel) -> WalletBalance:
        return WalletBalance(
            faculty_id=model.faculty_id,
            currency=model.currency,
            balance_cents=model.balance_cents,
            updated_at=model.updated_at,
        )

    @staticmethod
    def _to_transaction(model: WalletTransactionModel) -> WalletTransactionRecord:
        return WalletTransactionRecord(
            id=model.id,
            faculty_id=model.faculty_id,
            currency=model.currency,
            amount_cents=model.amount_cents,
            type=model.type,
            booking_id=model.booking_id,
            withdrawal_id=model.withdrawal_id,
            description=model.description,
            created_at=model.created_at,
        )
