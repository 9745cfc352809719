"""Repository protocol for wallet operations."""

from __future__ import annotations

from typing import Protocol, Sequence

from tutorhub.db.models import FacultyWallet as WalletModel, WalletTransaction as WalletTransactionModel


class WalletRepository(Protocol):
    async def get_wallet(self, faculty_id: str, currency: str) -> WalletModel | None:
        ...

    async def list_wallets(self, faculty_id: str) -> Sequence[WalletModel]:
        ...

    async def credit(self, faculty_id: str, currency: str, amount_cents: int) -> WalletModel:
        ...

    async def debit_if_sufficient(self, faculty_id: str, currency: str, amount_cents: int) -> WalletModel | None:
        ...

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
    ) -> WalletTransactionModel:
        ...

    async def list_transactions(self, faculty_id: str, limit: int, offset: int) -> Sequence[WalletTransactionModel]:
        ...

    async def ledger_total(self, faculty_id: str, currency: str) -> int:
        ...
