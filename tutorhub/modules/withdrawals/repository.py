"""Repository protocol for withdrawal requests."""

from __future__ import annotations

from datetime import datetime
from typing import Any, AsyncContextManager, Protocol, Sequence

from tutorhub.db.models import Account as AccountModel, WithdrawalRequest as WithdrawalModel


class WithdrawalRepository(Protocol):
    def atomic(self) -> AsyncContextManager[Any]:
        """Scope whose writes are undone together if the block raises."""
        ...

    async def create(
        self,
        *,
        faculty_id: str,
        amount_cents: int,
        currency: str,
        payment_details: dict[str, Any],
    ) -> WithdrawalModel:
        ...

    async def get(self, request_id: str) -> WithdrawalModel | None:
        ...

    async def transition(
        self,
        request_id: str,
        *,
        expected_status: str,
        new_status: str,
        processed_at: datetime,
    ) -> WithdrawalModel | None:
        ...

    async def list_pending_with_faculty(self) -> Sequence[tuple[WithdrawalModel, AccountModel]]:
        ...

    async def list_for_faculty(self, faculty_id: str, limit: int, offset: int) -> Sequence[WithdrawalModel]:
        ...

    async def pending_totals(self) -> dict[str, tuple[int, int]]:
        ...
