"""Withdrawal request workflow.

Creation only checks the wallet; approval is the sole place a wallet is
debited. Every status change is a compare-and-set on ``pending`` so a request
is processed at most once, and an approval's status change and wallet debit
commit or roll back together.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Optional

from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from tutorhub.core.config import get_settings
from tutorhub.core.money import to_cents
from tutorhub.db.models import Account as AccountModel, WithdrawalRequest as WithdrawalModel
from tutorhub.infrastructure.database.repositories.withdrawal_repository import SqlWithdrawalRepository
from tutorhub.modules.wallets import WalletDebitRejectedError, WalletService

from .exceptions import (
    InsufficientFundsError,
    InsufficientWalletBalanceError,
    InvalidRequestError,
    InvalidStatusError,
    NotFoundOrAlreadyProcessedError,
)
from .models import (
    STATUS_APPROVED,
    STATUS_PENDING,
    STATUS_REJECTED,
    FacultyIdentity,
    PendingWithdrawal,
    WithdrawalRequestRecord,
    payment_details_adapter,
)
from .repository import WithdrawalRepository

logger = logging.getLogger(__name__)


def _default_currencies() -> frozenset[str]:
    return get_settings().supported_currencies


@dataclass(slots=True)
class WithdrawalService:
    repository: WithdrawalRepository
    wallets: WalletService
    currencies: frozenset[str] = field(default_factory=_default_currencies)

    @classmethod
    def with_session(cls, session: AsyncSession) -> "WithdrawalService":
        return cls(SqlWithdrawalRepository(session), WalletService.with_session(session))

    async def create_request(
        self,
        *,
        faculty_id: str,
        amount: Decimal | int | str,
        currency: str,
        payment_details: Optional[Mapping[str, Any]],
    ) -> WithdrawalRequestRecord:
        amount_cents, currency, details = self._validate_request(amount, currency, payment_details)

        balance = await self.wallets.get_balance(faculty_id, currency)
        if amount_cents > balance.balance_cents:
            logger.warning(
                "Withdrawal of %s %s cents refused for faculty %s: balance %s",
                currency,
                amount_cents,
                faculty_id,
                balance.balance_cents,
            )
            raise InsufficientFundsError("Insufficient funds.")

        request = await self.repository.create(
            faculty_id=faculty_id,
            amount_cents=amount_cents,
            currency=currency,
            payment_details=details,
        )
        logger.info("Withdrawal request %s created for faculty %s", request.id, faculty_id)
        return self._to_record(request)

    async def list_pending(self) -> list[PendingWithdrawal]:
        rows = await self.repository.list_pending_with_faculty()
        return [
            PendingWithdrawal(request=self._to_record(request), faculty=self._to_identity(account))
            for request, account in rows
        ]

    async def list_for_faculty(self, faculty_id: str, limit: int = 50, offset: int = 0) -> list[WithdrawalRequestRecord]:
        rows = await self.repository.list_for_faculty(faculty_id, limit, offset)
        return [self._to_record(row) for row in rows]

    async def get_request(self, request_id: str) -> WithdrawalRequestRecord | None:
        request = await self.repository.get(request_id)
        return self._to_record(request) if request else None

    async def process_request(self, request_id: str, status: str) -> WithdrawalRequestRecord:
        """Approve or reject a pending request exactly once."""
        current = await self.repository.get(request_id)
        if current is None or current.status != STATUS_PENDING:
            raise NotFoundOrAlreadyProcessedError("Request not found or already processed.")

        if status == STATUS_APPROVED:
            return await self._approve(self._to_record(current))
        if status == STATUS_REJECTED:
            return await self._reject(request_id)
        raise InvalidStatusError("Invalid status update.")

    async def pending_totals(self) -> dict[str, tuple[int, int]]:
        return await self.repository.pending_totals()

    async def _approve(self, request: WithdrawalRequestRecord) -> WithdrawalRequestRecord:
        async with self.repository.atomic():
            claimed = await self.repository.transition(
                request.id,
                expected_status=STATUS_PENDING,
                new_status=STATUS_APPROVED,
                processed_at=datetime.now(timezone.utc),
            )
            if claimed is None:
                raise NotFoundOrAlreadyProcessedError("Request not found or already processed.")
            try:
                await self.wallets.debit_for_withdrawal(
                    faculty_id=request.faculty_id,
                    currency=request.currency,
                    amount_cents=request.amount_cents,
                    withdrawal_id=request.id,
                )
            except WalletDebitRejectedError as exc:
                logger.warning("Approval of withdrawal %s blocked: %s", request.id, exc)
                raise InsufficientWalletBalanceError("Wallet balance is insufficient. Cannot approve.") from exc
            approved = self._to_record(claimed)

        logger.info("Withdrawal request %s approved", request.id)
        return approved

    async def _reject(self, request_id: str) -> WithdrawalRequestRecord:
        rejected = await self.repository.transition(
            request_id,
            expected_status=STATUS_PENDING,
            new_status=STATUS_REJECTED,
            processed_at=datetime.now(timezone.utc),
        )
        if rejected is None:
            raise NotFoundOrAlreadyProcessedError("Request not found or already processed.")
        logger.info("Withdrawal request %s rejected", request_id)
        return self._to_record(rejected)

    def _validate_request(
        self,
        amount: Decimal | int | str,
        currency: str,
        payment_details: Optional[Mapping[str, Any]],
    ) -> tuple[int, str, dict[str, Any]]:
        try:
            amount_cents = to_cents(amount)
        except ValueError as exc:
            raise InvalidRequestError("Invalid request data.") from exc
        if amount_cents <= 0 or not payment_details or not isinstance(payment_details, Mapping):
            raise InvalidRequestError("Invalid request data.")

        code = (currency or "").upper()
        if code not in self.currencies:
            raise InvalidRequestError(f"Unsupported currency: {currency}")

        try:
            details = payment_details_adapter.validate_python(dict(payment_details))
        except ValidationError as exc:
            raise InvalidRequestError(_describe(exc.errors())) from exc
        return amount_cents, code, details.model_dump(mode="json", exclude_none=True)

    @staticmethod
    def _to_record(model: WithdrawalModel) -> WithdrawalRequestRecord:
        return WithdrawalRequestRecord(
            id=model.id,
            faculty_id=model.faculty_id,
            amount_cents=model.amount_cents,
            currency=model.currency,
            status=model.status,
            payment_details=dict(model.payment_details or {}),
            created_at=model.created_at,
            updated_at=model.updated_at,
            processed_at=model.processed_at,
        )

    @staticmethod
    def _to_identity(model: AccountModel) -> FacultyIdentity:
        return FacultyIdentity(
            id=model.id,
            username=model.username,
            full_name=model.full_name,
            email=model.email,
            profile_image=model.profile_image,
        )


def _describe(errors: Iterable[Mapping[str, Any]]) -> str:
    parts = []
    for error in errors:
        location = ".".join(str(item) for item in error.get("loc", ()))
        parts.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return "Invalid payment details: " + "; ".join(parts)
