"""Two admins processing the same request from separate connections."""

import asyncio
from decimal import Decimal

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from tutorhub.db.models import WalletTransaction
from tutorhub.infrastructure.database import Base, build_engine
from tutorhub.modules.wallets import WalletService
from tutorhub.modules.withdrawals import NotFoundOrAlreadyProcessedError, WithdrawalService


@pytest.fixture
async def engine(tmp_path):
    # a real file so each session gets its own connection and SQLite locks apply
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'race.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


async def _attempt(session_factory, request_id, status):
    async with session_factory() as db:
        try:
            record = await WithdrawalService.with_session(db).process_request(request_id, status)
            await db.commit()
            return record
        except (NotFoundOrAlreadyProcessedError, OperationalError) as exc:
            await db.rollback()
            return exc


@pytest.mark.parametrize("statuses", [("approved", "approved"), ("approved", "rejected")])
async def test_concurrent_processing_has_one_winner(session_factory, accounts, fund_wallet, statuses):
    faculty_id = accounts["faculty"].id
    await fund_wallet(faculty_id, "100")
    async with session_factory() as db:
        request = await WithdrawalService.with_session(db).create_request(
            faculty_id=faculty_id,
            amount="60",
            currency="USD",
            payment_details={"method": "paypal", "email": "ada@example.com"},
        )
        await db.commit()

    outcomes = await asyncio.gather(*(_attempt(session_factory, request.id, status) for status in statuses))

    winners = [outcome for outcome in outcomes if not isinstance(outcome, Exception)]
    assert len(winners) == 1
    [winner] = winners

    async with session_factory() as db:
        balance = await WalletService.with_session(db).get_balance(faculty_id, "USD")
        debits = await db.scalar(
            select(func.count(WalletTransaction.id)).where(
                WalletTransaction.faculty_id == faculty_id,
                WalletTransaction.type == "withdrawal",
            )
        )
        stored = await WithdrawalService.with_session(db).list_for_faculty(faculty_id)

    if winner.status == "approved":
        assert debits == 1
        assert balance.amount == Decimal("40.00")
    else:
        assert debits == 0
        assert balance.amount == Decimal("100.00")
    assert [item.status for item in stored] == [winner.status]
