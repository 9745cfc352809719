from decimal import Decimal

import pytest

from tutorhub.db.models import WithdrawalRequest
from tutorhub.infrastructure.database.repositories import SqlWithdrawalRepository
from tutorhub.modules.wallets import WalletService
from tutorhub.modules.withdrawals import (
    InsufficientFundsError,
    InsufficientWalletBalanceError,
    InvalidRequestError,
    InvalidStatusError,
    NotFoundOrAlreadyProcessedError,
    WithdrawalService,
)

PAYPAL = {"method": "paypal", "email": "ada@example.com"}
BANK = {
    "method": "bank_transfer",
    "account_holder": "Ada Lovelace",
    "account_number": "000123456789",
    "bank_name": "Analytical Bank",
    "ifsc_code": "ANLY0001234",
}


async def _balance(session, faculty_id, currency="USD") -> Decimal:
    return (await WalletService.with_session(session).get_balance(faculty_id, currency)).amount


class StaleReadRepository(SqlWithdrawalRepository):
    """Returns the request as it looked before another admin processed it."""

    def __init__(self, session, snapshot: WithdrawalRequest) -> None:
        super().__init__(session)
        self.snapshot = snapshot

    async def get(self, request_id):
        return self.snapshot


def _pending_snapshot(record) -> WithdrawalRequest:
    return WithdrawalRequest(
        id=record.id,
        faculty_id=record.faculty_id,
        amount_cents=record.amount_cents,
        currency=record.currency,
        status="pending",
        payment_details=record.payment_details,
    )


async def test_create_then_approve_debits_wallet(session, accounts, fund_wallet):
    faculty = accounts["faculty"]
    await fund_wallet(faculty.id, "100")
    service = WithdrawalService.with_session(session)

    request = await service.create_request(faculty_id=faculty.id, amount="50", currency="USD", payment_details=PAYPAL)
    assert request.status == "pending"
    assert request.amount == Decimal("50.00")
    # creation only checks the balance
    assert await _balance(session, faculty.id) == Decimal("100.00")

    approved = await service.process_request(request.id, "approved")

    assert approved.status == "approved"
    assert approved.processed_at is not None
    assert await _balance(session, faculty.id) == Decimal("50.00")


async def test_create_rejects_amount_above_balance(session, accounts, fund_wallet):
    faculty = accounts["faculty"]
    await fund_wallet(faculty.id, "100")
    service = WithdrawalService.with_session(session)

    with pytest.raises(InsufficientFundsError):
        await service.create_request(faculty_id=faculty.id, amount="150", currency="USD", payment_details=PAYPAL)

    assert await service.list_for_faculty(faculty.id) == []


async def test_second_approval_blocked_when_wallet_no_longer_covers_it(session, accounts, fund_wallet):
    faculty = accounts["faculty"]
    await fund_wallet(faculty.id, "100")
    service = WithdrawalService.with_session(session)
    first = await service.create_request(faculty_id=faculty.id, amount="60", currency="USD", payment_details=PAYPAL)
    second = await service.create_request(faculty_id=faculty.id, amount="60", currency="USD", payment_details=BANK)

    await service.process_request(first.id, "approved")
    assert await _balance(session, faculty.id) == Decimal("40.00")

    with pytest.raises(InsufficientWalletBalanceError):
        await service.process_request(second.id, "approved")

    assert await _balance(session, faculty.id) == Decimal("40.00")
    assert (await service.get_request(second.id)).status == "pending"


async def test_reject_leaves_wallet_untouched(session, accounts, fund_wallet):
    faculty = accounts["faculty"]
    await fund_wallet(faculty.id, "100")
    service = WithdrawalService.with_session(session)
    request = await service.create_request(faculty_id=faculty.id, amount="50", currency="USD", payment_details=PAYPAL)

    rejected = await service.process_request(request.id, "rejected")

    assert rejected.status == "rejected"
    assert await _balance(session, faculty.id) == Decimal("100.00")


@pytest.mark.parametrize("first, second", [("approved", "approved"), ("approved", "rejected"), ("rejected", "approved")])
async def test_processed_request_cannot_be_processed_again(session, accounts, fund_wallet, first, second):
    faculty = accounts["faculty"]
    await fund_wallet(faculty.id, "100")
    service = WithdrawalService.with_session(session)
    request = await service.create_request(faculty_id=faculty.id, amount="30", currency="USD", payment_details=PAYPAL)

    await service.process_request(request.id, first)
    balance_after_first = await _balance(session, faculty.id)

    with pytest.raises(NotFoundOrAlreadyProcessedError):
        await service.process_request(request.id, second)

    assert (await service.get_request(request.id)).status == first
    assert await _balance(session, faculty.id) == balance_after_first


async def test_stale_read_cannot_approve_twice(session, accounts, fund_wallet):
    faculty = accounts["faculty"]
    await fund_wallet(faculty.id, "100")
    service = WithdrawalService.with_session(session)
    request = await service.create_request(faculty_id=faculty.id, amount="60", currency="USD", payment_details=PAYPAL)
    snapshot = _pending_snapshot(request)

    await service.process_request(request.id, "approved")

    wallets = WalletService.with_session(session)
    racing = WithdrawalService(StaleReadRepository(session, snapshot), wallets)
    with pytest.raises(NotFoundOrAlreadyProcessedError):
        await racing.process_request(request.id, "approved")

    assert await _balance(session, faculty.id) == Decimal("40.00")
    assert await wallets.ledger_total(faculty.id, "USD") == 4000


async def test_stale_read_cannot_reject_an_approved_request(session, accounts, fund_wallet):
    faculty = accounts["faculty"]
    await fund_wallet(faculty.id, "100")
    service = WithdrawalService.with_session(session)
    request = await service.create_request(faculty_id=faculty.id, amount="60", currency="USD", payment_details=PAYPAL)
    snapshot = _pending_snapshot(request)
    await service.process_request(request.id, "approved")

    racing = WithdrawalService(StaleReadRepository(session, snapshot), WalletService.with_session(session))
    with pytest.raises(NotFoundOrAlreadyProcessedError):
        await racing.process_request(request.id, "rejected")

    assert (await service.get_request(request.id)).status == "approved"


async def test_invalid_status_keeps_request_pending(session, accounts, fund_wallet):
    faculty = accounts["faculty"]
    await fund_wallet(faculty.id, "100")
    service = WithdrawalService.with_session(session)
    request = await service.create_request(faculty_id=faculty.id, amount="10", currency="USD", payment_details=PAYPAL)

    with pytest.raises(InvalidStatusError):
        await service.process_request(request.id, "cancelled")

    assert (await service.get_request(request.id)).status == "pending"


async def test_unknown_request_is_not_found(session, accounts):
    service = WithdrawalService.with_session(session)

    with pytest.raises(NotFoundOrAlreadyProcessedError):
        await service.process_request("does-not-exist", "approved")


@pytest.mark.parametrize(
    "amount, currency, details",
    [
        ("0", "USD", PAYPAL),
        ("-5", "USD", PAYPAL),
        ("abc", "USD", PAYPAL),
        ("10.005", "USD", PAYPAL),
        ("Infinity", "USD", PAYPAL),
        ("10", "EUR", PAYPAL),
        ("10", "USD", None),
        ("10", "USD", {}),
        ("10", "USD", "paypal"),
        ("10", "USD", {"method": "paypal", "email": "not-an-email"}),
        ("10", "USD", {"method": "bank_transfer", "account_holder": "Ada", "bank_name": "Bank"}),
        ("10", "USD", {"method": "cheque", "payee": "Ada"}),
        ("10", "USD", {"email": "ada@example.com"}),
    ],
)
async def test_invalid_request_data_is_rejected(session, accounts, fund_wallet, amount, currency, details):
    faculty = accounts["faculty"]
    await fund_wallet(faculty.id, "100")
    service = WithdrawalService.with_session(session)

    with pytest.raises(InvalidRequestError):
        await service.create_request(faculty_id=faculty.id, amount=amount, currency=currency, payment_details=details)

    assert await service.list_for_faculty(faculty.id) == []


async def test_payment_details_are_normalised(session, accounts, fund_wallet):
    faculty = accounts["faculty"]
    await fund_wallet(faculty.id, "100")
    service = WithdrawalService.with_session(session)

    request = await service.create_request(
        faculty_id=faculty.id,
        amount=Decimal("25.50"),
        currency="usd",
        payment_details={**BANK, "account_holder": "  Ada Lovelace  "},
    )

    assert request.currency == "USD"
    assert request.amount_cents == 2550
    assert request.payment_details["method"] == "bank_transfer"
    assert request.payment_details["account_holder"] == "Ada Lovelace"
    assert "swift_code" not in request.payment_details


async def test_balance_is_checked_per_currency(session, accounts, fund_wallet):
    faculty = accounts["faculty"]
    await fund_wallet(faculty.id, "5000", currency="INR")
    service = WithdrawalService.with_session(session)

    with pytest.raises(InsufficientFundsError):
        await service.create_request(faculty_id=faculty.id, amount="10", currency="USD", payment_details=PAYPAL)

    request = await service.create_request(faculty_id=faculty.id, amount="1000", currency="INR", payment_details=PAYPAL)
    assert request.currency == "INR"


async def test_pending_list_carries_faculty_identity(session, accounts, fund_wallet):
    faculty = accounts["faculty"]
    other = accounts["other_faculty"]
    await fund_wallet(faculty.id, "100")
    await fund_wallet(other.id, "100")
    service = WithdrawalService.with_session(session)
    mine = await service.create_request(faculty_id=faculty.id, amount="10", currency="USD", payment_details=PAYPAL)
    theirs = await service.create_request(faculty_id=other.id, amount="20", currency="USD", payment_details=PAYPAL)
    done = await service.create_request(faculty_id=faculty.id, amount="5", currency="USD", payment_details=PAYPAL)
    await service.process_request(done.id, "rejected")

    pending = await service.list_pending()

    by_id = {item.request.id: item for item in pending}
    assert set(by_id) == {mine.id, theirs.id}
    assert by_id[mine.id].faculty.full_name == "Ada Lovelace"
    assert by_id[theirs.id].faculty.username == "prof_alan"
    assert await service.pending_totals() == {"USD": (2, 3000)}
