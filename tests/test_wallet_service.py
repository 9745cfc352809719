import pytest

from tutorhub.modules.wallets import InvalidWalletAmountError, WalletDebitRejectedError, WalletService


async def test_missing_wallet_reads_as_zero(session, accounts):
    wallets = WalletService.with_session(session)

    balance = await wallets.get_balance(accounts["faculty"].id, "USD")

    assert balance.balance_cents == 0
    assert await wallets.list_balances(accounts["faculty"].id) == []


async def test_credits_accumulate_and_match_the_ledger(session, accounts):
    faculty_id = accounts["faculty"].id
    wallets = WalletService.with_session(session)

    await wallets.credit_earnings(faculty_id=faculty_id, currency="USD", amount_cents=4500)
    await wallets.credit_earnings(faculty_id=faculty_id, currency="USD", amount_cents=1050)
    await wallets.credit_earnings(faculty_id=faculty_id, currency="INR", amount_cents=90000)

    usd = await wallets.get_balance(faculty_id, "USD")
    assert usd.balance_cents == 5550
    assert await wallets.ledger_total(faculty_id, "USD") == 5550
    assert [b.currency for b in await wallets.list_balances(faculty_id)] == ["INR", "USD"]


async def test_debit_writes_negative_ledger_entry(session, accounts):
    faculty_id = accounts["faculty"].id
    wallets = WalletService.with_session(session)
    await wallets.credit_earnings(faculty_id=faculty_id, currency="USD", amount_cents=10000)

    balance = await wallets.debit_for_withdrawal(
        faculty_id=faculty_id, currency="USD", amount_cents=2500, withdrawal_id=None
    )

    assert balance.balance_cents == 7500
    entries = await wallets.list_transactions(faculty_id)
    assert sorted(entry.amount_cents for entry in entries) == [-2500, 10000]
    assert {entry.type for entry in entries} == {"earning", "withdrawal"}
    assert await wallets.ledger_total(faculty_id, "USD") == 7500


async def test_debit_refuses_to_overdraw(session, accounts):
    faculty_id = accounts["faculty"].id
    wallets = WalletService.with_session(session)
    await wallets.credit_earnings(faculty_id=faculty_id, currency="USD", amount_cents=1000)

    with pytest.raises(WalletDebitRejectedError):
        await wallets.debit_for_withdrawal(faculty_id=faculty_id, currency="USD", amount_cents=1001, withdrawal_id=None)
    with pytest.raises(WalletDebitRejectedError):
        await wallets.debit_for_withdrawal(faculty_id=faculty_id, currency="INR", amount_cents=1, withdrawal_id=None)

    assert (await wallets.get_balance(faculty_id, "USD")).balance_cents == 1000
    assert await wallets.ledger_total(faculty_id, "USD") == 1000


async def test_amounts_must_be_positive(session, accounts):
    wallets = WalletService.with_session(session)

    with pytest.raises(InvalidWalletAmountError):
        await wallets.credit_earnings(faculty_id=accounts["faculty"].id, currency="USD", amount_cents=-1)
    with pytest.raises(InvalidWalletAmountError):
        await wallets.debit_for_withdrawal(
            faculty_id=accounts["faculty"].id, currency="USD", amount_cents=0, withdrawal_id=None
        )
