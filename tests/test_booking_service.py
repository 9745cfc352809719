from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from tutorhub.modules.bookings import (
    BookingAlreadyExistsError,
    BookingAlreadySettledError,
    BookingNotFoundError,
    BookingService,
    FacultyNotFoundError,
    InvalidBookingError,
    InvalidPaymentSignatureError,
)
from tutorhub.modules.platform_settings import PlatformSettingService
from tutorhub.modules.wallets import WalletService


async def _paid_booking(service, gateway, accounts, price="100", currency="USD", topic="Calculus"):
    checkout = await service.create_booking(
        student_id=accounts["student"].id,
        faculty_id=accounts["faculty"].id,
        topic=topic,
        price=price,
        currency=currency,
    )
    order_id = checkout.booking.gateway_order_id
    payment_id = f"pay_{order_id}"
    return await service.verify_payment(
        order_id=order_id,
        payment_id=payment_id,
        signature=gateway.sign(order_id, payment_id),
        student_id=accounts["student"].id,
    )


async def test_checkout_opens_gateway_order(session, accounts, gateway):
    service = BookingService.with_session(session, gateway)

    checkout = await service.create_booking(
        student_id=accounts["student"].id,
        faculty_id=accounts["faculty"].id,
        topic="Linear algebra",
        price="49.99",
        currency="usd",
    )

    assert checkout.gateway_key_id == "rzp_test_key"
    assert checkout.booking.status == "pending"
    assert checkout.booking.payment_status == "pending"
    assert checkout.booking.price == Decimal("49.99")
    assert gateway.orders[0].amount_cents == 4999
    assert gateway.orders[0].currency == "USD"
    assert checkout.booking.gateway_order_id == gateway.orders[0].id


async def test_verified_payment_credits_faculty_net_of_default_fee(session, accounts, gateway):
    service = BookingService.with_session(session, gateway)

    booking = await _paid_booking(service, gateway, accounts, price="100")

    assert booking.status == "completed"
    assert booking.payment_status == "successful"
    assert booking.completed_at is not None
    wallets = WalletService.with_session(session)
    assert (await wallets.get_balance(accounts["faculty"].id, "USD")).balance_cents == 9000
    assert await wallets.ledger_total(accounts["faculty"].id, "USD") == 9000


async def test_credit_uses_current_platform_fee_and_rounds_down(session, accounts, gateway):
    await PlatformSettingService.with_session(session).set_platform_fee("12.5")
    service = BookingService.with_session(session, gateway)

    await _paid_booking(service, gateway, accounts, price="10.01")

    balance = await WalletService.with_session(session).get_balance(accounts["faculty"].id, "USD")
    # 1001 * 0.875 = 875.875
    assert balance.balance_cents == 875


async def test_second_verification_does_not_credit_again(session, accounts, gateway):
    service = BookingService.with_session(session, gateway)
    booking = await _paid_booking(service, gateway, accounts, price="20")
    order_id = booking.gateway_order_id

    with pytest.raises(BookingAlreadySettledError):
        await service.verify_payment(
            order_id=order_id,
            payment_id="pay_again",
            signature=gateway.sign(order_id, "pay_again"),
        )

    balance = await WalletService.with_session(session).get_balance(accounts["faculty"].id, "USD")
    assert balance.balance_cents == 1800


async def test_bad_signature_leaves_booking_pending(session, accounts, gateway):
    service = BookingService.with_session(session, gateway)
    checkout = await service.create_booking(
        student_id=accounts["student"].id,
        faculty_id=accounts["faculty"].id,
        topic="Physics",
        price="30",
        currency="USD",
    )
    order_id = checkout.booking.gateway_order_id

    with pytest.raises(InvalidPaymentSignatureError):
        await service.verify_payment(order_id=order_id, payment_id="pay_1", signature="forged")

    bookings = await service.list_for_student(accounts["student"].id)
    assert [b.status for b in bookings] == ["pending"]
    assert (await WalletService.with_session(session).get_balance(accounts["faculty"].id, "USD")).balance_cents == 0

    completed = await service.verify_payment(
        order_id=order_id, payment_id="pay_1", signature=gateway.sign(order_id, "pay_1")
    )
    assert completed.status == "completed"


async def test_verification_is_scoped_to_the_booking_student(session, accounts, gateway):
    service = BookingService.with_session(session, gateway)
    checkout = await service.create_booking(
        student_id=accounts["student"].id,
        faculty_id=accounts["faculty"].id,
        topic="Chemistry",
        price="15",
        currency="USD",
    )
    order_id = checkout.booking.gateway_order_id

    with pytest.raises(BookingNotFoundError):
        await service.verify_payment(
            order_id=order_id,
            payment_id="pay_x",
            signature=gateway.sign(order_id, "pay_x"),
            student_id=accounts["other_faculty"].id,
        )
    with pytest.raises(BookingNotFoundError):
        await service.verify_payment(order_id="order_missing", payment_id="pay_x", signature="sig")


@pytest.mark.parametrize("price, currency", [("0", "USD"), ("-1", "USD"), ("1.999", "USD"), ("10", "EUR")])
async def test_invalid_checkout_input(session, accounts, gateway, price, currency):
    service = BookingService.with_session(session, gateway)

    with pytest.raises(InvalidBookingError):
        await service.create_booking(
            student_id=accounts["student"].id,
            faculty_id=accounts["faculty"].id,
            topic="Biology",
            price=price,
            currency=currency,
        )
    assert gateway.orders == []


async def test_checkout_requires_an_active_faculty(session, accounts, gateway):
    service = BookingService.with_session(session, gateway)

    with pytest.raises(FacultyNotFoundError):
        await service.create_booking(
            student_id=accounts["student"].id,
            faculty_id=accounts["student"].id,
            topic="Biology",
            price="10",
            currency="USD",
        )


async def test_faculty_dashboard_aggregates_completed_bookings(session, accounts, gateway):
    service = BookingService.with_session(session, gateway)
    await _paid_booking(service, gateway, accounts, price="100", topic="Calculus")
    await _paid_booking(service, gateway, accounts, price="50", topic="Statistics")
    await service.create_booking(
        student_id=accounts["student"].id,
        faculty_id=accounts["faculty"].id,
        topic="Unpaid",
        price="999",
        currency="USD",
    )

    dashboard = await service.faculty_dashboard(accounts["faculty"].id)

    assert [(item.currency, item.total_cents) for item in dashboard.total_earnings] == [("USD", 15000)]
    assert [(item.currency, item.total_cents) for item in dashboard.weekly_earnings] == [("USD", 15000)]
    assert dashboard.completed_bookings == 2
    assert dashboard.unique_students == 1
    assert {item.topic for item in dashboard.recent_earnings} == {"Calculus", "Statistics"}
    assert {item.student_name for item in dashboard.recent_earnings} == {"Bob Student"}


async def test_weekly_earnings_only_count_recent_completions(session, accounts, gateway):
    service = BookingService.with_session(session, gateway)
    await _paid_booking(service, gateway, accounts, price="100")

    later = datetime.now(timezone.utc) + timedelta(days=30)
    dashboard = await service.faculty_dashboard(accounts["faculty"].id, now=later)

    assert dashboard.weekly_earnings == []
    assert dashboard.total_earnings[0].total_cents == 10000
    assert await service.completed_booking_count() == 1


async def test_free_booking_completes_without_credit(session, accounts, gateway):
    service = BookingService.with_session(session, gateway)
    student_id, faculty_id = accounts["student"].id, accounts["faculty"].id

    booking = await service.create_free_booking(
        student_id=student_id, faculty_id=faculty_id, topic="Intro call", currency="inr"
    )

    assert booking.status == "completed"
    assert booking.payment_status == "free"
    assert booking.price_cents == 0
    assert booking.currency == "INR"
    assert booking.completed_at is not None
    assert gateway.orders == []
    assert await WalletService.with_session(session).list_balances(faculty_id) == []

    with pytest.raises(BookingAlreadyExistsError):
        await service.create_free_booking(
            student_id=student_id, faculty_id=faculty_id, topic="Intro call", currency="INR"
        )
    with pytest.raises(FacultyNotFoundError):
        await service.create_free_booking(
            student_id=student_id, faculty_id=student_id, topic="Intro call", currency="INR"
        )
    with pytest.raises(InvalidBookingError):
        await service.create_free_booking(
            student_id=student_id, faculty_id=faculty_id, topic="Another", currency="EUR"
        )


async def test_platform_revenue_and_weekday_counts(session, accounts, gateway):
    service = BookingService.with_session(session, gateway)
    await _paid_booking(service, gateway, accounts, price="100", topic="Calculus")
    await _paid_booking(service, gateway, accounts, price="12.50", topic="Statistics")
    await _paid_booking(service, gateway, accounts, price="700", currency="INR", topic="Physics")
    await service.create_free_booking(
        student_id=accounts["student"].id, faculty_id=accounts["other_faculty"].id, topic="Intro", currency="USD"
    )

    revenue = await service.revenue_by_currency()
    assert [(item.currency, item.total_cents) for item in revenue] == [("INR", 70000), ("USD", 11250)]
    assert await service.count_for_faculty(accounts["faculty"].id) == 3
    assert await service.count_for_faculty(accounts["other_faculty"].id) == 1

    today = int(datetime.now(timezone.utc).strftime("%w"))
    assert await service.weekly_booking_counts() == {today: 4}
    later = datetime.now(timezone.utc) + timedelta(days=30)
    assert await service.weekly_booking_counts(now=later) == {}
