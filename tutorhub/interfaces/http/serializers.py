"""Domain record to response schema conversions shared by routers."""
from collections.abc import Iterable

from tutorhub.core.money import from_cents
from tutorhub.modules.bookings import Booking, EarningsSummary
from tutorhub.modules.wallets import WalletBalance
from tutorhub.modules.withdrawals import PendingWithdrawal, WithdrawalRequestRecord
from tutorhub.schemas import (
    BookingResponse,
    FacultySummary,
    MoneyAmount,
    PendingWithdrawalResponse,
    WalletBalanceResponse,
    WithdrawalResponse,
)


def withdrawal_to_response(record: WithdrawalRequestRecord) -> WithdrawalResponse:
    return WithdrawalResponse(
        id=record.id,
        faculty_id=record.faculty_id,
        amount=record.amount,
        currency=record.currency,
        status=record.status,
        payment_details=record.payment_details,
        created_at=record.created_at,
        updated_at=record.updated_at,
        processed_at=record.processed_at,
    )


def pending_to_response(item: PendingWithdrawal) -> PendingWithdrawalResponse:
    base = withdrawal_to_response(item.request)
    return PendingWithdrawalResponse(
        **base.model_dump(),
        faculty=FacultySummary(
            id=item.faculty.id,
            full_name=item.faculty.full_name or item.faculty.username,
            email=item.faculty.email,
            profile_image=item.faculty.profile_image,
        ),
    )


def booking_to_response(booking: Booking) -> BookingResponse:
    return BookingResponse(
        id=booking.id,
        student_id=booking.student_id,
        faculty_id=booking.faculty_id,
        topic=booking.topic,
        price=booking.price,
        currency=booking.currency,
        status=booking.status,
        payment_status=booking.payment_status,
        gateway_order_id=booking.gateway_order_id,
        created_at=booking.created_at,
        completed_at=booking.completed_at,
    )


def balance_to_response(balance: WalletBalance) -> WalletBalanceResponse:
    return WalletBalanceResponse(currency=balance.currency, amount=balance.amount, updated_at=balance.updated_at)


def earnings_to_amounts(summaries: Iterable[EarningsSummary]) -> list[MoneyAmount]:
    return [MoneyAmount(currency=item.currency, amount=from_cents(item.total_cents)) for item in summaries]
