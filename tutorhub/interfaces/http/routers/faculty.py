"""Faculty endpoints: withdrawals, wallet and earnings dashboard."""
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from tutorhub.core.config import get_settings
from tutorhub.core.money import from_cents
from tutorhub.core.security import get_current_faculty
from tutorhub.interfaces.http.deps import get_db_session, get_payment_gateway
from tutorhub.interfaces.http.serializers import (
    balance_to_response,
    booking_to_response,
    earnings_to_amounts,
    withdrawal_to_response,
)
from tutorhub.modules.accounts import Account as AccountDomain
from tutorhub.modules.bookings import BookingService, PaymentGateway
from tutorhub.modules.wallets import WalletService
from tutorhub.modules.withdrawals import (
    InsufficientFundsError,
    InvalidRequestError,
    WithdrawalService,
)
from tutorhub.schemas import (
    BookingListResponse,
    FacultyDashboardResponse,
    MoneyAmount,
    RecentEarningResponse,
    WalletResponse,
    WalletTransactionListResponse,
    WalletTransactionResponse,
    WithdrawalCreateRequest,
    WithdrawalListResponse,
    WithdrawalResponse,
)

router = APIRouter()
settings = get_settings()


@router.post("/withdrawals", response_model=WithdrawalResponse, status_code=status.HTTP_201_CREATED)
async def create_withdrawal(
    payload: WithdrawalCreateRequest,
    faculty: AccountDomain = Depends(get_current_faculty),
    db: AsyncSession = Depends(get_db_session),
) -> WithdrawalResponse:
    withdrawal_service = WithdrawalService.with_session(db)
    try:
        record = await withdrawal_service.create_request(
            faculty_id=faculty.id,
            amount=payload.amount,
            currency=payload.currency,
            payment_details=payload.payment_details,
        )
    except (InvalidRequestError, InsufficientFundsError) as exc:
        await db.rollback()
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    await db.commit()
    return withdrawal_to_response(record)


@router.get("/withdrawals", response_model=WithdrawalListResponse)
async def list_withdrawals(
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    faculty: AccountDomain = Depends(get_current_faculty),
    db: AsyncSession = Depends(get_db_session),
) -> WithdrawalListResponse:
    withdrawal_service = WithdrawalService.with_session(db)
    records = await withdrawal_service.list_for_faculty(faculty.id, limit=limit, offset=offset)
    return WithdrawalListResponse(requests=[withdrawal_to_response(record) for record in records])


@router.get("/wallet", response_model=WalletResponse)
async def get_wallet(
    faculty: AccountDomain = Depends(get_current_faculty),
    db: AsyncSession = Depends(get_db_session),
) -> WalletResponse:
    wallet_service = WalletService.with_session(db)
    balances = await wallet_service.list_balances(faculty.id)
    return WalletResponse(balances=[balance_to_response(balance) for balance in balances])


@router.get("/wallet/transactions", response_model=WalletTransactionListResponse)
async def list_wallet_transactions(
    limit: int = Query(20, ge=1, le=200),
    offset: int = Query(0, ge=0),
    faculty: AccountDomain = Depends(get_current_faculty),
    db: AsyncSession = Depends(get_db_session),
) -> WalletTransactionListResponse:
    wallet_service = WalletService.with_session(db)
    rows = await wallet_service.list_transactions(faculty.id, limit=limit, offset=offset)
    transactions = [
        WalletTransactionResponse(
            id=row.id,
            amount=row.amount,
            currency=row.currency,
            type=row.type,
            description=row.description,
            booking_id=row.booking_id,
            withdrawal_id=row.withdrawal_id,
            created_at=row.created_at,
        )
        for row in rows
    ]
    return WalletTransactionListResponse(transactions=transactions)


@router.get("/dashboard", response_model=FacultyDashboardResponse)
async def get_dashboard(
    faculty: AccountDomain = Depends(get_current_faculty),
    db: AsyncSession = Depends(get_db_session),
    gateway: PaymentGateway = Depends(get_payment_gateway),
) -> FacultyDashboardResponse:
    booking_service = BookingService.with_session(db, gateway)
    dashboard = await booking_service.faculty_dashboard(
        faculty.id,
        weekly_window_days=settings.payouts.weekly_window_days,
        recent_limit=settings.payouts.recent_bookings_limit,
    )
    balances = await booking_service.wallets.list_balances(faculty.id)
    return FacultyDashboardResponse(
        total_earnings=earnings_to_amounts(dashboard.total_earnings),
        weekly_earnings=earnings_to_amounts(dashboard.weekly_earnings),
        available_to_withdraw=[MoneyAmount(currency=item.currency, amount=item.amount) for item in balances],
        completed_chats=dashboard.completed_bookings,
        unique_students=dashboard.unique_students,
        recent_chat_earnings=[
            RecentEarningResponse(
                id=item.booking_id,
                student=item.student_name,
                topic=item.topic,
                earnings=from_cents(item.price_cents),
                currency=item.currency,
                date=item.created_at,
            )
            for item in dashboard.recent_earnings
        ],
    )


@router.get("/bookings", response_model=BookingListResponse)
async def list_bookings(
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    faculty: AccountDomain = Depends(get_current_faculty),
    db: AsyncSession = Depends(get_db_session),
    gateway: PaymentGateway = Depends(get_payment_gateway),
) -> BookingListResponse:
    booking_service = BookingService.with_session(db, gateway)
    bookings = await booking_service.list_for_faculty(faculty.id, limit=limit, offset=offset)
    return BookingListResponse(bookings=[booking_to_response(booking) for booking in bookings])
