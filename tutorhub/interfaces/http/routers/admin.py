"""Administrative endpoints: withdrawal review, platform fee, stats and accounts."""
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from tutorhub.core.money import from_cents
from tutorhub.core.security import get_current_admin
from tutorhub.interfaces.http.deps import get_db_session, get_payment_gateway
from tutorhub.interfaces.http.serializers import pending_to_response
from tutorhub.modules.accounts import (
    Account as AccountDomain,
    AccountAlreadyExistsError,
    AccountCreateInput,
    AccountNotFoundError,
    AccountService,
    AccountUpdateInput,
    InvalidRoleError,
    UNSET,
)
from tutorhub.modules.bookings import BookingService, PaymentGateway
from tutorhub.modules.platform_settings import InvalidPlatformFeeError, PlatformSettingService
from tutorhub.modules.withdrawals import (
    InsufficientWalletBalanceError,
    InvalidStatusError,
    NotFoundOrAlreadyProcessedError,
    WithdrawalService,
)
from tutorhub.schemas import (
    AccountCreate,
    AccountResponse,
    AccountUpdate,
    AdminStatsResponse,
    FacultyDetailsResponse,
    MessageResponse,
    MoneyAmount,
    MonthlyCount,
    PendingTotal,
    PendingWithdrawalResponse,
    PlatformFeeResponse,
    PlatformFeeUpdate,
    WeekdayCount,
    WithdrawalProcessRequest,
)

router = APIRouter()


@router.get("/withdrawals", response_model=List[PendingWithdrawalResponse])
async def list_pending_withdrawals(
    _: AccountDomain = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db_session),
) -> List[PendingWithdrawalResponse]:
    withdrawal_service = WithdrawalService.with_session(db)
    pending = await withdrawal_service.list_pending()
    return [pending_to_response(item) for item in pending]


@router.put("/withdrawals/{request_id}", response_model=MessageResponse)
async def process_withdrawal(
    request_id: str,
    payload: WithdrawalProcessRequest,
    _: AccountDomain = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    withdrawal_service = WithdrawalService.with_session(db)
    try:
        record = await withdrawal_service.process_request(request_id, payload.status)
    except NotFoundOrAlreadyProcessedError as exc:
        await db.rollback()
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except (InsufficientWalletBalanceError, InvalidStatusError) as exc:
        await db.rollback()
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    await db.commit()
    return MessageResponse(message=f"Request has been {record.status}.")


@router.get("/settings/platform-fee", response_model=PlatformFeeResponse)
async def get_platform_fee(
    _: AccountDomain = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db_session),
) -> PlatformFeeResponse:
    platform_service = PlatformSettingService.with_session(db)
    return PlatformFeeResponse(platform_fee_percentage=await platform_service.get_platform_fee())


@router.put("/settings/platform-fee", response_model=PlatformFeeResponse)
async def update_platform_fee(
    payload: PlatformFeeUpdate,
    _: AccountDomain = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db_session),
) -> PlatformFeeResponse:
    platform_service = PlatformSettingService.with_session(db)
    try:
        fee = await platform_service.set_platform_fee(payload.percentage)
    except InvalidPlatformFeeError as exc:
        await db.rollback()
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    await db.commit()
    return PlatformFeeResponse(platform_fee_percentage=fee)


@router.get("/stats", response_model=AdminStatsResponse)
async def get_stats(
    _: AccountDomain = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db_session),
    gateway: PaymentGateway = Depends(get_payment_gateway),
) -> AdminStatsResponse:
    account_service = AccountService.with_session(db)
    withdrawal_service = WithdrawalService.with_session(db)
    booking_service = BookingService.with_session(db, gateway)

    role_counts = await account_service.count_by_role()
    totals = await withdrawal_service.pending_totals()
    revenue = await booking_service.revenue_by_currency()
    weekly = await booking_service.weekly_booking_counts()
    signups = await account_service.monthly_signups("student")
    return AdminStatsResponse(
        faculty_total=role_counts.get("faculty", 0),
        student_total=role_counts.get("student", 0),
        completed_bookings=await booking_service.completed_booking_count(),
        pending_withdrawals=sum(count for count, _ in totals.values()),
        pending_withdrawal_totals=[
            PendingTotal(currency=currency, count=count, amount=from_cents(cents))
            for currency, (count, cents) in sorted(totals.items())
        ],
        revenue_by_currency=[MoneyAmount(currency=item.currency, amount=item.total) for item in revenue],
        weekly_bookings=[WeekdayCount(day=day, count=count) for day, count in sorted(weekly.items())],
        monthly_student_signups=[MonthlyCount(month=month, count=count) for month, count in sorted(signups.items())],
    )


@router.get("/accounts", response_model=List[AccountResponse])
async def list_accounts(
    role: Optional[str] = Query(None),
    _: AccountDomain = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db_session),
):
    account_service = AccountService.with_session(db)
    accounts = await account_service.list_accounts(role)
    return [AccountResponse.model_validate(account) for account in accounts]


@router.post("/accounts", response_model=AccountResponse, status_code=status.HTTP_201_CREATED)
async def create_account(
    payload: AccountCreate,
    admin: AccountDomain = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db_session),
):
    account_service = AccountService.with_session(db)
    try:
        account = await account_service.create_account(
            AccountCreateInput(
                username=payload.username,
                password=payload.password,
                role=payload.role,
                full_name=payload.full_name,
                email=payload.email,
                profile_image=payload.profile_image,
            ),
            allow_admin_roles=admin.is_super_admin(),
        )
    except (AccountAlreadyExistsError, InvalidRoleError) as exc:
        await db.rollback()
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    await db.commit()
    return AccountResponse.model_validate(account)


@router.patch("/accounts/{account_id}", response_model=AccountResponse)
async def update_account(
    account_id: str,
    payload: AccountUpdate,
    admin: AccountDomain = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db_session),
):
    fields = payload.model_dump(exclude_unset=True)
    update = AccountUpdateInput(
        full_name=fields.get("full_name", UNSET),
        email=fields.get("email", UNSET),
        profile_image=fields.get("profile_image", UNSET),
        is_active=fields.get("is_active", UNSET),
        role=fields.get("role", UNSET),
        password=fields.get("password", UNSET),
    )
    account_service = AccountService.with_session(db)
    try:
        account = await account_service.update_account(
            account_id, update, allow_admin_roles=admin.is_super_admin()
        )
    except AccountNotFoundError as exc:
        await db.rollback()
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Account not found") from exc
    except InvalidRoleError as exc:
        await db.rollback()
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    await db.commit()
    return AccountResponse.model_validate(account)


@router.get("/faculty/{faculty_id}/details", response_model=FacultyDetailsResponse)
async def get_faculty_details(
    faculty_id: str,
    _: AccountDomain = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db_session),
    gateway: PaymentGateway = Depends(get_payment_gateway),
):
    account_service = AccountService.with_session(db)
    booking_service = BookingService.with_session(db, gateway)
    try:
        faculty = await account_service.get_faculty(faculty_id, active_only=False)
    except AccountNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Faculty not found") from exc

    details = AccountResponse.model_validate(faculty).model_dump()
    return FacultyDetailsResponse(**details, total_bookings=await booking_service.count_for_faculty(faculty.id))


@router.delete("/faculty/{faculty_id}", response_model=MessageResponse)
async def delete_faculty(
    faculty_id: str,
    _: AccountDomain = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    account_service = AccountService.with_session(db)
    try:
        await account_service.deactivate_faculty(faculty_id)
    except AccountNotFoundError as exc:
        await db.rollback()
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Faculty not found") from exc

    await db.commit()
    return MessageResponse(message="Faculty removed successfully")
