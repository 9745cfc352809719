"""Pydantic schemas used across the HTTP interface.

Bodies are camelCase on the wire (``paymentDetails``, ``facultyId``) to match
the web clients; snake_case field names are accepted on input as well.
"""
from datetime import datetime
from decimal import Decimal
from typing import Any, Literal, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TokenData(BaseModel):
    account_id: str
    username: str
    role: str


class LoginRequest(ApiModel):
    username: str = Field(..., min_length=3, max_length=50)
    password: str = Field(..., min_length=6)


class RegisterRequest(ApiModel):
    username: str = Field(..., min_length=3, max_length=50)
    password: str = Field(..., min_length=6)
    role: Literal["student", "faculty"] = "student"
    full_name: Optional[str] = Field(None, max_length=120)
    email: Optional[str] = Field(None, max_length=100)
    profile_image: Optional[str] = Field(None, max_length=500)


class TokenResponse(ApiModel):
    access_token: str
    token_type: str = "bearer"
    account_id: str
    username: str
    role: str


class AccountResponse(ApiModel):
    id: str
    username: str
    role: str
    full_name: Optional[str] = None
    email: Optional[str] = None
    profile_image: Optional[str] = None
    is_active: bool
    created_at: Optional[datetime] = None
    last_login_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class FacultyDetailsResponse(AccountResponse):
    total_bookings: int = 0


class AccountCreate(ApiModel):
    username: str = Field(..., min_length=3, max_length=50)
    password: str = Field(..., min_length=6)
    role: str = "student"
    full_name: Optional[str] = Field(None, max_length=120)
    email: Optional[str] = Field(None, max_length=100)
    profile_image: Optional[str] = Field(None, max_length=500)


class AccountUpdate(ApiModel):
    full_name: Optional[str] = Field(None, max_length=120)
    email: Optional[str] = Field(None, max_length=100)
    profile_image: Optional[str] = Field(None, max_length=500)
    is_active: Optional[bool] = None
    role: Optional[str] = None
    password: Optional[str] = Field(None, min_length=6)


class MessageResponse(ApiModel):
    message: str


class WithdrawalCreateRequest(ApiModel):
    # Range and shape checks happen in the withdrawal service so that they
    # surface as 400 with a message rather than a schema error.
    amount: Any = None
    currency: Optional[str] = None
    payment_details: Any = None


class WithdrawalProcessRequest(ApiModel):
    status: str


class WithdrawalResponse(ApiModel):
    id: str
    faculty_id: str
    amount: Decimal
    currency: str
    status: str
    payment_details: dict[str, Any]
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    processed_at: Optional[datetime] = None


class FacultySummary(ApiModel):
    id: str
    full_name: Optional[str] = None
    email: Optional[str] = None
    profile_image: Optional[str] = None


class PendingWithdrawalResponse(WithdrawalResponse):
    faculty: FacultySummary


class WithdrawalListResponse(ApiModel):
    requests: list[WithdrawalResponse] = Field(default_factory=list)


class MoneyAmount(ApiModel):
    currency: str
    amount: Decimal


class WalletBalanceResponse(MoneyAmount):
    updated_at: Optional[datetime] = None


class WalletResponse(ApiModel):
    balances: list[WalletBalanceResponse] = Field(default_factory=list)


class WalletTransactionResponse(ApiModel):
    id: str
    amount: Decimal
    currency: str
    type: str
    description: Optional[str] = None
    booking_id: Optional[str] = None
    withdrawal_id: Optional[str] = None
    created_at: datetime


class WalletTransactionListResponse(ApiModel):
    transactions: list[WalletTransactionResponse] = Field(default_factory=list)


class BookingCreateRequest(ApiModel):
    faculty_id: str = Field(..., min_length=1)
    topic: str = Field(..., min_length=1, max_length=200)
    price: Decimal
    currency: str = Field(..., min_length=1, max_length=3)


class FreeBookingRequest(ApiModel):
    faculty_id: str = Field(..., min_length=1)
    topic: str = Field(..., min_length=1, max_length=200)
    currency: str = Field(..., min_length=1, max_length=3)


class BookingResponse(ApiModel):
    id: str
    student_id: str
    faculty_id: str
    topic: str
    price: Decimal
    currency: str
    status: str
    payment_status: str
    gateway_order_id: Optional[str] = None
    created_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None


class BookingListResponse(ApiModel):
    bookings: list[BookingResponse] = Field(default_factory=list)


class FreeBookingResponse(ApiModel):
    message: str
    booking: BookingResponse


class CheckoutResponse(ApiModel):
    booking: BookingResponse
    order_id: str
    amount: int = Field(..., description="Order amount in the currency's smallest unit")
    currency: str
    key_id: str


class PaymentVerifyRequest(ApiModel):
    order_id: str = Field(..., validation_alias=AliasChoices("orderId", "order_id", "razorpay_order_id"))
    payment_id: str = Field(..., validation_alias=AliasChoices("paymentId", "payment_id", "razorpay_payment_id"))
    signature: str = Field(..., validation_alias=AliasChoices("signature", "razorpay_signature"))


class PlatformFeeResponse(ApiModel):
    platform_fee_percentage: Decimal


class PlatformFeeUpdate(ApiModel):
    # validated by the platform settings service
    percentage: Any = None


class RecentEarningResponse(ApiModel):
    id: str
    student: str
    topic: str
    earnings: Decimal
    currency: str
    date: Optional[datetime] = None


class FacultyDashboardResponse(ApiModel):
    total_earnings: list[MoneyAmount] = Field(default_factory=list)
    weekly_earnings: list[MoneyAmount] = Field(default_factory=list)
    available_to_withdraw: list[MoneyAmount] = Field(default_factory=list)
    completed_chats: int = 0
    unique_students: int = 0
    recent_chat_earnings: list[RecentEarningResponse] = Field(default_factory=list)


class PendingTotal(MoneyAmount):
    count: int


class WeekdayCount(ApiModel):
    day: int = Field(..., ge=0, le=6, description="0 is Sunday")
    count: int


class MonthlyCount(ApiModel):
    month: str = Field(..., description="YYYY-MM")
    count: int


class AdminStatsResponse(ApiModel):
    faculty_total: int = 0
    student_total: int = 0
    completed_bookings: int = 0
    pending_withdrawals: int = 0
    pending_withdrawal_totals: list[PendingTotal] = Field(default_factory=list)
    revenue_by_currency: list[MoneyAmount] = Field(default_factory=list)
    weekly_bookings: list[WeekdayCount] = Field(default_factory=list)
    monthly_student_signups: list[MonthlyCount] = Field(default_factory=list)
