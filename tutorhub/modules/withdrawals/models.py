"""Domain models for withdrawal requests."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, EmailStr, Field, TypeAdapter

from tutorhub.core.money import from_cents

STATUS_PENDING = "pending"
STATUS_APPROVED = "approved"
STATUS_REJECTED = "rejected"


class BankTransferDetails(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True, str_strip_whitespace=True)

    method: Literal["bank_transfer"] = "bank_transfer"
    account_holder: str = Field(..., min_length=1, max_length=120)
    account_number: str = Field(..., min_length=4, max_length=34)
    bank_name: str = Field(..., min_length=1, max_length=120)
    ifsc_code: Optional[str] = Field(None, max_length=11)
    swift_code: Optional[str] = Field(None, max_length=11)


class PayPalDetails(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True, str_strip_whitespace=True)

    method: Literal["paypal"] = "paypal"
    email: EmailStr


PaymentDetails = Annotated[Union[BankTransferDetails, PayPalDetails], Field(discriminator="method")]
payment_details_adapter: TypeAdapter[PaymentDetails] = TypeAdapter(PaymentDetails)


@dataclass(slots=True)
class WithdrawalRequestRecord:
    id: str
    faculty_id: str
    amount_cents: int
    currency: str
    status: str
    payment_details: dict[str, Any]
    created_at: Optional[datetime]
    updated_at: Optional[datetime] = None
    processed_at: Optional[datetime] = None

    @property
    def amount(self) -> Decimal:
        return from_cents(self.amount_cents)


@dataclass(slots=True)
class FacultyIdentity:
    id: str
    username: str
    full_name: Optional[str]
    email: Optional[str]
    profile_image: Optional[str]


@dataclass(slots=True)
class PendingWithdrawal:
    request: WithdrawalRequestRecord
    faculty: FacultyIdentity
