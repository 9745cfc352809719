"""Withdrawal request lifecycle."""

from .exceptions import (
    InsufficientFundsError,
    InsufficientWalletBalanceError,
    InvalidRequestError,
    InvalidStatusError,
    NotFoundOrAlreadyProcessedError,
    WithdrawalError,
)
from .models import (
    STATUS_APPROVED,
    STATUS_PENDING,
    STATUS_REJECTED,
    BankTransferDetails,
    FacultyIdentity,
    PaymentDetails,
    PayPalDetails,
    PendingWithdrawal,
    WithdrawalRequestRecord,
)
from .service import WithdrawalService

__all__ = [
    "STATUS_APPROVED",
    "STATUS_PENDING",
    "STATUS_REJECTED",
    "BankTransferDetails",
    "FacultyIdentity",
    "InsufficientFundsError",
    "InsufficientWalletBalanceError",
    "InvalidRequestError",
    "InvalidStatusError",
    "NotFoundOrAlreadyProcessedError",
    "PaymentDetails",
    "PayPalDetails",
    "PendingWithdrawal",
    "WithdrawalError",
    "WithdrawalRequestRecord",
    "WithdrawalService",
]
