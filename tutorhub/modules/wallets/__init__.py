"""Wallet domain exports"""

from .exceptions import InvalidWalletAmountError, WalletDebitRejectedError, WalletError
from .models import TRANSACTION_EARNING, TRANSACTION_WITHDRAWAL, WalletBalance, WalletTransactionRecord
from .service import WalletService

__all__ = [
    "TRANSACTION_EARNING",
    "TRANSACTION_WITHDRAWAL",
    "InvalidWalletAmountError",
    "WalletBalance",
    "WalletDebitRejectedError",
    "WalletError",
    "WalletService",
    "WalletTransactionRecord",
]
