"""Wallet domain specific exceptions."""


class WalletError(Exception):
    """Base class for wallet domain errors."""


class WalletDebitRejectedError(WalletError):
    """Raised when a guarded debit finds no wallet or not enough balance."""

    def __init__(self, faculty_id: str, currency: str, amount_cents: int) -> None:
        super().__init__(f"Wallet {faculty_id}/{currency} cannot cover {amount_cents} cents")
        self.faculty_id = faculty_id
        self.currency = currency
        self.amount_cents = amount_cents


class InvalidWalletAmountError(WalletError):
    """Raised when a credit or debit amount is not positive."""
