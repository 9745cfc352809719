"""Withdrawal workflow exceptions."""


class WithdrawalError(Exception):
    """Base class for withdrawal workflow errors."""


class InvalidRequestError(WithdrawalError):
    """Malformed withdrawal input: non-positive amount, unknown currency, bad payment details."""


class InsufficientFundsError(WithdrawalError):
    """Requested amount exceeds the wallet balance at request time."""


class NotFoundOrAlreadyProcessedError(WithdrawalError):
    """The request does not exist or has already left the pending state."""


class InsufficientWalletBalanceError(WithdrawalError):
    """The wallet no longer covers the request when an admin approves it."""


class InvalidStatusError(WithdrawalError):
    """Target status is neither approved nor rejected."""
