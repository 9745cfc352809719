"""SQLAlchemy-backed repository implementations."""

from .account_repository import SqlAccountRepository
from .booking_repository import SqlBookingRepository
from .platform_setting_repository import SqlPlatformSettingRepository
from .wallet_repository import SqlWalletRepository
from .withdrawal_repository import SqlWithdrawalRepository

__all__ = [
    "SqlAccountRepository",
    "SqlBookingRepository",
    "SqlPlatformSettingRepository",
    "SqlWalletRepository",
    "SqlWithdrawalRepository",
]
