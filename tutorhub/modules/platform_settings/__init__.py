"""Platform-wide settings (currently the platform fee)."""

from .exceptions import InvalidPlatformFeeError, PlatformSettingError
from .service import PLATFORM_FEE_KEY, PlatformSettingService

__all__ = [
    "PLATFORM_FEE_KEY",
    "InvalidPlatformFeeError",
    "PlatformSettingError",
    "PlatformSettingService",
]
