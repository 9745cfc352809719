"""Platform setting exceptions."""


class PlatformSettingError(Exception):
    """Base class for platform setting errors."""


class InvalidPlatformFeeError(PlatformSettingError):
    """Raised when the fee percentage is outside [0, 100]."""
