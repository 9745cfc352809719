"""Platform fee configuration stored alongside the data it governs."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation

from sqlalchemy.ext.asyncio import AsyncSession

from tutorhub.core.config import get_settings
from tutorhub.infrastructure.database.repositories.platform_setting_repository import SqlPlatformSettingRepository

from .exceptions import InvalidPlatformFeeError
from .repository import PlatformSettingRepository

logger = logging.getLogger(__name__)

PLATFORM_FEE_KEY = "platform_fee_percentage"


def _default_fee() -> Decimal:
    return get_settings().payouts.default_platform_fee_percentage


@dataclass(slots=True)
class PlatformSettingService:
    repository: PlatformSettingRepository
    default_fee: Decimal = field(default_factory=_default_fee)

    @classmethod
    def with_session(cls, session: AsyncSession) -> "PlatformSettingService":
        return cls(SqlPlatformSettingRepository(session))

    async def get_platform_fee(self) -> Decimal:
        row = await self.repository.get(PLATFORM_FEE_KEY)
        if row is None:
            return self.default_fee
        try:
            return Decimal(row.value)
        except InvalidOperation:
            logger.error("Stored platform fee %r is not a number, using default", row.value)
            return self.default_fee

    async def set_platform_fee(self, percentage: Decimal | int | float | str) -> Decimal:
        try:
            value = Decimal(str(percentage))
        except InvalidOperation as exc:
            raise InvalidPlatformFeeError("Invalid percentage value.") from exc
        if not value.is_finite() or value < 0 or value > 100:
            raise InvalidPlatformFeeError("Invalid percentage value.")

        await self.repository.put(PLATFORM_FEE_KEY, str(value))
        logger.info("Platform fee set to %s%%", value)
        return value
