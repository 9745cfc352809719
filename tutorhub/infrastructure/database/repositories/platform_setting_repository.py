"""SQLAlchemy implementation for platform settings"""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tutorhub.db.models import PlatformSetting


class SqlPlatformSettingRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get(self, key: str) -> PlatformSetting | None:
        stmt = select(PlatformSetting).where(PlatformSetting.key == key)
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def put(self, key: str, value: str) -> PlatformSetting:
        setting = await self.session.get(PlatformSetting, key)
        if setting is None:
            setting = PlatformSetting(key=key, value=value)
            self.session.add(setting)
        else:
            setting.value = value
        await self.session.flush()
        await self.session.refresh(setting)
        return setting
