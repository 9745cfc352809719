"""Repository protocol for key/value platform settings."""

from __future__ import annotations

from typing import Protocol

from tutorhub.db.models import PlatformSetting as PlatformSettingModel


class PlatformSettingRepository(Protocol):
    async def get(self, key: str) -> PlatformSettingModel | None:
        ...

    async def put(self, key: str, value: str) -> PlatformSettingModel:
        ...
