"""Repository protocol for accounts."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Protocol, Sequence

from .models import Account


class AccountRepository(Protocol):
    """Abstract repository interface for account persistence."""

    async def get_by_id(self, account_id: str) -> Account | None:
        ...

    async def get_by_username(self, username: str) -> Account | None:
        ...

    async def list_accounts(self, role: str | None = None) -> Sequence[Account]:
        ...

    async def count_by_role(self) -> dict[str, int]:
        ...

    async def signups_by_month(self, role: str, since: datetime) -> dict[str, int]:
        ...

    async def create_account(
        self,
        *,
        username: str,
        password_hash: str,
        role: str,
        full_name: str | None,
        email: str | None,
        profile_image: str | None,
        is_active: bool,
    ) -> Account:
        ...

    async def update_account(self, account_id: str, values: dict[str, Any]) -> Account:
        ...

    async def set_last_login(self, account_id: str, timestamp: datetime) -> None:
        ...
