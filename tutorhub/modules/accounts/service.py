"""Domain services for account management."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from tutorhub.core.crypto import hash_password, verify_password

from .exceptions import AccountAlreadyExistsError, AccountNotFoundError, InvalidRoleError
from .models import ADMIN_ROLES, ROLES, Account, AccountCreateInput, AccountUpdateInput, UNSET
from .repository import AccountRepository

logger = logging.getLogger(__name__)


class AccountService:
    """Encapsulates core account use cases."""

    def __init__(self, repository: AccountRepository) -> None:
        self._repository = repository

    @classmethod
    def with_session(cls, session: AsyncSession) -> "AccountService":
        # deferred: the SQL repository imports this package for its domain types
        from tutorhub.infrastructure.database.repositories.account_repository import SqlAccountRepository

        return cls(SqlAccountRepository(session))

    async def get_by_id(self, account_id: str) -> Account | None:
        return await self._repository.get_by_id(account_id)

    async def get_by_username(self, username: str) -> Account | None:
        return await self._repository.get_by_username(username)

    async def list_accounts(self, role: str | None = None) -> Sequence[Account]:
        return await self._repository.list_accounts(role)

    async def count_by_role(self) -> dict[str, int]:
        return await self._repository.count_by_role()

    async def get_faculty(self, account_id: str, *, active_only: bool = True) -> Account:
        account = await self._repository.get_by_id(account_id)
        if account is None or not account.is_faculty():
            raise AccountNotFoundError(account_id)
        if active_only and not account.is_active:
            raise AccountNotFoundError(account_id)
        return account

    async def deactivate_faculty(self, account_id: str) -> Account:
        """Soft-delete a faculty member; their bookings and withdrawals are kept."""
        await self.get_faculty(account_id, active_only=False)
        account = await self._repository.update_account(account_id, {"is_active": False})
        logger.info("Faculty %s deactivated", account_id)
        return account

    async def monthly_signups(
        self,
        role: str,
        *,
        months: int = 6,
        now: datetime | None = None,
    ) -> dict[str, int]:
        """Active accounts of ``role`` created per ``YYYY-MM``, current month included."""
        return await self._repository.signups_by_month(role, _month_start(now or datetime.now(timezone.utc), months - 1))

    async def authenticate(self, username: str, password: str) -> Account | None:
        account = await self._repository.get_by_username(username)
        if account is None or not account.is_active:
            return None
        if not verify_password(password, account.password_hash):
            logger.warning("Failed login for %s", username)
            return None
        return account

    async def create_account(self, payload: AccountCreateInput, *, allow_admin_roles: bool = False) -> Account:
        self._check_role(payload.role, allow_admin_roles)
        existing = await self._repository.get_by_username(payload.username)
        if existing is not None:
            raise AccountAlreadyExistsError(f"Username already taken: {payload.username}")

        account = await self._repository.create_account(
            username=payload.username,
            password_hash=hash_password(payload.password),
            role=payload.role,
            full_name=payload.full_name,
            email=payload.email,
            profile_image=payload.profile_image,
            is_active=payload.is_active,
        )
        logger.info("Account %s created with role %s", account.id, account.role)
        return account

    async def update_account(
        self,
        account_id: str,
        payload: AccountUpdateInput,
        *,
        allow_admin_roles: bool = False,
    ) -> Account:
        current = await self._repository.get_by_id(account_id)
        if current is None:
            raise AccountNotFoundError(account_id)
        if current.is_admin() and not allow_admin_roles:
            raise InvalidRoleError("Only super admins may modify admin accounts")

        values: dict[str, Any] = {}
        for name in ("full_name", "email", "profile_image"):
            value = getattr(payload, name)
            if value is not UNSET:
                values[name] = value
        if payload.is_active is not UNSET and payload.is_active is not None:
            values["is_active"] = payload.is_active
        if payload.role is not UNSET and payload.role is not None:
            self._check_role(payload.role, allow_admin_roles)
            values["role"] = payload.role
        if payload.password is not UNSET and payload.password is not None:
            values["password_hash"] = hash_password(payload.password)

        return await self._repository.update_account(account_id, values)

    async def set_last_login(self, account_id: str) -> None:
        await self._repository.set_last_login(account_id, datetime.now(timezone.utc))

    @staticmethod
    def _check_role(role: str, allow_admin_roles: bool) -> None:
        if role not in ROLES:
            raise InvalidRoleError(f"Unknown role: {role}")
        if role in ADMIN_ROLES and not allow_admin_roles:
            raise InvalidRoleError(f"Role {role} requires a super admin")


def _month_start(now: datetime, months_back: int) -> datetime:
    """First instant of the calendar month ``months_back`` months before ``now``."""
    index = now.year * 12 + (now.month - 1) - months_back
    return now.replace(year=index // 12, month=index % 12 + 1, day=1, hour=0, minute=0, second=0, microsecond=0)
