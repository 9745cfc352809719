"""SQLAlchemy implementation of the account repository."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Sequence

from sqlalchemy import func, literal_column, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from tutorhub.db.models import Account as AccountModel
from tutorhub.modules.accounts.exceptions import AccountNotFoundError
from tutorhub.modules.accounts.models import Account
from tutorhub.modules.accounts.repository import AccountRepository


class SqlAccountRepository(AccountRepository):
    """Account repository backed by SQLAlchemy models."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_id(self, account_id: str) -> Account | None:
        stmt = select(AccountModel).where(AccountModel.id == account_id)
        result = await self._session.execute(stmt)
        return self._to_domain(result.scalar_one_or_none())

    async def get_by_username(self, username: str) -> Account | None:
        stmt = select(AccountModel).where(AccountModel.username == username)
        result = await self._session.execute(stmt)
        return self._to_domain(result.scalar_one_or_none())

    async def list_accounts(self, role: str | None = None) -> Sequence[Account]:
        stmt = select(AccountModel)
        if role:
            stmt = stmt.where(AccountModel.role == role)
        stmt = stmt.order_by(AccountModel.created_at.desc(), AccountModel.username)
        result = await self._session.execute(stmt)
        return [self._to_domain(model) for model in result.scalars().all()]

    async def count_by_role(self) -> dict[str, int]:
        stmt = select(AccountModel.role, func.count()).group_by(AccountModel.role)
        result = await self._session.execute(stmt)
        return {role: count for role, count in result.all()}

    async def signups_by_month(self, role: str, since: datetime) -> dict[str, int]:
        """Active accounts of ``role`` created since ``since``, keyed by ``YYYY-MM``."""
        if self._session.get_bind().dialect.name == "sqlite":
            month = func.strftime(literal_column("'%Y-%m'"), AccountModel.created_at)
        else:
            month = func.to_char(AccountModel.created_at, literal_column("'YYYY-MM'"))
        stmt = (
            select(month, func.count(AccountModel.id))
            .where(
                AccountModel.role == role,
                AccountModel.is_active.is_(True),
                AccountModel.created_at >= since,
            )
            .group_by(month)
            .order_by(month)
        )
        result = await self._session.execute(stmt)
        return {bucket: int(count) for bucket, count in result.all()}

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
        model = AccountModel(
            username=username,
            password_hash=password_hash,
            role=role,
            full_name=full_name,
            email=email,
            profile_image=profile_image,
            is_active=is_active,
        )
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_domain(model)

    async def update_account(self, account_id: str, values: dict[str, Any]) -> Account:
        stmt = select(AccountModel).where(AccountModel.id == account_id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        if model is None:
            raise AccountNotFoundError(account_id)

        for name, value in values.items():
            setattr(model, name, value)

        await self._session.flush()
        await self._session.refresh(model)
        return self._to_domain(model)

    async def set_last_login(self, account_id: str, timestamp: datetime) -> None:
        stmt = (
            update(AccountModel)
            .where(AccountModel.id == account_id)
            .values(last_login_at=timestamp)
        )
        await self._session.execute(stmt)

    @staticmethod
    def _to_domain(model: AccountModel | None) -> Account | None:
        if model is None:
            return None
        return Account(
            id=str(model.id),
            username=model.username,
            role=model.role or "student",
            is_active=bool(model.is_active),
            password_hash=model.password_hash,
            full_name=model.full_name,
            email=model.email,
            profile_image=model.profile_image,
            created_at=model.created_at,
            updated_at=model.updated_at,
            last_login_at=model.last_login_at,
        )
