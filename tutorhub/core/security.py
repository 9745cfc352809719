"""JWT helpers and role-based FastAPI dependencies."""
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from tutorhub.core.config import get_settings
from tutorhub.interfaces.http.deps import get_account_service
from tutorhub.modules.accounts import ADMIN_ROLES, Account as AccountDomain, AccountService
from tutorhub.schemas import TokenData

security = HTTPBearer()


def create_access_token(account_id: str, username: str, role: str, expires_delta: Optional[timedelta] = None) -> str:
    settings = get_settings()
    expire_delta = expires_delta or timedelta(
        minutes=settings.security.admin_token_expire_minutes
        if role in ADMIN_ROLES
        else settings.access_token_expire_minutes
    )
    payload = {
        "sub": account_id,
        "username": username,
        "role": role,
        "exp": datetime.now(timezone.utc) + expire_delta,
    }
    return jwt.encode(payload, settings.secret_key, algorithm=settings.algorithm)


def decode_access_token(token: str) -> TokenData:
    settings = get_settings()
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Could not validate credentials") from exc

    account_id = payload.get("sub")
    username = payload.get("username")
    role = payload.get("role")
    if not all([account_id, username, role]):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Could not validate credentials")
    return TokenData(account_id=account_id, username=username, role=role)


async def get_current_account(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    service: AccountService = Depends(get_account_service),
) -> AccountDomain:
    token_data = decode_access_token(credentials.credentials)
    account = await service.get_by_id(token_data.account_id)
    if account is None or not account.is_active:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Account missing or disabled")
    return account


async def get_current_admin(account: AccountDomain = Depends(get_current_account)) -> AccountDomain:
    if not account.is_admin():
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required")
    return account


async def get_current_faculty(account: AccountDomain = Depends(get_current_account)) -> AccountDomain:
    if not account.is_faculty():
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Faculty access required")
    return account


async def get_current_student(account: AccountDomain = Depends(get_current_account)) -> AccountDomain:
    if not account.is_student():
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Student access required")
    return account
