"""Authentication endpoints for students, faculty and admins."""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from tutorhub.core.security import create_access_token, get_current_account
from tutorhub.interfaces.http.deps import get_db_session
from tutorhub.modules.accounts import (
    Account as AccountDomain,
    AccountAlreadyExistsError,
    AccountCreateInput,
    AccountService,
)
from tutorhub.schemas import AccountResponse, LoginRequest, RegisterRequest, TokenResponse

router = APIRouter()


def _token_response(account: AccountDomain) -> TokenResponse:
    return TokenResponse(
        access_token=create_access_token(account.id, account.username, account.role),
        account_id=account.id,
        username=account.username,
        role=account.role,
    )


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
async def register(
    payload: RegisterRequest,
    db: AsyncSession = Depends(get_db_session),
) -> TokenResponse:
    account_service = AccountService.with_session(db)
    try:
        account = await account_service.create_account(
            AccountCreateInput(
                username=payload.username,
                password=payload.password,
                role=payload.role,
                full_name=payload.full_name,
                email=payload.email,
                profile_image=payload.profile_image,
            )
        )
    except AccountAlreadyExistsError as exc:
        await db.rollback()
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Username already taken") from exc

    await db.commit()
    return _token_response(account)


@router.post("/login", response_model=TokenResponse)
async def login(
    payload: LoginRequest,
    db: AsyncSession = Depends(get_db_session),
) -> TokenResponse:
    account_service = AccountService.with_session(db)
    account = await account_service.authenticate(payload.username, payload.password)
    if not account:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Incorrect username or password")

    await account_service.set_last_login(account.id)
    await db.commit()
    return _token_response(account)


@router.get("/me", response_model=AccountResponse)
async def me(account: AccountDomain = Depends(get_current_account)) -> AccountResponse:
    return AccountResponse.model_validate(account)
