"""Account domain services and models."""

from .models import (
    ADMIN_ROLES,
    ROLES,
    Account,
    AccountCreateInput,
    AccountUpdateInput,
    UNSET,
)
from .service import AccountService
from .exceptions import (
    AccountError,
    AccountAlreadyExistsError,
    AccountNotFoundError,
    InvalidRoleError,
)

__all__ = [
    "ADMIN_ROLES",
    "ROLES",
    "Account",
    "AccountCreateInput",
    "AccountUpdateInput",
    "AccountService",
    "AccountError",
    "AccountAlreadyExistsError",
    "AccountNotFoundError",
    "InvalidRoleError",
    "UNSET",
]
