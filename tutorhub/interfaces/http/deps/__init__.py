"""Reusable FastAPI dependencies."""

from .database import get_db_session
from .account import get_account_service
from .payments import get_payment_gateway

__all__ = [
    "get_db_session",
    "get_account_service",
    "get_payment_gateway",
]
