"""API router assembly."""
from fastapi import APIRouter

from . import admin, auth, bookings, faculty


def create_api_router(prefix: str = "") -> APIRouter:
    router = APIRouter(prefix=prefix)
    router.include_router(auth.router, prefix="/auth", tags=["auth"])
    router.include_router(faculty.router, prefix="/faculty", tags=["faculty"])
    router.include_router(admin.router, prefix="/admin", tags=["admin"])
    router.include_router(bookings.router, prefix="/bookings", tags=["bookings"])
    return router


__all__ = [
    "create_api_router",
]
