"""Shared fixtures: an in-memory database, seeded accounts and a fake gateway."""

import os

# Settings are cached on first use, so the test environment is set before any
# tutorhub import.
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("SECURITY__SECRET_KEY", "test-secret-key-for-tokens")
os.environ.setdefault("SECURITY__BCRYPT_ROUNDS", "4")
os.environ.setdefault("DATABASE__URL", "sqlite+aiosqlite://")

import hashlib
from dataclasses import dataclass, field
from decimal import Decimal

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

from tutorhub.core.security import create_access_token
from tutorhub.db import models  # noqa: F401
from tutorhub.infrastructure.database import Base, build_engine
from tutorhub.interfaces.http.deps import get_db_session, get_payment_gateway
from tutorhub.modules.accounts import AccountCreateInput, AccountService
from tutorhub.modules.bookings import GatewayOrder
from tutorhub.modules.wallets import WalletService


@dataclass
class FakeGateway:
    """In-process stand-in for the Razorpay client."""

    key_id: str = "rzp_test_key"
    orders: list[GatewayOrder] = field(default_factory=list)

    async def create_order(self, *, amount_cents, currency, receipt, notes):
        order = GatewayOrder(
            id=f"order_{len(self.orders) + 1:04d}",
            amount_cents=amount_cents,
            currency=currency,
            receipt=receipt,
        )
        self.orders.append(order)
        return order

    @staticmethod
    def sign(order_id: str, payment_id: str) -> str:
        return hashlib.sha256(f"{order_id}|{payment_id}".encode()).hexdigest()

    def verify_payment_signature(self, *, order_id, payment_id, signature):
        return signature == self.sign(order_id, payment_id)


@pytest.fixture
async def engine():
    engine = build_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def accounts(session_factory):
    """Active faculty, a second faculty, a student and an admin, committed."""
    async with session_factory() as db:
        service = AccountService.with_session(db)
        seeded = {
            "faculty": await service.create_account(
                AccountCreateInput(
                    username="prof_ada",
                    password="secret123",
                    role="faculty",
                    full_name="Ada Lovelace",
                    email="ada@example.com",
                )
            ),
            "other_faculty": await service.create_account(
                AccountCreateInput(
                    username="prof_alan",
                    password="secret123",
                    role="faculty",
                    email="alan@example.com",
                )
            ),
            "student": await service.create_account(
                AccountCreateInput(
                    username="student_bob",
                    password="secret123",
                    role="student",
                    full_name="Bob Student",
                    email="bob@example.com",
                )
            ),
            "admin": await service.create_account(
                AccountCreateInput(
                    username="root",
                    password="secret123",
                    role="super_admin",
                    email="root@example.com",
                ),
                allow_admin_roles=True,
            ),
        }
        await db.commit()
    return seeded


@pytest.fixture
def fund_wallet(session_factory):
    async def _fund(faculty_id: str, amount: str, currency: str = "USD") -> None:
        async with session_factory() as db:
            cents = int(Decimal(amount) * 100)
            await WalletService.with_session(db).credit_earnings(
                faculty_id=faculty_id,
                currency=currency,
                amount_cents=cents,
                description="seed",
            )
            await db.commit()

    return _fund


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def app(session_factory, gateway):
    from tutorhub.main import create_app

    application = create_app()

    async def _session():
        async with session_factory() as db:
            try:
                yield db
                await db.commit()
            except Exception:
                await db.rollback()
                raise

    application.dependency_overrides[get_db_session] = _session
    application.dependency_overrides[get_payment_gateway] = lambda: gateway
    return application


@pytest.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as http:
        yield http


@pytest.fixture
def auth_headers():
    def _headers(account) -> dict[str, str]:
        token = create_access_token(account.id, account.username, account.role)
        return {"Authorization": f"Bearer {token}"}

    return _headers
