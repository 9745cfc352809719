"""SQLAlchemy ORM models."""
import uuid

from sqlalchemy import (
    JSON,
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from tutorhub.infrastructure.database.base import Base


def generate_uuid() -> str:
    return str(uuid.uuid4())


class Account(Base):
    __tablename__ = "accounts"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    username = Column(String(50), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, default="student", index=True)
    full_name = Column(String(120))
    email = Column(String(100), unique=True)
    profile_image = Column(String(500))
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
    last_login_at = Column(DateTime(timezone=True))


class FacultyWallet(Base):
    __tablename__ = "faculty_wallets"
    __table_args__ = (
        UniqueConstraint("faculty_id", "currency", name="uq_faculty_wallets_faculty_currency"),
        CheckConstraint("balance_cents >= 0", name="ck_faculty_wallets_balance_non_negative"),
    )

    id = Column(String(36), primary_key=True, default=generate_uuid)
    faculty_id = Column(String(36), ForeignKey("accounts.id"), nullable=False, index=True)
    currency = Column(String(3), nullable=False)
    balance_cents = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    faculty = relationship("Account")


class WalletTransaction(Base):
    __tablename__ = "wallet_transactions"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    faculty_id = Column(String(36), ForeignKey("accounts.id"), nullable=False, index=True)
    currency = Column(String(3), nullable=False)
    amount_cents = Column(Integer, nullable=False)
    type = Column(String(20), nullable=False)  # earning, withdrawal
    booking_id = Column(String(36), ForeignKey("bookings.id"), nullable=True)
    withdrawal_id = Column(String(36), ForeignKey("withdrawal_requests.id"), nullable=True)
    description = Column(String(255))
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class WithdrawalRequest(Base):
    __tablename__ = "withdrawal_requests"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    faculty_id = Column(String(36), ForeignKey("accounts.id"), nullable=False, index=True)
    amount_cents = Column(Integer, nullable=False)
    currency = Column(String(3), nullable=False)
    status = Column(String(20), nullable=False, default="pending", index=True)  # pending, approved, rejected
    payment_details = Column(JSON, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
    processed_at = Column(DateTime(timezone=True))

    faculty = relationship("Account")


class Booking(Base):
    __tablename__ = "bookings"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    student_id = Column(String(36), ForeignKey("accounts.id"), nullable=False, index=True)
    faculty_id = Column(String(36), ForeignKey("accounts.id"), nullable=False, index=True)
    topic = Column(String(200), nullable=False)
    price_cents = Column(Integer, nullable=False)
    currency = Column(String(3), nullable=False)
    status = Column(String(20), nullable=False, default="pending", index=True)  # pending, completed, failed
    payment_status = Column(String(20), nullable=False, default="pending")  # pending, successful, failed
    gateway_order_id = Column(String(64), unique=True, index=True)
    gateway_payment_id = Column(String(64))
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
    completed_at = Column(DateTime(timezone=True))

    student = relationship("Account", foreign_keys=[student_id])
    faculty = relationship("Account", foreign_keys=[faculty_id])


class PlatformSetting(Base):
    __tablename__ = "platform_settings"

    key = Column(String(64), primary_key=True)
    value = Column(String(255), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
