"""initial payout schema

Revision ID: 5c1e7a90d2b4
Revises: 
Create Date: 2026-10-19 09:30:00.000000
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "5c1e7a90d2b4"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "accounts",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("username", sa.String(length=50), nullable=False, unique=True),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("role", sa.String(length=20), nullable=False, server_default="student"),
        sa.Column("full_name", sa.String(length=120)),
        sa.Column("email", sa.String(length=100), unique=True),
        sa.Column("profile_image", sa.String(length=500)),
        sa.Column("is_active", sa.Boolean(), server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True)),
        sa.Column("last_login_at", sa.DateTime(timezone=True)),
    )
    op.create_index("ix_accounts_username", "accounts", ["username"])
    op.create_index("ix_accounts_role", "accounts", ["role"])

    op.create_table(
        "faculty_wallets",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("faculty_id", sa.String(length=36), sa.ForeignKey("accounts.id"), nullable=False),
        sa.Column("currency", sa.String(length=3), nullable=False),
        sa.Column("balance_cents", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True)),
        sa.UniqueConstraint("faculty_id", "currency", name="uq_faculty_wallets_faculty_currency"),
        sa.CheckConstraint("balance_cents >= 0", name="ck_faculty_wallets_balance_non_negative"),
    )
    op.create_index("ix_faculty_wallets_faculty_id", "faculty_wallets", ["faculty_id"])

    op.create_table(
        "bookings",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("student_id", sa.String(length=36), sa.ForeignKey("accounts.id"), nullable=False),
        sa.Column("faculty_id", sa.String(length=36), sa.ForeignKey("accounts.id"), nullable=False),
        sa.Column("topic", sa.String(length=200), nullable=False),
        sa.Column("price_cents", sa.Integer(), nullable=False),
        sa.Column("currency", sa.String(length=3), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="pending"),
        sa.Column("payment_status", sa.String(length=20), nullable=False, server_default="pending"),
        sa.Column("gateway_order_id", sa.String(length=64), unique=True),
        sa.Column("gateway_payment_id", sa.String(length=64)),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True)),
        sa.Column("completed_at", sa.DateTime(timezone=True)),
    )
    op.create_index("ix_bookings_student_id", "bookings", ["student_id"])
    op.create_index("ix_bookings_faculty_id", "bookings", ["faculty_id"])
    op.create_index("ix_bookings_status", "bookings", ["status"])
    op.create_index("ix_bookings_gateway_order_id", "bookings", ["gateway_order_id"])

    op.create_table(
        "withdrawal_requests",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("faculty_id", sa.String(length=36), sa.ForeignKey("accounts.id"), nullable=False),
        sa.Column("amount_cents", sa.Integer(), nullable=False),
        sa.Column("currency", sa.String(length=3), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="pending"),
        sa.Column("payment_details", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True)),
        sa.Column("processed_at", sa.DateTime(timezone=True)),
    )
    op.create_index("ix_withdrawal_requests_faculty_id", "withdrawal_requests", ["faculty_id"])
    op.create_index("ix_withdrawal_requests_status", "withdrawal_requests", ["status"])

    op.create_table(
        "wallet_transactions",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("faculty_id", sa.String(length=36), sa.ForeignKey("accounts.id"), nullable=False),
        sa.Column("currency", sa.String(length=3), nullable=False),
        sa.Column("amount_cents", sa.Integer(), nullable=False),
        sa.Column("type", sa.String(length=20), nullable=False),
        sa.Column("booking_id", sa.String(length=36), sa.ForeignKey("bookings.id")),
        sa.Column("withdrawal_id", sa.String(length=36), sa.ForeignKey("withdrawal_requests.id")),
        sa.Column("description", sa.String(length=255)),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_wallet_transactions_faculty_id", "wallet_transactions", ["faculty_id"])

    op.create_table(
        "platform_settings",
        sa.Column("key", sa.String(length=64), primary_key=True),
        sa.Column("value", sa.String(length=255), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )


def downgrade() -> None:
    op.drop_table("platform_settings")
    op.drop_index("ix_wallet_transactions_faculty_id", table_name="wallet_transactions")
    op.drop_table("wallet_transactions")
    op.drop_index("ix_withdrawal_requests_status", table_name="withdrawal_requests")
    op.drop_index("ix_withdrawal_requests_faculty_id", table_name="withdrawal_requests")
    op.drop_table("withdrawal_requests")
    op.drop_index("ix_bookings_gateway_order_id", table_name="bookings")
    op.drop_index("ix_bookings_status", table_name="bookings")
    op.drop_index("ix_bookings_faculty_id", table_name="bookings")
    op.drop_index("ix_bookings_student_id", table_name="bookings")
    op.drop_table("bookings")
    op.drop_index("ix_faculty_wallets_faculty_id", table_name="faculty_wallets")
    op.drop_table("faculty_wallets")
    op.drop_index("ix_accounts_role", table_name="accounts")
    op.drop_index("ix_accounts_username", table_name="accounts")
    op.drop_table("accounts")
