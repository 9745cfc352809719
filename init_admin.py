"""
Create the initial super admin account.

Credentials come from INIT_ADMIN_USERNAME / INIT_ADMIN_PASSWORD / INIT_ADMIN_EMAIL
and fall back to admin / admin123.
"""
import asyncio
import os

from tutorhub.core.config import get_settings
from tutorhub.core.logging import configure_logging
from tutorhub.infrastructure.database import dispose_engine, get_session, init_db
from tutorhub.modules.accounts import ADMIN_ROLES, AccountCreateInput, AccountService


async def create_default_admin():
    """Create the super admin unless an admin already exists."""
    configure_logging(get_settings())
    await init_db()

    username = os.getenv("INIT_ADMIN_USERNAME", "admin")
    password = os.getenv("INIT_ADMIN_PASSWORD", "admin123")
    email = os.getenv("INIT_ADMIN_EMAIL", "admin@example.com")

    async for db in get_session():
        service = AccountService.with_session(db)
        admins = [account for role in ADMIN_ROLES for account in await service.list_accounts(role)]
        if admins:
            print("An admin account already exists, nothing to do")
            continue

        await service.create_account(
            AccountCreateInput(
                username=username,
                password=password,
                role="super_admin",
                full_name="Platform Admin",
                email=email,
                is_active=True,
            ),
            allow_admin_roles=True,
        )
        await db.commit()

        print("=" * 50)
        print("Super admin created")
        print("=" * 50)
        print(f"Username: {username}")
        print(f"Password: {password}")
        print("=" * 50)
        print("Change the password after the first login!")
        print("=" * 50)

    await dispose_engine()


if __name__ == "__main__":
    asyncio.run(create_default_admin())
