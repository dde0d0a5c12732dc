from __future__ import annotations

import asyncio

from campusgigs.core.config import get_settings
from campusgigs.db.session import get_sessionmaker
from campusgigs.models.user import UserRole
from campusgigs.schemas.user import UserCreate
from campusgigs.services import user_service

NAME = "Campus Admin"
PASSWORD = "admin12345"


async def main() -> None:
    settings = get_settings()
    email = f"admin@{settings.campus_email_domain}"
    sessionmaker = get_sessionmaker(settings.database_url)
    async with sessionmaker() as session:
        if await user_service.get_user_by_email(session, email) is not None:
            print(f"User {email} already exists")
            return
        await user_service.create_user(
            session,
            UserCreate(
                name=NAME,
                email=email,
                password=PASSWORD,
                role=UserRole.ADMIN,
                campus_verified=True,
            ),
        )
        print(f"Created admin {email} / {PASSWORD}")


if __name__ == "__main__":
    asyncio.run(main())
