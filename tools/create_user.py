#!/usr/bin/env python3
"""Create a user who can sign in to the reorder admin pages.

Usage (from the project directory):
    uv run python tools/create_user.py admin@example.com --role administrator
    uv run python tools/create_user.py editor@example.com --password secret123
"""

import argparse
import asyncio
import getpass
import sys

from dotenv import load_dotenv

load_dotenv()

from sqlalchemy import select  # noqa: E402

from reorder.db import async_session_maker, engine  # noqa: E402
from reorder.models import User, UserRole  # noqa: E402
from reorder.services.auth import auth_service  # noqa: E402


async def create_user(email: str, password: str, role: UserRole) -> User:
    """Insert the user, failing if the email is taken."""
    async with async_session_maker() as session:
        result = await session.execute(select(User).where(User.email == email))
        if result.scalar_one_or_none():
            print(f"ERROR: A user with email {email} already exists.")
            sys.exit(1)

        user = User(
            email=email,
            hashed_password=auth_service.hash_password(password),
            role=role,
        )
        session.add(user)
        await session.commit()
        await session.refresh(user)
    await engine.dispose()
    return user


def main() -> None:
    parser = argparse.ArgumentParser(description="Create a reorder admin user")
    parser.add_argument("email", help="Login email")
    parser.add_argument(
        "--role",
        choices=[r.value for r in UserRole],
        default=UserRole.EDITOR.value,
        help="User role (default: editor)",
    )
    parser.add_argument("--password", help="Password (prompted when omitted)")
    args = parser.parse_args()

    password = args.password or getpass.getpass("Password: ")
    if len(password) < 8:
        print("ERROR: Password must be at least 8 characters.")
        sys.exit(1)

    user = asyncio.run(create_user(args.email, password, UserRole(args.role)))
    print(f"Created {user.role.value} {user.email} ({user.id})")


if __name__ == "__main__":
    main()
