#!/usr/bin/env python3
"""Register (or look up) a user and print a session token for them.

Stands in for the sign-in handshake in development:

    python scripts/issue_token.py "Ada Lovelace" ada@example.com

Pass ``--admin`` to promote the user, then send the token as the
``auth_token`` cookie.
"""

import argparse
import asyncio
import sys
from uuid import UUID

from forum.application.usecase.auth import LoginRequest, LoginUseCase
from forum.config import Settings
from forum.domain.cache import UserCache
from forum.domain.repository import UserRepository
from forum.domain.value import UserId, UserRole
from forum.util.di.container import create_container
from forum.util.observability import configure_logfire


async def issue(name: str, email: str, admin: bool) -> str:
    container = create_container()
    try:
        async with container() as request_container:
            login = await request_container.get(LoginUseCase)
            response = await login.execute(LoginRequest(name=name, email=email))
            if admin:
                user_id = UserId(UUID(response.user_id))
                users = await request_container.get(UserRepository)
                await users.set_role(user_id, UserRole.ADMIN)
                user_cache = await request_container.get(UserCache)
                await user_cache.invalidate(user_id)
            return response.token
    finally:
        await container.close()


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("name")
    parser.add_argument("email")
    parser.add_argument("--admin", action="store_true")
    args = parser.parse_args()

    configure_logfire(Settings())
    print(asyncio.run(issue(args.name, args.email, args.admin)))
    return 0


if __name__ == "__main__":
    sys.exit(main())
