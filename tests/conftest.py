"""Test configuration and shared helpers."""

from dishka import AsyncContainer

from forum.domain.cache import UserCache
from forum.domain.model import Post, User
from forum.domain.repository import UserRepository
from forum.domain.service import JWTService, PostService, UserService
from forum.domain.value import UserRole


async def make_user(
    env: AsyncContainer,
    name: str = "Ada Lovelace",
    email: str | None = None,
    role: UserRole = UserRole.USER,
) -> User:
    """Register a user through the service and optionally give them a role.

    Roles are written straight to the repository, the way an operator
    promotes an account, and the cached copy is dropped.
    """
    user_service = await env.get(UserService)
    email = email or f"{name.split()[0].lower()}@example.com"
    user = await user_service.register(name=name, email=email)
    if role == UserRole.USER:
        return user

    user_repo = await env.get(UserRepository)
    user_cache = await env.get(UserCache)
    updated = await user_repo.set_role(user.id, role)
    await user_cache.invalidate(user.id)
    assert updated is not None
    return updated


async def make_post(
    env: AsyncContainer,
    author: User,
    title: str = "Understanding cache invalidation",
    content: str = "Notes on keeping Redis and Postgres in step.",
    tags: list[str] | None = None,
) -> Post:
    """Create a post through the service so caches and indexes are updated."""
    post_service = await env.get(PostService)
    return await post_service.create_post(
        author=author,
        title=title,
        content=content,
        tags=tags if tags is not None else ["redis"],
        media=[],
    )


async def sign_in(
    container: AsyncContainer,
    name: str = "Ada Lovelace",
    role: UserRole = UserRole.USER,
) -> tuple[str, dict[str, str]]:
    """Register a user and return their ID with a session cookie header.

    Takes the app-level container; the user is created in its own request
    scope, like a login would be.
    """
    async with container() as env:
        user = await make_user(env, name=name, role=role)
        jwt_service = await env.get(JWTService)
        token = jwt_service.create_token(str(user.id), user.email)
    return str(user.id), {"Cookie": f"auth_token={token}"}
