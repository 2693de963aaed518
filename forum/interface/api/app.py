"""FastAPI application."""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import logfire
from dishka import AsyncContainer
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from forum.config import Settings
from forum.domain.service import PrefixSearchService
from forum.interface.api.routes import (
    admin,
    auth,
    comments,
    feedback,
    health,
    posts,
    search,
    users,
)
from forum.util.di.container import create_container, setup_di
from forum.util.error import ConfigurationError
from forum.util.logging import setup_logging
from forum.util.observability import (
    configure_logfire,
    instrument_fastapi,
    instrument_httpx,
)

DEFAULT_JWT_SECRET = "CHANGE_ME_IN_PRODUCTION"


async def warm_search_index(container: AsyncContainer) -> None:
    """Populate the autocomplete index in its own request scope."""
    async with container() as request_container:
        search_service = await request_container.get(PrefixSearchService)
        await search_service.initialize_if_needed()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Warm the search index in the background and close the container on exit.

    The API serves immediately; autocomplete reports "building" until the
    index is ready.
    """
    container: AsyncContainer = app.state.dishka_container
    task = asyncio.create_task(warm_search_index(container))
    try:
        yield
    finally:
        if not task.done():
            task.cancel()
        await container.close()
        logfire.info("Application shut down")


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application.

    Args:
        container: DI container to use; the production container by default

    Raises:
        ConfigurationError: If production runs with the default JWT secret
    """
    settings = Settings()
    if (
        settings.environment == "production"
        and settings.auth.jwt_secret == DEFAULT_JWT_SECRET
    ):
        raise ConfigurationError("AUTH__JWT_SECRET must be set in production")

    setup_logging(settings)
    configure_logfire(settings)
    instrument_httpx()

    app_instance = FastAPI(
        title="Forum API",
        description="Backend API for a discussion forum",
        version="0.1.0",
        lifespan=lifespan,
    )

    instrument_fastapi(app_instance)

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=[
            settings.api.frontend_url,
            "http://localhost:3000",  # Local development
            "http://localhost:5173",  # Vite default
        ],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
        allow_headers=[
            "Authorization",
            "Content-Type",
            "Accept",
            "Origin",
            "User-Agent",
            "Cache-Control",
            "X-Requested-With",
        ],
        expose_headers=["Content-Length", "Content-Type"],
        max_age=600,  # Cache preflight requests for 10 minutes
    )

    setup_di(app_instance, container or create_container())

    app_instance.include_router(health.router)
    app_instance.include_router(auth.router)
    app_instance.include_router(posts.router)
    app_instance.include_router(comments.router)
    app_instance.include_router(users.router)
    app_instance.include_router(feedback.router)
    app_instance.include_router(search.router)
    app_instance.include_router(admin.router)

    return app_instance
