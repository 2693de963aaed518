"""Fixtures for end-to-end API tests against the mocked container."""

import httpx
import pytest_asyncio

from forum.interface.api.app import create_app
from tests.di import build_test_container


@pytest_asyncio.fixture
async def container():
    container = build_test_container()
    yield container
    await container.close()


@pytest_asyncio.fixture
async def client(container):
    """HTTP client bound to an app that shares the test container."""
    app = create_app(container=container)
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
