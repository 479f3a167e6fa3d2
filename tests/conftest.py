"""Pytest configuration and shared fixtures."""

import os
from collections.abc import AsyncGenerator

os.environ.setdefault("GITHUB_BASE_URL", "https://api.github.test")

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from fastapi import FastAPI  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from app.api.deps import get_github_client  # noqa: E402
from app.main import create_app  # noqa: E402
from helpers import TEST_TOKEN, GitHubStub  # noqa: E402


@pytest.fixture
def github_stub() -> GitHubStub:
    return GitHubStub()


@pytest.fixture
def app(github_stub: GitHubStub) -> FastAPI:
    application = create_app()
    application.dependency_overrides[get_github_client] = lambda: github_stub.client()
    return application


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Async test client bound to the ASGI app."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return {"github-token": TEST_TOKEN}
