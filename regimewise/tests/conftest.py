"""
Test configuration for RegimeWise tests.

Provides the async HTTP client used by the API tests. pyproject.toml puts the
project root on sys.path, so tests import `regimewise.*` directly.
"""
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from regimewise.main import app


@pytest_asyncio.fixture
async def client():
    """Async httpx client using ASGI transport — no live server needed."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
