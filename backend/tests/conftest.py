"""Shared pytest fixtures for SearchChat tests."""

import pytest
from httpx import ASGITransport, AsyncClient

from searchchat.chat.router import get_web_search_service
from searchchat.chat.service import WebSearchChatService
from searchchat.db.connection import Database
from searchchat.main import app
from searchchat.messages.persistence import BestEffortWriter
from searchchat.messages.store import SQLiteMessageStore
from searchchat.search.client import DataForSEOClient
from tests.fixtures import FakeDataForSEO, FakeProvider


@pytest.fixture
async def db():
    """In-memory database for tests."""
    database = await Database.connect(":memory:")
    yield database
    await database.close()


@pytest.fixture
async def store(db):
    return SQLiteMessageStore(db)


@pytest.fixture
def dataforseo():
    """Reachable DataForSEO returning zero items unless a test reconfigures it."""
    return FakeDataForSEO()


@pytest.fixture
def provider():
    return FakeProvider()


@pytest.fixture
async def search_client(dataforseo):
    http = dataforseo.client()
    yield DataForSEOClient(login="login", password="secret", client=http)
    await http.aclose()


@pytest.fixture
async def client(search_client, provider, store):
    """Async test client with fake search and completion providers wired in."""
    service = WebSearchChatService(search_client, provider, BestEffortWriter(store))
    app.dependency_overrides[get_web_search_service] = lambda: service
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client
    app.dependency_overrides.clear()
