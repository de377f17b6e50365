"""API test fixtures — FastAPI app wired to the in-memory storage server.

Invariants:
    - app.state.connections replaced per test (httpx ASGITransport does not run the lifespan)
    - SESSION_HEADERS (fake_storage) carries the only bound session key
"""

import pytest
from httpx import ASGITransport, AsyncClient

from mongo_admin.main import app

from tests.services.fake_storage import (
    SESSION_KEY, FakeConnectionProvider, FakeStorageServer,
)


@pytest.fixture
def server():
    return FakeStorageServer()

@pytest.fixture
def provider(server):
    return FakeConnectionProvider(server, {SESSION_KEY})

@pytest.fixture
async def client(provider):
    """FastAPI test client with the connection provider overridden."""
    app.state.connections = provider
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
    del app.state.connections
