"""Service test fixtures — in-memory storage server and a session-scoped admin service.

Invariants:
    - Every test gets a fresh FakeStorageServer with no databases
    - SESSION_KEY is the only bound session; any other key is unavailable
"""

import pytest

from mongo_admin.services.database_admin import DatabaseAdminService

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
def service(provider):
    return DatabaseAdminService(provider, SESSION_KEY)
