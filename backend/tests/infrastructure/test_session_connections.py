"""Session Connections — key issuance, verification, resolution, and teardown of session clients.

Tests cover:
    - connect() issues a fresh opaque key per verified client and never reuses a binding
    - A failed ping (wrong password included) registers nothing and returns no key
    - A client failing its first ping is closed and not registered
    - resolve() rejects empty, unbound, and user@host:port keys with ConnectionUnavailableError
    - disconnect()/close_all() close clients and are idempotent
"""

from unittest.mock import MagicMock

import pytest
from pymongo.errors import OperationFailure, ServerSelectionTimeoutError

from mongo_admin.core.errors import ConnectionUnavailableError
from mongo_admin.infrastructure.mongo_connection import MongoStorageConnection
from mongo_admin.infrastructure.session_connections import SessionConnectionProvider


@pytest.fixture
def clients():
    return []


@pytest.fixture
def provider(clients):
    def factory(**kwargs):
        client = MagicMock()
        client.kwargs = kwargs
        clients.append(client)
        return client

    return SessionConnectionProvider(
        server_selection_timeout_ms=1500, connect_timeout_ms=800,
        client_factory=factory,
    )


def test_connect_returns_opaque_session_key(provider):
    key = provider.connect("u1", "host", 27017)
    assert len(key) >= 32
    assert "u1" not in key
    assert "host" not in key
    assert provider.active_sessions() == 1


def test_connect_passes_timeouts_and_credentials(provider, clients):
    provider.connect("u1", "host", 27017, password="secret")
    kwargs = clients[0].kwargs
    assert kwargs["host"] == "host"
    assert kwargs["port"] == 27017
    assert kwargs["username"] == "u1"
    assert kwargs["password"] == "secret"
    assert kwargs["serverSelectionTimeoutMS"] == 1500
    assert kwargs["connectTimeoutMS"] == 800


def test_connect_without_password_is_unauthenticated(provider, clients):
    provider.connect("u1", "host", 27017)
    assert clients[0].kwargs["username"] is None


def test_connect_pings_server(provider, clients):
    provider.connect("u1", "host", 27017)
    clients[0].admin.command.assert_called_once_with("ping")


def test_connect_never_reuses_a_binding(provider, clients):
    first = provider.connect("u1", "host", 27017, password="right")
    second = provider.connect("u1", "host", 27017, password="right")
    assert len(clients) == 2
    assert first != second
    for client in clients:
        client.admin.command.assert_called_once_with("ping")
    assert provider.active_sessions() == 2


def test_wrong_password_yields_no_key_even_when_user_is_bound(clients):
    def factory(**kwargs):
        client = MagicMock()
        if kwargs["password"] != "right":
            client.admin.command.side_effect = OperationFailure("Authentication failed.")
        clients.append(client)
        return client

    provider = SessionConnectionProvider(client_factory=factory)
    good = provider.connect("u1", "host", 27017, password="right")
    with pytest.raises(ConnectionUnavailableError):
        provider.connect("u1", "host", 27017, password="WRONG")
    assert len(clients) == 2
    clients[1].close.assert_called_once_with()
    assert provider.active_sessions() == 1
    assert provider.resolve(good) is not None


def test_connect_failure_closes_client_and_raises(clients):
    def factory(**kwargs):
        client = MagicMock()
        client.admin.command.side_effect = ServerSelectionTimeoutError("down")
        clients.append(client)
        return client

    provider = SessionConnectionProvider(client_factory=factory)
    with pytest.raises(ConnectionUnavailableError):
        provider.connect("u1", "host", 27017)
    clients[0].close.assert_called_once_with()
    assert provider.active_sessions() == 0


def test_resolve_bound_session(provider):
    key = provider.connect("u1", "host", 27017)
    assert isinstance(provider.resolve(key), MongoStorageConnection)


@pytest.mark.parametrize("key", ["", "nobody@host:27017", "unknown-token"])
def test_resolve_unbound_or_empty_raises(provider, key):
    with pytest.raises(ConnectionUnavailableError):
        provider.resolve(key)


def test_resolve_rejects_binding_label(provider):
    provider.connect("u1", "host", 27017)
    with pytest.raises(ConnectionUnavailableError):
        provider.resolve("u1@host:27017")


def test_unbound_key_is_redacted_in_error(provider):
    with pytest.raises(ConnectionUnavailableError) as exc_info:
        provider.resolve("abcdefghijklmnop")
    assert "abcdefghijklmnop" not in exc_info.value.message
    assert exc_info.value.context.session_key == "abcdef..."


def test_sessions_are_isolated(provider):
    a = provider.connect("u1", "host", 27017)
    b = provider.connect("u2", "host", 27017)
    assert provider.resolve(a) is not provider.resolve(b)


def test_disconnect_closes_and_forgets(provider, clients):
    key = provider.connect("u1", "host", 27017)
    assert provider.disconnect(key) is True
    clients[0].close.assert_called_once_with()
    with pytest.raises(ConnectionUnavailableError):
        provider.resolve(key)


def test_disconnect_unbound_returns_false(provider):
    assert provider.disconnect("unknown-token") is False


def test_close_all(provider, clients):
    provider.connect("u1", "host", 27017)
    provider.connect("u2", "host", 27018)
    provider.close_all()
    assert provider.active_sessions() == 0
    for client in clients:
        client.close.assert_called_once_with()
