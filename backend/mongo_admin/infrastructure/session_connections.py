"""Session Connections — binds opaque session tokens to live MongoClient connections.

Invariants:
    - Every successful connect() issues a fresh token and a fresh, pinged MongoClient
    - A binding is never reused: a connect request is verified by its own ping
    - resolve() accepts only issued tokens; empty or unknown keys raise ConnectionUnavailableError
    - A client that fails its first ping is closed and never registered
    - disconnect() is idempotent; close_all() empties the registry
    - Tokens are redacted before they reach the logs

Design Decisions:
    - Owned by the application lifespan (app.state), not a module global:
      the service receives it explicitly and never keeps a session map itself
    - Registry guarded by a threading.Lock: FastAPI runs sync handlers in a threadpool
"""

import logging
import threading
from dataclasses import dataclass
from typing import Callable

from pymongo import MongoClient

from mongo_admin.core.domain_types import (
    SessionKey, describe_binding, new_session_key, redact_session_key,
)
from mongo_admin.core.errors import (
    ConnectionUnavailableError, ErrorContext, StorageTransportError,
)
from mongo_admin.infrastructure.mongo_connection import MongoStorageConnection

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Binding:
    label: str
    connection: MongoStorageConnection


class SessionConnectionProvider:
    """ConnectionProvider keyed by tokens issued from connect()."""

    def __init__(
        self,
        server_selection_timeout_ms: int = 5000,
        connect_timeout_ms: int = 5000,
        client_factory: Callable[..., MongoClient] = MongoClient,
    ):
        self._server_selection_timeout_ms = server_selection_timeout_ms
        self._connect_timeout_ms = connect_timeout_ms
        self._client_factory = client_factory
        self._bindings: dict[SessionKey, _Binding] = {}
        self._lock = threading.Lock()

    def connect(
        self, user: str, host: str, port: int, password: str | None = None,
    ) -> SessionKey:
        """Open and verify a client for user@host:port, then issue a new token for it."""
        label = describe_binding(user, host, port)
        client = self._client_factory(
            host=host,
            port=port,
            username=user if password is not None else None,
            password=password,
            serverSelectionTimeoutMS=self._server_selection_timeout_ms,
            connectTimeoutMS=self._connect_timeout_ms,
        )
        connection = MongoStorageConnection(client)
        try:
            connection.ping()
        except StorageTransportError as e:
            client.close()
            logger.warning(f"Could not connect {label}: {e}")
            raise ConnectionUnavailableError(
                f"Could not connect to {host}:{port}",
                ErrorContext(operation="connect"),
            ) from e

        session_key = new_session_key()
        with self._lock:
            self._bindings[session_key] = _Binding(label, connection)
        logger.info(
            f"Session bound for {label}",
            extra={"session_key": redact_session_key(session_key)},
        )
        return session_key

    def resolve(self, session_key: SessionKey) -> MongoStorageConnection:
        if not session_key:
            raise ConnectionUnavailableError(
                "Session key is empty",
                ErrorContext(operation="resolve"),
            )
        with self._lock:
            binding = self._bindings.get(session_key)
        if binding is None:
            redacted = redact_session_key(session_key)
            raise ConnectionUnavailableError(
                f"No live connection for session [{redacted}]",
                ErrorContext(session_key=redacted, operation="resolve"),
            )
        return binding.connection

    def disconnect(self, session_key: SessionKey) -> bool:
        """Close and forget the session's client. Returns False if it was not bound."""
        with self._lock:
            binding = self._bindings.pop(session_key, None)
        if binding is None:
            return False
        binding.connection.client.close()
        logger.info(
            f"Session closed for {binding.label}",
            extra={"session_key": redact_session_key(session_key)},
        )
        return True

    def close_all(self) -> None:
        with self._lock:
            bindings = list(self._bindings.values())
            self._bindings.clear()
        for binding in bindings:
            binding.connection.client.close()
        logger.info(f"Closed {len(bindings)} session connection(s)")

    def active_sessions(self) -> int:
        with self._lock:
            return len(self._bindings)
