"""Boundary Protocols — contracts between the admin service and the storage shell.

Invariants:
    - The service NEVER imports a driver — every remote call goes through these Protocols
    - Implementations raise StorageTransportError (core/errors.py) on transport failure
    - ConnectionProvider.resolve raises ConnectionUnavailableError for empty/unbound keys

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no inheritance
    - Synchronous: one blocking call per remote step, no retries at this layer
"""

from collections.abc import Mapping
from typing import Any, Protocol

from mongo_admin.core.domain_types import SessionKey


class DatabaseHandle(Protocol):
    """A handle to one named database on the storage server."""
    def force_materialize(self) -> None: ...
    def stats(self) -> Mapping[str, Any]: ...


class StorageConnection(Protocol):
    """A live connection to the storage server."""
    def list_database_names(self) -> list[str]: ...
    def get_database(self, name: str) -> DatabaseHandle: ...
    def drop_database(self, name: str) -> None: ...


class ConnectionProvider(Protocol):
    """Resolves a session key to its live StorageConnection."""
    def resolve(self, session_key: SessionKey) -> StorageConnection: ...
