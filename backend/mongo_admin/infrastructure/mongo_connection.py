"""Mongo Storage Connection — pymongo implementation of the StorageConnection Protocol.

Invariants:
    - Every PyMongoError is mapped to StorageTransportError (core/errors.py)
    - No retries: one driver call per method
    - Owns no client lifecycle; SessionConnectionProvider opens and closes clients
"""

import logging
from collections.abc import Mapping
from typing import Any

from pymongo import MongoClient
from pymongo.database import Database
from pymongo.errors import InvalidName, PyMongoError

from mongo_admin.core.errors import StorageTransportError

logger = logging.getLogger(__name__)


class MongoDatabaseHandle:
    """DatabaseHandle over a pymongo Database."""

    def __init__(self, database: Database):
        self._database = database

    def force_materialize(self) -> None:
        """Touch the database so the server persists it."""
        try:
            self._database.list_collection_names()
        except PyMongoError as e:
            raise StorageTransportError("force_materialize", e) from e

    def stats(self) -> Mapping[str, Any]:
        """Run dbStats; the reply keeps the server's key order."""
        try:
            return self._database.command("dbstats")
        except PyMongoError as e:
            raise StorageTransportError("dbstats", e) from e


class MongoStorageConnection:
    """StorageConnection over a pymongo MongoClient."""

    def __init__(self, client: MongoClient):
        self._client = client

    @property
    def client(self) -> MongoClient:
        return self._client

    def list_database_names(self) -> list[str]:
        try:
            return self._client.list_database_names()
        except PyMongoError as e:
            raise StorageTransportError("list_database_names", e) from e

    def get_database(self, name: str) -> MongoDatabaseHandle:
        try:
            database = self._client[name]
        except InvalidName as e:
            # raised by the Database constructor, before any server round-trip
            raise StorageTransportError("get_database", e) from e
        return MongoDatabaseHandle(database)

    def drop_database(self, name: str) -> None:
        try:
            self._client.drop_database(name)
        except PyMongoError as e:
            raise StorageTransportError("drop_database", e) from e

    def ping(self) -> None:
        """Round-trip to the server; used when a session is first bound."""
        try:
            self._client.admin.command("ping")
        except PyMongoError as e:
            raise StorageTransportError("ping", e) from e
