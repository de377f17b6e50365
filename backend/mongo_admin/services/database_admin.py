"""Database Admin Service — session-scoped list/create/drop/stats over a storage server.

Invariants:
    - One instance per session key; the connection is resolved fresh on every call
    - The session key is redacted in logs and error contexts
    - Name validation runs before any remote call (connection resolution included)
    - Existence check strictly precedes the mutation (create/drop); no creation
      attempt when the check says the name exists
    - Caller conditions (empty, duplicate, undefined) come back as AdminResult failures;
      connection, storage, and encoding failures are raised
    - StorageTransportError never escapes: it becomes the operation's typed error,
      with the driver exception kept on .cause

Design Decisions:
    - Check-then-act is NOT atomic. Two callers racing on one name can both pass the
      check; the server then rejects (surfaced as DatabaseCreationError) or no-ops
      the second mutation. No lock is taken here.
    - Creation is forced by listing the new database's collections: the server only
      persists a database once something in it has been touched
"""

import logging

from mongo_admin.core.admin_result import AdminResult
from mongo_admin.core.domain_types import (
    DatabaseName, SessionKey, StatEntry, redact_session_key,
)
from mongo_admin.core.enforce_database_name import validate_database_name
from mongo_admin.core.errors import (
    DatabaseCreationError,
    DatabaseDeletionError,
    DatabaseListError,
    DatabaseStatsError,
    DuplicateDatabaseError,
    ErrorContext,
    StorageTransportError,
    UndefinedDatabaseError,
)
from mongo_admin.core.stat_entries import build_stat_entries
from mongo_admin.core.storage_protocols import ConnectionProvider, StorageConnection

logger = logging.getLogger(__name__)


class DatabaseAdminService:
    """Administrative operations on the databases visible to one session."""

    def __init__(self, provider: ConnectionProvider, session_key: SessionKey):
        self._provider = provider
        self._session_key = session_key
        self._log_key = redact_session_key(session_key)

    def list_databases(self) -> list[str]:
        """Names of all databases on the server, in server order."""
        ctx = self._context("list_databases")
        connection = self._connect()
        try:
            return list(connection.list_database_names())
        except StorageTransportError as e:
            self._log_failure("list_databases", e)
            raise DatabaseListError(e.cause or e, ctx) from e

    def create_database(self, name: DatabaseName | None) -> AdminResult[str]:
        """Create `name` unless it already exists."""
        ctx = self._context("create_database", name)
        invalid = validate_database_name(name, ctx)
        if invalid:
            return self._reject(invalid)

        connection = self._connect()
        try:
            if name in connection.list_database_names():
                return self._reject(DuplicateDatabaseError(name, ctx))
            connection.get_database(name).force_materialize()
        except StorageTransportError as e:
            self._log_failure("create_database", e, name)
            raise DatabaseCreationError(e.cause or e, ctx) from e

        logger.info(
            f"Created database {name}",
            extra={"session_key": self._log_key, "database_name": name},
        )
        return AdminResult.success(f"Created DB with name [{name}]")

    def drop_database(self, name: DatabaseName | None) -> AdminResult[str]:
        """Drop `name` if it exists."""
        ctx = self._context("drop_database", name)
        invalid = validate_database_name(name, ctx)
        if invalid:
            return self._reject(invalid)

        connection = self._connect()
        try:
            if name not in connection.list_database_names():
                return self._reject(UndefinedDatabaseError(name, ctx))
            connection.drop_database(name)
        except StorageTransportError as e:
            self._log_failure("drop_database", e, name)
            raise DatabaseDeletionError(e.cause or e, ctx) from e

        logger.info(
            f"Dropped database {name}",
            extra={"session_key": self._log_key, "database_name": name},
        )
        return AdminResult.success(f"Deleted DB with name [{name}]")

    def get_stats(self, name: DatabaseName | None) -> AdminResult[list[StatEntry]]:
        """Stats document of `name`, one StatEntry per key in server order.

        StatsEncodingError propagates unwrapped: it is a local shaping failure,
        not a storage one.
        """
        ctx = self._context("get_stats", name)
        invalid = validate_database_name(name, ctx)
        if invalid:
            return self._reject(invalid)

        connection = self._connect()
        try:
            if name not in connection.list_database_names():
                return self._reject(UndefinedDatabaseError(name, ctx))
            stats = connection.get_database(name).stats()
        except StorageTransportError as e:
            self._log_failure("get_stats", e, name)
            raise DatabaseStatsError(e.cause or e, ctx) from e

        return AdminResult.success(build_stat_entries(stats))

    # === Private helpers ======================================================

    def _connect(self) -> StorageConnection:
        return self._provider.resolve(self._session_key)

    def _context(
        self, operation: str, name: DatabaseName | None = None,
    ) -> ErrorContext:
        return ErrorContext(
            session_key=self._log_key, database_name=name, operation=operation,
        )

    def _reject(self, error) -> AdminResult:
        logger.warning(
            f"{error.context.operation} rejected: {error.message}",
            extra={
                "session_key": self._log_key,
                "database_name": error.context.database_name,
                "error_code": error.code,
            },
        )
        return AdminResult.failure(error)

    def _log_failure(
        self, operation: str, exc: StorageTransportError,
        name: DatabaseName | None = None,
    ) -> None:
        logger.error(
            f"Storage failure during {operation}: {exc}",
            extra={
                "session_key": self._log_key,
                "database_name": name,
                "operation": operation,
            },
        )
