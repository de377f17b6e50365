"""Error Hierarchy — typed, categorized exceptions for every database-admin failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Caller errors (400-level) are never retried; storage errors (500-level) wrap a cause
    - to_response() produces the REST envelope consumed by api/error_handlers.py
    - Driver exception types never escape: storage failures carry them on .cause only

Design Decisions:
    - Single hierarchy with MongoAdminError base: FastAPI global handler catches all
    - Error codes for storage failures keep the legacy names (GET_DB_LIST_EXCEPTION, ...)
      so existing clients branching on them keep working
"""

from dataclasses import dataclass, field
from enum import Enum
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    CONFLICT = "conflict"
    RESOURCE_NOT_FOUND = "resource_not_found"
    STORAGE = "storage"
    CONNECTION = "connection"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging.

    session_key holds a redacted prefix of the token, never the full key.
    """
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    session_key: str | None = None
    database_name: str | None = None
    operation: str | None = None


class MongoAdminError(Exception):
    """Base exception for all database-admin errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "session_key": self.context.session_key,
                    "database_name": self.context.database_name,
                    "operation": self.context.operation,
                },
            }
        }


# ─── Caller Errors (400-level) ──────────────────────────────────

class EmptyDatabaseNameError(MongoAdminError):
    """Database name argument was None or the empty string."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "EMPTY_DATABASE_NAME", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )


class DuplicateDatabaseError(MongoAdminError):
    """Create requested for a database that already exists."""
    def __init__(self, database_name: str, context: ErrorContext | None = None):
        super().__init__(
            f"DB with name [{database_name}] ALREADY EXISTS",
            "DUPLICATE_DATABASE", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context, 409,
        )
        self.database_name = database_name


class UndefinedDatabaseError(MongoAdminError):
    """Drop or stats requested for a database that does not exist."""
    def __init__(self, database_name: str, context: ErrorContext | None = None):
        super().__init__(
            f"DB with name [{database_name}] DOES NOT EXIST",
            "UNDEFINED_DATABASE", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, context, 404,
        )
        self.database_name = database_name


class ConnectionUnavailableError(MongoAdminError):
    """Session key could not be bound to a live storage connection."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "CONNECTION_UNAVAILABLE", ErrorCategory.CONNECTION,
            ErrorSeverity.ERROR, context, 401,
        )


# ─── Storage Errors (500-level) ─────────────────────────────────

class StorageOperationError(MongoAdminError):
    """Remote call to the storage server failed. Wraps the low-level cause."""

    def __init__(
        self,
        code: str,
        operation: str,
        cause: BaseException | None = None,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.operation = operation
        super().__init__(
            f"Storage {operation} failed: {cause}" if cause else f"Storage {operation} failed",
            code, ErrorCategory.STORAGE,
            ErrorSeverity.CRITICAL, ctx, 503,
        )
        self.operation = operation
        self.cause = cause


class DatabaseListError(StorageOperationError):
    """Listing database names failed."""
    def __init__(self, cause: BaseException | None = None, context: ErrorContext | None = None):
        super().__init__("GET_DB_LIST_EXCEPTION", "list_databases", cause, context)


class DatabaseCreationError(StorageOperationError):
    """Existence check or creation of a database failed."""
    def __init__(self, cause: BaseException | None = None, context: ErrorContext | None = None):
        super().__init__("DB_CREATION_EXCEPTION", "create_database", cause, context)


class DatabaseDeletionError(StorageOperationError):
    """Existence check or drop of a database failed."""
    def __init__(self, cause: BaseException | None = None, context: ErrorContext | None = None):
        super().__init__("DB_DELETION_EXCEPTION", "drop_database", cause, context)


class DatabaseStatsError(StorageOperationError):
    """Fetching database statistics failed."""
    def __init__(self, cause: BaseException | None = None, context: ErrorContext | None = None):
        super().__init__("GET_DB_STATS_EXCEPTION", "get_stats", cause, context)


# ─── Local Errors ───────────────────────────────────────────────

class StatsEncodingError(MongoAdminError):
    """A stats value could not be shaped into a stat entry."""
    def __init__(self, key: str, reason: str, context: ErrorContext | None = None):
        super().__init__(
            f"Could not encode stat entry '{key}': {reason}",
            "STATS_ENCODING_ERROR", ErrorCategory.INTERNAL,
            ErrorSeverity.ERROR, context, 500,
        )
        self.key = key


class StorageTransportError(Exception):
    """Raised by StorageConnection implementations on any driver/transport failure.

    Boundary type only: the service never lets it reach its caller.
    """

    def __init__(self, operation: str, cause: BaseException | None = None):
        super().__init__(f"{operation}: {cause}" if cause else operation)
        self.operation = operation
        self.cause = cause
