"""Database Name Enforcement — pure validation of the name argument.

Invariants:
    - Runs before any remote call (the service checks this before resolving a connection)
    - Returns the error instead of raising; the service decides how to surface it
    - Both None and "" are rejected with a message containing "empty"
"""

from mongo_admin.core.errors import EmptyDatabaseNameError, ErrorContext


def validate_database_name(
    name: str | None, context: ErrorContext | None = None,
) -> EmptyDatabaseNameError | None:
    """Return EmptyDatabaseNameError for None/"" names, else None."""
    if name is None:
        return EmptyDatabaseNameError("Database name is empty (null)", context)
    if name == "":
        return EmptyDatabaseNameError("Database name is empty", context)
    return None
