"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - SessionKey is an opaque, unguessable token; it never encodes user, host, or port
    - A binding label ("<user>@<host>:<port>") describes a session but never resolves one
    - StatEntry is immutable and renders with capitalized Key/Value/Type fields
    - Short type names are members of StatType — no free-form strings

Design Decisions:
    - NewType over dataclass wrappers for identifiers: zero runtime cost
    - str Enum for StatType: serializes to JSON without custom encoders
"""

import secrets
from dataclasses import dataclass
from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

SessionKey = NewType("SessionKey", str)
DatabaseName = NewType("DatabaseName", str)

_SESSION_KEY_BYTES = 32


def new_session_key() -> SessionKey:
    """Issue a fresh session token (URL-safe, 256 bits of entropy)."""
    return SessionKey(secrets.token_urlsafe(_SESSION_KEY_BYTES))


def describe_binding(user: str, host: str, port: int) -> str:
    """Human-readable label of a user's binding to one server, for logs and responses."""
    return f"{user}@{host}:{port}"


def redact_session_key(session_key: str | None) -> str | None:
    """Short prefix of a session token, safe to log."""
    if not session_key:
        return session_key
    return f"{session_key[:6]}..."


# ─── Enums ───────────────────────────────────────────────────────

class StatType(str, Enum):
    """Short type names reported for stats values."""
    BOOLEAN = "Boolean"
    INTEGER = "Integer"
    LONG = "Long"
    DOUBLE = "Double"
    STRING = "String"
    DOCUMENT = "Document"
    ARRAY = "Array"
    NULL = "Null"
    DATE = "Date"
    OBJECT_ID = "ObjectId"
    DECIMAL128 = "Decimal128"
    OBJECT = "Object"


# ─── Value Types ─────────────────────────────────────────────────

@dataclass(frozen=True)
class StatEntry:
    """One key of a database stats document, stringified and typed."""
    key: str
    value: str
    type: StatType

    def to_dict(self) -> dict[str, str]:
        return {"Key": self.key, "Value": self.value, "Type": self.type.value}
