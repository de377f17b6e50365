"""Database Schemas — Pydantic models for session and database-admin endpoints.

Invariants:
    - SessionConnect.user: 1-128 chars, stripped, non-empty
    - SessionConnectResponse.binding is a display label; only session_key authenticates
    - DatabaseCreate.name is NOT length-validated here: empty/None names must reach the
      service so they are reported as EMPTY_DATABASE_NAME, not a generic validation error
    - StatEntryResponse serializes with capitalized Key/Value/Type field names
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from mongo_admin.core.domain_types import StatEntry


class SessionConnect(BaseModel):
    """Bind a storage-server connection to a new session."""
    user: str = Field(min_length=1, max_length=128)
    host: str | None = Field(None, min_length=1, max_length=255)
    port: int | None = Field(None, ge=1, le=65535)
    password: str | None = Field(None, max_length=1024)

    @field_validator("user")
    @classmethod
    def strip_user(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("user cannot be empty or whitespace")
        return v


class SessionConnectResponse(BaseModel):
    session_key: str
    binding: str


class DatabaseCreate(BaseModel):
    name: str | None = None


class DatabaseListResponse(BaseModel):
    databases: list[str]


class MessageResponse(BaseModel):
    message: str


class StatEntryResponse(BaseModel):
    """One stats key as rendered to clients."""
    model_config = ConfigDict(populate_by_name=True)

    key: str = Field(alias="Key")
    value: str = Field(alias="Value")
    type: str = Field(alias="Type")

    @classmethod
    def from_entry(cls, entry: StatEntry) -> "StatEntryResponse":
        return cls(key=entry.key, value=entry.value, type=entry.type.value)


class DatabaseStatsResponse(BaseModel):
    database: str
    stats: list[StatEntryResponse]
