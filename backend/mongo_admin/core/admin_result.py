"""Admin Result — value envelope for operations whose expected failures are not exceptional.

Invariants:
    - Exactly one of value/error is meaningful: ok is True iff error is None
    - Only caller-level conditions (empty name, duplicate, undefined) travel as values;
      connection and storage failures are still raised
    - unwrap() returns the value or raises the carried error unchanged
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

from mongo_admin.core.errors import MongoAdminError

T = TypeVar("T")


@dataclass(frozen=True)
class AdminResult(Generic[T]):
    """Outcome of one admin operation."""
    value: T | None = None
    error: MongoAdminError | None = None

    @classmethod
    def success(cls, value: T) -> "AdminResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: MongoAdminError) -> "AdminResult[T]":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]
