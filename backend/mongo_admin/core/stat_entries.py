"""Stat Entries — pure shaping of a stats document into typed, stringified entries.

Invariants:
    - Output order == iteration order of the input mapping
    - len(output) == len(input)
    - Type names come from a fixed table (StatType), never from runtime reflection
    - Any failure shaping a value raises StatsEncodingError naming the offending key,
      including circular or too-deeply nested containers

Design Decisions:
    - bool checked before int (bool is an int subclass), Int64 before int
    - Plain ints outside 32 bits report Long, matching what the server's wire types report
"""

import json
from collections.abc import Mapping
from datetime import datetime
from typing import Any

from bson import Decimal128, Int64, ObjectId

from mongo_admin.core.domain_types import StatEntry, StatType
from mongo_admin.core.errors import StatsEncodingError


_INT32_MIN = -(2 ** 31)
_INT32_MAX = 2 ** 31 - 1

# Checked in order; first match wins.
_TYPE_TABLE: tuple[tuple[type | tuple[type, ...], StatType], ...] = (
    (bool, StatType.BOOLEAN),
    (Int64, StatType.LONG),
    (float, StatType.DOUBLE),
    (str, StatType.STRING),
    (Mapping, StatType.DOCUMENT),
    ((list, tuple), StatType.ARRAY),
    (datetime, StatType.DATE),
    (ObjectId, StatType.OBJECT_ID),
    (Decimal128, StatType.DECIMAL128),
)


def short_type_name(value: Any) -> StatType:
    """Map a stats value to its short type name."""
    if value is None:
        return StatType.NULL
    for kind, stat_type in _TYPE_TABLE:
        if isinstance(value, kind):
            return stat_type
    if isinstance(value, int):
        if _INT32_MIN <= value <= _INT32_MAX:
            return StatType.INTEGER
        return StatType.LONG
    return StatType.OBJECT


def stringify_stat_value(value: Any) -> str:
    """Render a stats value as the string reported to callers.

    Raises TypeError/ValueError when a nested value cannot be rendered
    (circular containers included).
    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return repr(value)
    if isinstance(value, int):
        return str(int(value))
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, (Mapping, list, tuple)):
        return json.dumps(
            _jsonable(value), separators=(",", ":"), default=str, allow_nan=True,
        )
    return str(value)


def build_stat_entries(stats: Mapping[str, Any]) -> list[StatEntry]:
    """Shape a stats document into an ordered list of StatEntry."""
    entries = []
    for key, value in stats.items():
        try:
            rendered = stringify_stat_value(value)
        except (TypeError, ValueError, RecursionError) as e:
            raise StatsEncodingError(str(key), str(e)) from e
        entries.append(StatEntry(str(key), rendered, short_type_name(value)))
    return entries


# === Private helpers ==========================================================

def _jsonable(value: Any, _ancestors: frozenset[int] = frozenset()) -> Any:
    """Convert nested mappings (e.g. SON) to plain dicts so json can render them.

    A container that contains itself raises ValueError.
    """
    if not isinstance(value, (Mapping, list, tuple)):
        return value
    if id(value) in _ancestors:
        raise ValueError("circular reference")
    ancestors = _ancestors | {id(value)}
    if isinstance(value, Mapping):
        return {k: _jsonable(v, ancestors) for k, v in value.items()}
    return [_jsonable(v, ancestors) for v in value]
