"""
Record model and JSON encoding for GET /data.

A Record is one row from the store, keyed by the store's column names.
The gateway is schema-agnostic: it never renames, drops or reorders
columns, and it never reorders rows.

Values JSON cannot carry natively are encoded as text:
    - bytes / memoryview -> base64
    - datetime / date / time -> ISO-8601
    - Decimal -> str(value)
"""

from __future__ import annotations

import base64
import datetime as dt
import json
import sqlite3
from collections.abc import Iterable, Sequence
from decimal import Decimal
from typing import Any

Record = dict[str, Any]

DATA_ROUTE = "/data"


def row_to_record(columns: Sequence[str], row: Sequence[Any]) -> Record:
    """Build a Record from a cursor row, keeping column order."""
    return {name: row[i] for i, name in enumerate(columns)}


def rows_to_records(cursor: sqlite3.Cursor) -> list[Record]:
    """Drain a cursor into Records in the order the store returned them."""
    columns = [d[0] for d in (cursor.description or [])]
    return [row_to_record(columns, row) for row in cursor.fetchall()]


def _default(value: Any) -> Any:
    if isinstance(value, (bytes, bytearray, memoryview)):
        return base64.b64encode(bytes(value)).decode("ascii")
    if isinstance(value, (dt.datetime, dt.date, dt.time)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return str(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def encode_records(records: Iterable[Record]) -> str:
    """Serialize Records to a JSON array string.

    Args:
        records: Records in store order

    Returns:
        JSON text; "[]" for no records

    Raises:
        TypeError: For a value with no JSON form
        ValueError: For NaN or infinite floats, which JSON cannot carry
    """
    return json.dumps(list(records), default=_default, ensure_ascii=False, allow_nan=False)
