"""
Plain text rendering of records.
"""

from __future__ import annotations

import sys
from collections.abc import Sequence
from typing import Any, TextIO

from .result import Record

EMPTY_TEXT = "(no records)"
NULL_TEXT = "NULL"


def _cell(value: Any) -> str:
    if value is None:
        return NULL_TEXT
    return str(value)


def columns_of(records: Sequence[Record]) -> list[str]:
    """Union of record keys in first-seen order."""
    seen: dict[str, None] = {}
    for record in records:
        for key in record:
            seen.setdefault(key, None)
    return list(seen)


def format_table(records: Sequence[Record]) -> str:
    """Format records as an aligned text table.

    Missing keys and None values render as NULL.
    """
    if not records:
        return EMPTY_TEXT

    columns = columns_of(records)
    rows = [[_cell(r.get(c)) for c in columns] for r in records]
    widths = [max(len(c), *(len(row[i]) for row in rows)) for i, c in enumerate(columns)]

    def line(cells: Sequence[str]) -> str:
        return " | ".join(cell.ljust(widths[i]) for i, cell in enumerate(cells)).rstrip()

    out = [line(columns), "-+-".join("-" * w for w in widths)]
    out.extend(line(row) for row in rows)
    return "\n".join(out)


def render_table(records: Sequence[Record], stream: TextIO | None = None) -> None:
    """Write format_table(records) to stream (stdout by default)."""
    stream = stream or sys.stdout
    stream.write(format_table(records) + "\n")
