"""
Seed tool for Rowgate.

Creates a sample table in a SQLite database so the gateway has something
to serve on a fresh checkout. The gateway itself never writes; this tool
is the only writer in the project.

Usage:
    rowgate-seed --database ./rowgate.db
    rowgate-seed --database ./rowgate.db --table items --reset
"""

from __future__ import annotations

import argparse
import logging
import sqlite3
import sys
from contextlib import closing
from pathlib import Path
from typing import Any

from ..store import quote_identifier

logger = logging.getLogger(__name__)

SAMPLE_ROWS: tuple[dict[str, Any], ...] = (
    {"id": 1, "name": "Alpha", "description": "first", "created_at": "2024-01-01T00:00:00Z"},
    {"id": 2, "name": "Beta", "description": "second", "created_at": "2024-01-02T00:00:00Z"},
    {"id": 3, "name": "Gamma", "description": None, "created_at": "2024-01-03T00:00:00Z"},
)


def seed_database(
    database: str,
    table: str = "items",
    rows: tuple[dict[str, Any], ...] | list[dict[str, Any]] = SAMPLE_ROWS,
    reset: bool = False,
) -> int:
    """Create the sample table and insert rows.

    Args:
        database: Path to the SQLite database file (created if missing)
        table: Table to create
        rows: Rows to insert; each needs id, name, description, created_at
        reset: Drop the table first

    Returns:
        Number of rows inserted
    """
    Path(database).parent.mkdir(parents=True, exist_ok=True)
    name = quote_identifier(table)

    with closing(sqlite3.connect(database)) as conn, conn:
        if reset:
            conn.execute(f"DROP TABLE IF EXISTS {name}")
        conn.execute(
            f"""
            CREATE TABLE IF NOT EXISTS {name} (
                id INTEGER PRIMARY KEY,
                name TEXT NOT NULL,
                description TEXT,
                created_at TEXT NOT NULL
            )
            """
        )
        cursor = conn.executemany(
            f"INSERT OR IGNORE INTO {name} (id, name, description, created_at) "
            "VALUES (:id, :name, :description, :created_at)",
            list(rows),
        )
        inserted = cursor.rowcount

    logger.info(f"Seeded {inserted} rows into {table} ({database})")
    return inserted


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the seed tool."""
    parser = argparse.ArgumentParser(description="Create a sample Rowgate table")
    parser.add_argument("--database", "-d", required=True, help="Path to SQLite database file")
    parser.add_argument("--table", "-t", default="items", help="Table name (default: items)")
    parser.add_argument("--reset", action="store_true", help="Drop the table before seeding")

    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")

    try:
        inserted = seed_database(args.database, args.table, reset=args.reset)
    except sqlite3.Error as e:
        print(f"Seeding failed: {e}", file=sys.stderr)
        sys.exit(1)

    print(f"Inserted {inserted} rows into {args.table}")


if __name__ == "__main__":
    main()
