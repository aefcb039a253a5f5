"""
Read-only SQLite connection for the Rowgate gateway.

This module owns the single long-lived handle between the gateway and the
relational store. The handle is opened once at startup and reused for
every request.

Invariants:
    - The database is opened read-only (mode=ro and PRAGMA query_only)
    - Only one statement runs on the handle at a time
    - A failed query never closes the handle
    - close() clears the handle under the same lock as queries
    - Blocking sqlite3 calls run in the default executor, never on the loop

How to change safely:
    - Keep the SELECT fixed; callers pass no SQL
    - Route every new access through _run() so the lock is always held
"""

from __future__ import annotations

import asyncio
import logging
import sqlite3
from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar

from ..errors import ConnectError, StoreError
from ..records import Record, rows_to_records

logger = logging.getLogger(__name__)

T = TypeVar("T")


def quote_identifier(name: str) -> str:
    """Quote an SQL identifier so a table name can never inject SQL."""
    return '"' + name.replace('"', '""') + '"'


class StoreConnection:
    """Single read-only connection to one SQLite table.

    Thread safety:
        The sqlite3 handle is shared across executor threads
        (check_same_thread=False) and serialized with an asyncio.Lock.

    Example:
        >>> store = StoreConnection("/var/lib/rowgate/app.db", table="items")
        >>> await store.connect()
        >>> rows = await store.fetch_all()
        >>> await store.close()
    """

    def __init__(
        self,
        database: str,
        table: str,
        busy_timeout_ms: int = 5000,
    ) -> None:
        """Initialize the connection (does not open it).

        Args:
            database: Path to the SQLite database file
            table: Table read by fetch_all()
            busy_timeout_ms: SQLite busy timeout
        """
        self.database = database
        self.table = table
        self.busy_timeout_ms = busy_timeout_ms
        self._conn: sqlite3.Connection | None = None
        self._lock = asyncio.Lock()
        self._select_sql = f"SELECT * FROM {quote_identifier(table)}"

    @property
    def is_connected(self) -> bool:
        return self._conn is not None

    async def _run(self, fn: Callable[..., T], *args: Any) -> T:
        async with self._lock:
            return await asyncio.get_event_loop().run_in_executor(None, fn, *args)

    def _open(self) -> sqlite3.Connection:
        path = Path(self.database)
        if not path.is_file():
            raise ConnectError(f"Database file not found: {self.database}", self.database)

        try:
            conn = sqlite3.connect(
                f"{path.resolve().as_uri()}?mode=ro",
                uri=True,
                timeout=self.busy_timeout_ms / 1000.0,
                check_same_thread=False,
            )
        except sqlite3.Error as e:
            raise ConnectError(f"Cannot open database {self.database}: {e}", self.database) from e

        try:
            conn.execute(f"PRAGMA busy_timeout = {int(self.busy_timeout_ms)}")
            conn.execute("PRAGMA query_only = ON")
            # Forces SQLite to read the header; catches non-database files
            conn.execute("SELECT count(*) FROM sqlite_master").fetchone()
        except sqlite3.Error as e:
            conn.close()
            raise ConnectError(f"Cannot read database {self.database}: {e}", self.database) from e

        return conn

    def _select(self) -> list[Record]:
        conn = self._conn
        if conn is None:
            raise StoreError("Store connection is closed", self.table)

        try:
            cursor = conn.execute(self._select_sql)
            try:
                return rows_to_records(cursor)
            finally:
                cursor.close()
        except sqlite3.Error as e:
            raise StoreError(f"Query on table '{self.table}' failed: {e}", self.table) from e

    async def connect(self) -> None:
        """Open the handle.

        Raises:
            ConnectError: If the database cannot be opened or read
        """
        if self._conn is not None:
            return

        self._conn = await self._run(self._open)
        logger.info(
            "Store connection established",
            extra={"database": self.database, "table": self.table},
        )

    async def fetch_all(self) -> list[Record]:
        """Run the fixed SELECT over the configured table.

        Returns:
            Records in the order the query returned them; [] if the table is empty

        Raises:
            StoreError: If the query fails
        """
        return await self._run(self._select)

    async def close(self) -> None:
        """Close the handle. Safe to call more than once."""
        async with self._lock:
            if self._conn is None:
                return

            conn, self._conn = self._conn, None
            await asyncio.get_event_loop().run_in_executor(None, conn.close)

        logger.info("Store connection closed", extra={"database": self.database})
