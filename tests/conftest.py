"""
Shared fixtures for Rowgate tests.

Databases are plain SQLite files under pytest's tmp_path. Tables are
created without a primary key so a full scan returns rows in insertion
order, which lets tests check that nothing re-sorts them.
"""

import sqlite3
from contextlib import closing
from pathlib import Path
from typing import Any, Callable

import pytest
from aiohttp.test_utils import TestClient, TestServer

from gateway.rowgate_server.api import create_http_app
from gateway.rowgate_server.config import HttpConfig
from gateway.rowgate_server.service import QueryGateway
from gateway.rowgate_server.store import StoreConnection

ALPHA = {
    "id": 1,
    "name": "Alpha",
    "description": "first",
    "created_at": "2024-01-01T00:00:00Z",
}


def write_table(database: Path, rows: list[dict[str, Any]], table: str = "items") -> None:
    """Create items(id, name, description, created_at) and insert rows in order."""
    with closing(sqlite3.connect(database)) as conn, conn:
        conn.execute(
            f'CREATE TABLE IF NOT EXISTS "{table}" ('
            "id INTEGER, name TEXT, description TEXT, created_at TEXT)"
        )
        conn.executemany(
            f'INSERT INTO "{table}" (id, name, description, created_at) '
            "VALUES (:id, :name, :description, :created_at)",
            rows,
        )


def drop_table(database: Path, table: str = "items") -> None:
    with closing(sqlite3.connect(database)) as conn, conn:
        conn.execute(f'DROP TABLE "{table}"')


@pytest.fixture
def make_db(tmp_path) -> Callable[..., Path]:
    """Factory: make_db(rows, table="items", name="app.db") -> path."""

    def _make(rows: list[dict[str, Any]], table: str = "items", name: str = "app.db") -> Path:
        path = tmp_path / name
        write_table(path, rows, table)
        return path

    return _make


@pytest.fixture
def alpha_db(make_db) -> Path:
    """Database holding the single Alpha row."""
    return make_db([ALPHA])


@pytest.fixture
async def gateway(alpha_db):
    """Started gateway over alpha_db."""
    gw = QueryGateway(StoreConnection(str(alpha_db), table="items"))
    await gw.start()
    yield gw
    await gw.close()


@pytest.fixture
async def http_client(gateway):
    """aiohttp test client bound to the gateway app."""
    app = create_http_app(gateway, HttpConfig())
    client = TestClient(TestServer(app))
    await client.start_server()
    yield client
    await client.close()
