"""
Unit tests for the QueryGateway state machine.

Tests cover:
- Startup transitions (READY, FAILED)
- Per-request QUERYING state
- Errors before startup and after query failures
- Health reporting
"""

import asyncio

import pytest

from gateway.rowgate_server.errors import ConnectError, GatewayNotReadyError, StoreError
from gateway.rowgate_server.service import GatewayState, QueryGateway
from gateway.rowgate_server.store import StoreConnection


class FakeStore:
    """In-memory stand-in for StoreConnection."""

    def __init__(self, rows=None, connect_error=None, table="items"):
        self.table = table
        self.rows = rows if rows is not None else []
        self.connect_error = connect_error
        self.query_error = None
        self.gate: asyncio.Event | None = None
        self.connected = False
        self.closed = False
        self.queries = 0

    async def connect(self):
        if self.connect_error:
            raise self.connect_error
        self.connected = True

    async def fetch_all(self):
        self.queries += 1
        if self.gate is not None:
            await self.gate.wait()
        if self.query_error:
            raise self.query_error
        return list(self.rows)

    async def close(self):
        self.closed = True


class TestLifecycle:
    """Tests for start() and close()."""

    def test_initial_state(self):
        gateway = QueryGateway(FakeStore())

        assert gateway.state == GatewayState.UNINITIALIZED
        assert not gateway.is_ready

    @pytest.mark.asyncio
    async def test_start_moves_to_ready(self):
        store = FakeStore()
        gateway = QueryGateway(store)

        await gateway.start()

        assert gateway.state == GatewayState.READY
        assert store.connected

    @pytest.mark.asyncio
    async def test_connect_failure_is_terminal(self):
        gateway = QueryGateway(FakeStore(connect_error=ConnectError("down", "app.db")))

        with pytest.raises(ConnectError):
            await gateway.start()

        assert gateway.state == GatewayState.FAILED
        with pytest.raises(GatewayNotReadyError):
            await gateway.start()

    @pytest.mark.asyncio
    async def test_start_twice_is_rejected(self):
        gateway = QueryGateway(FakeStore())
        await gateway.start()

        with pytest.raises(GatewayNotReadyError):
            await gateway.start()

    @pytest.mark.asyncio
    async def test_close(self):
        store = FakeStore()
        gateway = QueryGateway(store)
        await gateway.start()

        await gateway.close()

        assert store.closed
        assert gateway.state == GatewayState.CLOSED

    @pytest.mark.asyncio
    async def test_failed_state_survives_close(self):
        gateway = QueryGateway(FakeStore(connect_error=ConnectError("down")))
        with pytest.raises(ConnectError):
            await gateway.start()

        await gateway.close()

        assert gateway.state == GatewayState.FAILED


class TestGetAll:
    """Tests for get_all()."""

    @pytest.mark.asyncio
    async def test_returns_store_rows(self):
        rows = [{"id": 2}, {"id": 1}]
        gateway = QueryGateway(FakeStore(rows=rows))
        await gateway.start()

        assert await gateway.get_all() == rows

    @pytest.mark.asyncio
    async def test_empty_table(self):
        gateway = QueryGateway(FakeStore(rows=[]))
        await gateway.start()

        assert await gateway.get_all() == []

    @pytest.mark.asyncio
    async def test_before_start_raises_not_ready(self):
        gateway = QueryGateway(FakeStore())

        with pytest.raises(GatewayNotReadyError) as exc_info:
            await gateway.get_all()

        assert exc_info.value.state == "uninitialized"

    @pytest.mark.asyncio
    async def test_store_error_keeps_gateway_ready(self):
        store = FakeStore(rows=[{"id": 1}])
        gateway = QueryGateway(store)
        await gateway.start()

        store.query_error = StoreError("no such table: items", "items")
        with pytest.raises(StoreError):
            await gateway.get_all()
        assert gateway.state == GatewayState.READY

        store.query_error = None
        assert await gateway.get_all() == [{"id": 1}]

    @pytest.mark.asyncio
    async def test_querying_state_while_in_flight(self):
        store = FakeStore(rows=[{"id": 1}])
        gateway = QueryGateway(store)
        await gateway.start()
        store.gate = asyncio.Event()

        task = asyncio.create_task(gateway.get_all())
        await asyncio.sleep(0)
        assert gateway.state == GatewayState.QUERYING

        store.gate.set()
        assert await task == [{"id": 1}]
        assert gateway.state == GatewayState.READY

    @pytest.mark.asyncio
    async def test_over_real_store(self, alpha_db):
        gateway = QueryGateway(StoreConnection(str(alpha_db), table="items"))
        await gateway.start()

        records = await gateway.get_all()

        assert [r["name"] for r in records] == ["Alpha"]
        await gateway.close()


class TestHealth:
    """Tests for health()."""

    @pytest.mark.asyncio
    async def test_ready(self):
        gateway = QueryGateway(FakeStore(table="things"))
        await gateway.start()

        health = await gateway.health()

        assert health["healthy"] is True
        assert health["state"] == "ready"
        assert health["table"] == "things"
        assert health["version"]

    @pytest.mark.asyncio
    async def test_not_started(self):
        health = await QueryGateway(FakeStore()).health()

        assert health["healthy"] is False
        assert health["state"] == "uninitialized"
