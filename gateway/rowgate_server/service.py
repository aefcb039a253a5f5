"""
Query gateway service.

QueryGateway is the component the HTTP layer talks to. It receives its
store connection by injection and drives it through a small state machine:

    UNINITIALIZED -> CONNECTING -> READY
    READY -> QUERYING -> READY          (per request)
    CONNECTING -> FAILED                (terminal)

Invariants:
    - get_all() never mutates the store
    - FAILED is terminal; start() is not retried
    - A StoreError during a query leaves the gateway READY
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any

from ._version import __version__
from .errors import ConnectError, GatewayNotReadyError
from .records import Record
from .store import StoreConnection

logger = logging.getLogger(__name__)


class GatewayState(Enum):
    """Lifecycle states of the gateway."""

    UNINITIALIZED = "uninitialized"
    CONNECTING = "connecting"
    READY = "ready"
    QUERYING = "querying"
    FAILED = "failed"
    CLOSED = "closed"


class QueryGateway:
    """Serves the fixed read over one injected store connection.

    Attributes:
        store: The store connection (owned by this gateway once started)

    Example:
        >>> gateway = QueryGateway(StoreConnection("app.db", table="items"))
        >>> await gateway.start()
        >>> records = await gateway.get_all()
    """

    def __init__(self, store: StoreConnection) -> None:
        self.store = store
        self._state = GatewayState.UNINITIALIZED
        self._in_flight = 0

    @property
    def state(self) -> GatewayState:
        if self._state == GatewayState.READY and self._in_flight:
            return GatewayState.QUERYING
        return self._state

    @property
    def is_ready(self) -> bool:
        return self._state == GatewayState.READY

    async def start(self) -> None:
        """Open the store connection.

        Raises:
            ConnectError: If the store cannot be reached; the gateway moves to FAILED
            GatewayNotReadyError: If start() is called outside UNINITIALIZED
        """
        if self._state != GatewayState.UNINITIALIZED:
            raise GatewayNotReadyError(self._state.value)

        self._state = GatewayState.CONNECTING
        try:
            await self.store.connect()
        except ConnectError:
            self._state = GatewayState.FAILED
            raise

        self._state = GatewayState.READY
        logger.info("Query gateway ready", extra={"table": self.store.table})

    async def get_all(self) -> list[Record]:
        """Return every row of the configured table.

        Returns:
            Records in store order; [] when the table is empty

        Raises:
            GatewayNotReadyError: If the gateway is not READY
            StoreError: If the query fails
        """
        if self._state != GatewayState.READY:
            raise GatewayNotReadyError(self.state.value)

        self._in_flight += 1
        try:
            records = await self.store.fetch_all()
        finally:
            self._in_flight -= 1

        logger.debug("Served records", extra={"table": self.store.table, "count": len(records)})
        return records

    async def health(self) -> dict[str, Any]:
        """Report gateway health."""
        return {
            "healthy": self.is_ready,
            "state": self.state.value,
            "table": self.store.table,
            "version": __version__,
        }

    async def close(self) -> None:
        """Close the store connection."""
        await self.store.close()
        if self._state != GatewayState.FAILED:
            self._state = GatewayState.CLOSED
