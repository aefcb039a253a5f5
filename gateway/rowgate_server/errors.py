"""
Error types for the Rowgate server.

This module defines the exceptions raised between the store, the gateway
service and the HTTP layer:
- GatewayError: Base exception
- ConnectError: Store unreachable at startup (fatal)
- StoreError: Query failed on an otherwise healthy connection
- GatewayNotReadyError: Query attempted before the gateway is ready

Invariants:
    - All errors inherit from GatewayError
    - Error codes are stable; the HTTP layer puts them in response bodies
    - Messages never contain credentials
"""

from __future__ import annotations

from typing import Any


class GatewayError(Exception):
    """Base exception for all Rowgate server errors.

    Attributes:
        message: Error message
        code: Error code for programmatic handling
        details: Additional error context
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or "GATEWAY_ERROR"
        self.details = details or {}


class ConnectError(GatewayError):
    """Failed to open the store connection.

    Raised when:
    - The database file does not exist or cannot be opened
    - The file is not a database
    - Access to the file is denied
    """

    def __init__(self, message: str, database: str | None = None) -> None:
        super().__init__(
            message,
            code="CONNECT_ERROR",
            details={"database": database},
        )
        self.database = database


class StoreError(GatewayError):
    """Query execution failed.

    Raised when:
    - The configured table is absent (e.g. dropped while running)
    - The statement is malformed
    - A transient I/O error hits the database file

    The connection remains usable for later requests.
    """

    def __init__(self, message: str, table: str | None = None) -> None:
        super().__init__(
            message,
            code="STORE_ERROR",
            details={"table": table},
        )
        self.table = table


class GatewayNotReadyError(GatewayError):
    """Gateway is not in a state that can serve queries."""

    def __init__(self, state: str) -> None:
        super().__init__(
            f"Gateway is not ready (state={state})",
            code="NOT_READY",
            details={"state": state},
        )
        self.state = state
