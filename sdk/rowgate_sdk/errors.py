"""
Error types for the Rowgate SDK.

This module defines the exception types carried by failed fetches:
- RowgateError: Base exception
- TransportError: Network, HTTP status or body decoding failure

Invariants:
    - All errors inherit from RowgateError
    - Errors include context for debugging (url, status)
    - Errors are delivered inside Failure results, not raised from fetch tasks
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class RowgateError(Exception):
    """Base exception for all Rowgate SDK errors.

    Attributes:
        message: Error message
        code: Error code for programmatic handling
        details: Additional error context
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or "ROWGATE_ERROR"
        self.details = details or {}


class TransportError(RowgateError):
    """Fetching records from the gateway failed.

    Raised when:
    - The gateway is unreachable or the request times out
    - The gateway answers with a non-2xx status
    - The body is not JSON, or not a JSON array of objects
    """

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        status: Optional[int] = None,
    ) -> None:
        super().__init__(
            message,
            code="TRANSPORT_ERROR",
            details={"url": url, "status": status},
        )
        self.url = url
        self.status = status
