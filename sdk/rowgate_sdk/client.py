"""
Rowgate client for Python SDK.

This module provides the Data Client:
- DataClient: fetches GET /data from a Rowgate gateway

Example:
    >>> client = DataClient("http://localhost:8081/data")
    >>> task = client.fetch_all()   # returns immediately
    >>> result = await task
    >>> records = result.unwrap()

Invariants:
    - One fetch_all() call issues exactly one GET; no retry, cache or dedup
    - The returned task never raises; failures resolve to Failure
    - Records keep the order the gateway sent them in
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any

import aiohttp

from .errors import TransportError
from .result import Failure, FetchResult, Record, Success

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 30.0


def decode_records(body: str, url: str | None = None) -> list[Record]:
    """Decode a GET /data body.

    Args:
        body: Response text
        url: Source URL, for error context

    Returns:
        Records in body order

    Raises:
        TransportError: If the body is not a JSON array of objects
    """
    try:
        data = json.loads(body)
    except (ValueError, RecursionError) as e:
        raise TransportError(f"Malformed JSON body: {e}", url=url) from e

    if not isinstance(data, list):
        raise TransportError(
            f"Expected a JSON array, got {type(data).__name__}",
            url=url,
        )
    for i, item in enumerate(data):
        if not isinstance(item, dict):
            raise TransportError(
                f"Expected a JSON object at index {i}, got {type(item).__name__}",
                url=url,
            )
    return data


class DataClient:
    """Asynchronous client for the Rowgate GET /data endpoint.

    Can be used directly (a session is opened per fetch) or as an async
    context manager that shares one aiohttp session across fetches.

    Example:
        >>> async with DataClient("http://localhost:8081/data") as client:
        ...     result = await client.fetch_all()
    """

    def __init__(
        self,
        url: str,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        """Initialize the client.

        Args:
            url: Full URL of the gateway's data route
            timeout: Total time budget per fetch, in seconds
        """
        self.url = url
        self.timeout = timeout
        self._session: aiohttp.ClientSession | None = None

    async def __aenter__(self) -> DataClient:
        await self.connect()
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    def _new_session(self) -> aiohttp.ClientSession:
        return aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=self.timeout))

    async def connect(self) -> None:
        """Open a shared session."""
        if self._session is None:
            self._session = self._new_session()

    async def close(self) -> None:
        """Close the shared session, if any."""
        if self._session is not None:
            await self._session.close()
            self._session = None

    def fetch_all(self) -> asyncio.Task[FetchResult]:
        """Start fetching every record from the gateway.

        Must be called from a running event loop. Returns at once; the
        task resolves to Success(records) or Failure(TransportError).

        Returns:
            Task resolving to the fetch result
        """
        return asyncio.get_running_loop().create_task(self._fetch())

    async def _fetch(self) -> FetchResult:
        try:
            if self._session is not None:
                records = await self._get(self._session)
            else:
                async with self._new_session() as session:
                    records = await self._get(session)
        except TransportError as e:
            logger.debug(f"Fetch failed: {e}", extra={"url": self.url})
            return Failure(e)

        return Success(records)

    async def _get(self, session: aiohttp.ClientSession) -> list[Record]:
        try:
            async with session.get(self.url) as response:
                body = await response.text()
                if not 200 <= response.status < 300:
                    raise TransportError(
                        f"Gateway returned HTTP {response.status}: {body[:200]}",
                        url=self.url,
                        status=response.status,
                    )
        except asyncio.TimeoutError as e:
            raise TransportError(
                f"Request timed out after {self.timeout}s",
                url=self.url,
            ) from e
        except (aiohttp.ClientError, UnicodeDecodeError) as e:
            raise TransportError(f"Request failed: {e}", url=self.url) from e

        return decode_records(body, url=self.url)
