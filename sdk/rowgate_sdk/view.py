"""
Rendering layer for fetched records.

RecordsView owns the mutable slot that drives rendering. It issues one
fetch when mounted, shows the empty state until the fetch resolves, and
then either fills the slot or reports the failure to the log.

Example:
    >>> view = RecordsView(DataClient("http://localhost:8081/data"))
    >>> view.mount()          # renders "(no records)" right away
    >>> await view.settled()  # re-renders once the records arrive
    >>> len(view.records)
    1

Invariants:
    - mount() starts at most one fetch per view
    - On failure the slot stays [] (never partial or stale data)
    - Nothing raised by the fetch escapes the view
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Sequence

from .client import DataClient
from .errors import TransportError
from .render import render_table
from .result import FetchResult, Record

logger = logging.getLogger(__name__)

Renderer = Callable[[Sequence[Record]], None]


class RecordsView:
    """View that renders the records of one fetch.

    Attributes:
        records: Slot holding the records currently shown
        error: Error of a failed fetch, if any
    """

    def __init__(
        self,
        client: DataClient,
        render: Renderer = render_table,
    ) -> None:
        """Initialize the view.

        Args:
            client: Data client to fetch from
            render: Called with the slot contents on every render
        """
        self._client = client
        self._render = render
        self._task: asyncio.Task[FetchResult] | None = None
        self.records: list[Record] = []
        self.error: TransportError | None = None

    @property
    def is_mounted(self) -> bool:
        return self._task is not None

    @property
    def is_settled(self) -> bool:
        return self._task is not None and self._task.done()

    def mount(self) -> asyncio.Task[FetchResult]:
        """Render the empty state and start the fetch.

        Calling mount() again returns the task of the first call.

        Returns:
            The fetch task
        """
        if self.is_mounted:
            return self._task

        self.render()
        self._task = self._client.fetch_all()
        self._task.add_done_callback(self._on_settled)
        return self._task

    async def settled(self) -> None:
        """Wait until the fetch has resolved and the view has updated."""
        if self._task is None:
            raise RuntimeError("View is not mounted")

        await asyncio.wait({self._task})
        # Done callbacks run on the next loop iteration
        await asyncio.sleep(0)

    def render(self) -> None:
        self._render(self.records)

    def _on_settled(self, task: asyncio.Task[FetchResult]) -> None:
        if task.cancelled():
            logger.warning("Record fetch was cancelled", extra={"url": self._client.url})
            return

        exc = task.exception()
        if exc is not None:
            logger.error(
                f"Record fetch crashed: {exc}",
                exc_info=exc,
                extra={"url": self._client.url},
            )
            return

        result = task.result()
        if result.ok:
            self.records = list(result.value)
            self.error = None
            self.render()
        else:
            self.error = result.error
            logger.error(
                f"Record fetch failed: {result.error}",
                extra={"url": self._client.url, "status": result.error.status},
            )
