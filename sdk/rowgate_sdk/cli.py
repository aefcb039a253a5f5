"""
Command line viewer for a Rowgate gateway.

Usage:
    rowgate-view
    rowgate-view --url http://gateway:8081/data --timeout 5

Prints the fetched records as a table. Exits 0 when the fetch succeeds
and 1 when it fails.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from collections.abc import Sequence

from .client import DataClient
from .config import ClientSettings
from .render import render_table
from .result import Record
from .view import RecordsView

logger = logging.getLogger(__name__)


async def run_view(url: str, timeout: float) -> int:
    """Mount a view, wait for the fetch and return an exit code."""

    def render(records: Sequence[Record]) -> None:
        # Skip the empty state shown before the fetch resolves
        if view.is_settled:
            render_table(records)

    async with DataClient(url, timeout=timeout) as client:
        view = RecordsView(client, render=render)
        view.mount()
        await view.settled()

    if view.error is not None:
        print(f"Fetch failed: {view.error.message}", file=sys.stderr)
        return 1
    return 0


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the viewer."""
    settings = ClientSettings()

    parser = argparse.ArgumentParser(description="Fetch and print records from a Rowgate gateway")
    parser.add_argument("--url", default=settings.gateway_url, help="Gateway data URL")
    parser.add_argument(
        "--timeout",
        type=float,
        default=settings.timeout_seconds,
        help="Request timeout in seconds",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Log at DEBUG level")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    sys.exit(asyncio.run(run_view(args.url, args.timeout)))


if __name__ == "__main__":
    main()
