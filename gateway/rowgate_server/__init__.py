"""
Rowgate Server - read-only HTTP gateway over a relational table.

This package implements the backend half of the Rowgate pipeline:
- One long-lived SQLite connection owned by the process
- A fixed SELECT over one configured table
- An aiohttp surface exposing the rows as JSON at GET /data

Architecture:
    ┌─────────────┐  GET /data  ┌─────────────┐  SELECT *  ┌─────────────┐
    │ Data Client │────────────▶│ QueryGateway│───────────▶│   SQLite    │
    │   (SDK)     │◀────────────│ (aiohttp)   │◀───────────│   (table)   │
    └─────────────┘  JSON array └─────────────┘    rows    └─────────────┘

Invariants:
    - The gateway never writes to the store
    - Row order on the wire equals the order the query returned
    - The store connection is created once and injected into the gateway
    - A failed startup connection is fatal; there is no reconnect loop

How to change safely:
    - Keep GET /data schema-agnostic (no renaming or filtering of columns)
    - Any new route must go through the CORS middleware
"""

from ._version import __version__

__all__ = ["__version__"]
