"""
Store module for the Rowgate server.

Holds the single read-only connection to the relational store.

Invariants:
    - One connection per process, injected into the gateway
    - Queries on the connection never interleave
"""

from .connection import StoreConnection, quote_identifier

__all__ = [
    "StoreConnection",
    "quote_identifier",
]
