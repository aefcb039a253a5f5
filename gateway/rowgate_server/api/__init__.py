"""
API module for the Rowgate server.

This module provides the external interface: an aiohttp application
serving GET /data and GET /health.

Invariants:
    - Reads come from the single store connection via QueryGateway
    - All responses allow cross-origin reads

How to change safely:
    - Add new routes, don't change the shape of GET /data
"""

from .http_server import GATEWAY_KEY, create_http_app, start_http_site

__all__ = [
    "GATEWAY_KEY",
    "create_http_app",
    "start_http_site",
]
