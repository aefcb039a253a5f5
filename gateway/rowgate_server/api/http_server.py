"""
HTTP server implementation for Rowgate.

This module exposes the query gateway over aiohttp:
- GET /data: every row of the configured table as a JSON array
- GET /health: gateway state for probes

Invariants:
    - Every response carries Access-Control-Allow-Origin, errors included
    - GET /data returns 200 with [] for an empty table, never null
    - StoreError maps to 500 and never stops the server
    - JSON request/response format

How to change safely:
    - Register new routes in create_http_app() so both middlewares apply
    - Keep the error body keys (error, error_code) stable for clients
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from aiohttp import web

from ..config import HttpConfig
from ..errors import GatewayNotReadyError, StoreError
from ..records import DATA_ROUTE, encode_records
from ..service import QueryGateway

logger = logging.getLogger(__name__)

GATEWAY_KEY = web.AppKey("gateway", QueryGateway)


def create_http_app(
    gateway: QueryGateway,
    config: HttpConfig | None = None,
) -> web.Application:
    """Create an HTTP application for Rowgate.

    Args:
        gateway: QueryGateway instance (already started, or started by the caller)
        config: HTTP server configuration

    Returns:
        aiohttp Application instance
    """
    config = config or HttpConfig()

    def add_cors_headers(request: web.Request, headers: Any) -> None:
        if "*" in config.cors_origins:
            headers["Access-Control-Allow-Origin"] = "*"
        else:
            origin = request.headers.get("Origin")
            if origin in config.cors_origins:
                headers["Access-Control-Allow-Origin"] = origin
                headers["Vary"] = "Origin"
        headers["Access-Control-Allow-Methods"] = "GET, OPTIONS"
        headers["Access-Control-Allow-Headers"] = "Content-Type"

    @web.middleware
    async def cors_middleware(request: web.Request, handler: Callable) -> web.StreamResponse:
        if request.method == "OPTIONS":
            response = web.Response()
        else:
            try:
                response = await handler(request)
            except web.HTTPException as e:
                add_cors_headers(request, e.headers)
                raise

        add_cors_headers(request, response.headers)
        return response

    @web.middleware
    async def error_middleware(request: web.Request, handler: Callable) -> web.StreamResponse:
        try:
            return await handler(request)
        except web.HTTPException:
            raise
        except StoreError as e:
            logger.error(f"Store query failed: {e}", extra={"table": e.table})
            return web.json_response(
                {"error": e.message, "error_code": e.code},
                status=500,
            )
        except GatewayNotReadyError as e:
            logger.warning(f"Request while gateway not ready: {e}")
            return web.json_response(
                {"error": e.message, "error_code": e.code},
                status=503,
            )
        except Exception as e:
            logger.error(f"HTTP handler error: {e}", exc_info=True)
            return web.json_response(
                {"error": str(e), "error_code": "INTERNAL"},
                status=500,
            )

    # CORS is outermost so error responses get the headers too
    app = web.Application(middlewares=[cors_middleware, error_middleware])
    app[GATEWAY_KEY] = gateway

    app.router.add_get(DATA_ROUTE, handle_data)
    app.router.add_get("/health", handle_health)

    return app


async def handle_data(request: web.Request) -> web.Response:
    """Handle GET /data - Return all rows of the configured table."""
    gateway = request.app[GATEWAY_KEY]
    records = await gateway.get_all()
    return web.json_response(records, dumps=encode_records)


async def handle_health(request: web.Request) -> web.Response:
    """Handle GET /health - Health check."""
    gateway = request.app[GATEWAY_KEY]
    result = await gateway.health()
    status = 200 if result.get("healthy") else 503
    return web.json_response(result, status=status)


async def start_http_site(
    app: web.Application,
    host: str = "0.0.0.0",
    port: int = 8081,
) -> web.AppRunner:
    """Bind the application to host:port.

    Args:
        app: Application from create_http_app()
        host: Host to bind to
        port: Port to listen on

    Returns:
        The runner; call cleanup() on it to unbind
    """
    runner = web.AppRunner(app)
    await runner.setup()

    site = web.TCPSite(runner, host, port)
    await site.start()

    logger.info(f"HTTP server running on http://{host}:{port}")
    return runner

