"""FastAPI application configuration for the Glue MCP server.

This module sets up the core application by:
1. Loading configuration and probing the Glue Data Catalog
2. Creating the MCP server and registering the catalog tools
3. Combining the MCP SSE routes with the health and metrics routes
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Response
from mcp.server.lowlevel import Server
from mcp.server.sse import SseServerTransport
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from starlette.routing import Mount, Route
from starlette.types import Receive, Scope, Send

from .. import __version__
from ..catalog import GlueDataCatalog
from ..config import AppConfig, config_path, load_config
from ..logging_utils import configure_logging
from ..tools import build_catalog_registry
from .info import create_mcp_server, server_info

logger = logging.getLogger(__name__)

MESSAGES_PATH = "/messages/"


class SseEndpoint:
    """ASGI app that runs one MCP session per SSE connection."""

    def __init__(self, transport: SseServerTransport, mcp_server: Server) -> None:
        self._transport = transport
        self._mcp_server = mcp_server

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        async with self._transport.connect_sse(scope, receive, send) as (read_stream, write_stream):
            await self._mcp_server.run(
                read_stream, write_stream, self._mcp_server.create_initialization_options()
            )


def sse_routes(mcp_server: Server, sse_path: str) -> list[Route | Mount]:
    transport = SseServerTransport(MESSAGES_PATH)
    return [
        Route(sse_path, endpoint=SseEndpoint(transport, mcp_server), methods=["GET"]),
        Mount(MESSAGES_PATH, app=transport.handle_post_message),
    ]


def create_app(
    config: AppConfig | None = None, catalog: GlueDataCatalog | None = None
) -> tuple[FastAPI, GlueDataCatalog]:
    """Create and configure the MCP server application.

    Args:
        config: Optional application config. If None, it is loaded from the
            file named by GLUE_MCP_CONFIG, or built-in defaults.
        catalog: Optional pre-built catalog. If None, one is created from the
            ambient AWS configuration and checked before the app is returned.

    Returns:
        tuple: (combined_app, catalog)
    """
    if config is None:
        config = load_config(config_path())
    configure_logging(config.observability)

    if catalog is None:
        catalog = GlueDataCatalog.from_config(config.aws)

    registry = build_catalog_registry(catalog)
    mcp_server = create_mcp_server(registry)
    logger.info("Registered tools: %s", ", ".join(registry.names()))

    app = FastAPI(
        title="Glue MCP Server",
        description="MCP server for AWS Glue Data Catalog metadata",
        version=__version__,
    )

    @app.get("/", include_in_schema=False)
    async def health_check() -> dict:
        """Health check with the server's MCP metadata."""
        return {"status": "healthy", **server_info(mcp_server, registry)}

    if config.observability.metrics_enabled:

        @app.get("/metrics", include_in_schema=False)
        async def metrics() -> Response:
            """Prometheus metrics in text exposition format."""
            return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    combined_app = FastAPI(
        title="Glue MCP App",
        routes=[
            *sse_routes(mcp_server, config.server.sse_path),
            *app.routes,
        ],
    )

    return combined_app, catalog
