"""Main entry point for the Glue MCP server application.

This module provides the main() function that starts the uvicorn server.
It's configured as the entry point in pyproject.toml, so you can run the server
using the command: glue-mcp-server

The bind address comes from the config file (GLUE_MCP_CONFIG) and can be
overridden with --host and --port.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

import uvicorn

from ..config import config_path, load_config
from ..errors import CatalogConnectionError, ConfigError
from .app import create_app

logger = logging.getLogger(__name__)


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Start the Glue MCP server")
    parser.add_argument("--host", help="Interface to bind (default: from config, 127.0.0.1)")
    parser.add_argument("--port", type=int, help="Port to run the server on (default: from config, 8000)")
    parser.add_argument(
        "--config", type=Path, help="Path to a YAML config file (default: $GLUE_MCP_CONFIG)"
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """Start the MCP server using uvicorn.

    Startup is fail-fast: an invalid config or an unreachable Glue Data
    Catalog exits with status 1 before the server binds.
    """
    args = _parse_args(argv)

    try:
        config = load_config(args.config or config_path())
        if args.host is not None:
            config.server.host = args.host
        if args.port is not None:
            config.server.port = args.port
        app, _catalog = create_app(config)
    except (ConfigError, CatalogConnectionError) as exc:
        logger.error("Server startup failed: %s", exc)
        raise SystemExit(1) from exc

    logger.info("Starting server on %s", config.server.bind_address)
    uvicorn.run(app, host=config.server.host, port=config.server.port)
    logger.info("Server stopped")


if __name__ == "__main__":
    main()
