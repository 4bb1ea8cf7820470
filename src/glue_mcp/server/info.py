"""Server metadata answered to the hosting protocol's introspection calls.

Everything here is read from the same MCP server instance that answers the
initialize handshake, so the health endpoint cannot disagree with it.
"""

from __future__ import annotations

from typing import Any

from mcp.server.lowlevel import Server
from mcp.shared.version import SUPPORTED_PROTOCOL_VERSIONS
from mcp.types import LATEST_PROTOCOL_VERSION

from .. import __version__
from ..tools import ToolRegistry

SERVER_NAME = "glue-mcp"
# Answered to clients that request a version the server does not support.
PROTOCOL_VERSION = LATEST_PROTOCOL_VERSION
INSTRUCTIONS = (
    "This server provides a glue data catalog tool that can be used to get database "
    "and table metadata from an AWS Glue Data Catalog"
)


def create_mcp_server(registry: ToolRegistry) -> Server:
    mcp_server: Server = Server(SERVER_NAME, version=__version__, instructions=INSTRUCTIONS)
    registry.register_with(mcp_server)
    return mcp_server


def capabilities(mcp_server: Server) -> dict[str, Any]:
    options = mcp_server.create_initialization_options()
    return options.capabilities.model_dump(mode="json", exclude_none=True)


def server_info(mcp_server: Server, registry: ToolRegistry) -> dict[str, Any]:
    return {
        "server_info": {"name": SERVER_NAME, "version": __version__},
        "protocol_version": PROTOCOL_VERSION,
        "supported_protocol_versions": list(SUPPORTED_PROTOCOL_VERSIONS),
        "capabilities": capabilities(mcp_server),
        "instructions": INSTRUCTIONS,
        "tools": registry.describe(),
    }
