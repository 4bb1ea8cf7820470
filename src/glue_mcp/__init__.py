"""Glue MCP server package."""

# Note: Modules are available via submodule imports to avoid module-level
# initialization issues (the server package talks to AWS on startup):
# from glue_mcp.catalog import GlueDataCatalog
# from glue_mcp.tools import build_catalog_registry
# from glue_mcp.server import main

__version__ = "0.1.0"

__all__ = [
    "catalog",
    "config",
    "server",
]
