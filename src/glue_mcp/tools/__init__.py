"""MCP tool definitions."""

from .catalog_tools import build_catalog_registry
from .registry import ToolRegistry, ToolSpec

__all__ = ["ToolRegistry", "ToolSpec", "build_catalog_registry"]
