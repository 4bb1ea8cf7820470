"""MCP server application and entry point.

Run with ``glue-mcp-server`` (see glue_mcp.server.main).
"""
