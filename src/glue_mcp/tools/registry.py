"""Explicit registry of the tools this server exposes.

The registry is built once at startup and keeps insertion order, so listings
match the order tools were added. Each tool's argument model is the single
source of its input schema: the same schema is listed over MCP, shown on the
health endpoint and enforced before the handler runs.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

from mcp import types
from mcp.server.lowlevel import Server
from mcp.shared.exceptions import McpError
from pydantic import BaseModel, ValidationError


class NoArgs(BaseModel):
    """Argument model for tools that take no input."""


@dataclass(frozen=True)
class ToolSpec:
    name: str
    description: str
    handler: Callable[..., Awaitable[dict[str, Any]]]
    args_model: type[BaseModel] = NoArgs

    @property
    def input_schema(self) -> dict[str, Any]:
        return self.args_model.model_json_schema()

    def to_mcp_tool(self) -> types.Tool:
        return types.Tool(
            name=self.name,
            description=self.description,
            inputSchema=self.input_schema,
        )


def _invalid_params(message: str) -> McpError:
    return McpError(types.ErrorData(code=types.INVALID_PARAMS, message=message))


class ToolRegistry:
    def __init__(self) -> None:
        self._specs: dict[str, ToolSpec] = {}

    def add(self, spec: ToolSpec) -> ToolSpec:
        if spec.name in self._specs:
            raise ValueError(f"Tool {spec.name} is already registered")
        self._specs[spec.name] = spec
        return spec

    def get(self, name: str) -> ToolSpec:
        try:
            return self._specs[name]
        except KeyError:
            raise KeyError(f"Unknown tool: {name}") from None

    def names(self) -> list[str]:
        return list(self._specs)

    def specs(self) -> list[ToolSpec]:
        return list(self._specs.values())

    def describe(self) -> list[dict[str, Any]]:
        return [
            {
                "name": spec.name,
                "description": spec.description,
                "input_schema": spec.input_schema,
            }
            for spec in self._specs.values()
        ]

    async def call(self, name: str, arguments: dict[str, Any] | None) -> dict[str, Any]:
        """Validate ``arguments`` against the tool's model and run its handler.

        Raises:
            McpError: INVALID_PARAMS for an unknown tool or malformed arguments
                (no data payload). Errors raised by the handler propagate as is.
        """
        if name not in self._specs:
            raise _invalid_params(f"Unknown tool: {name}")
        spec = self._specs[name]
        try:
            args = spec.args_model.model_validate(arguments or {})
        except ValidationError as exc:
            fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in exc.errors())
            raise _invalid_params(f"Invalid arguments for {name}: {fields}") from exc
        return await spec.handler(**args.model_dump())

    def register_with(self, mcp_server: Server) -> None:
        """Serve the registered tools from a low-level MCP server.

        Only the tools/list and tools/call handlers are installed, so the
        server advertises the tools capability and nothing else. The call
        handler is installed directly rather than through
        ``Server.call_tool()``, which would turn an ``McpError`` into a plain
        error result and drop its code and data.

        Args:
            mcp_server: The MCP server instance to register tools with
        """

        @mcp_server.list_tools()
        async def list_tools() -> list[types.Tool]:
            return [spec.to_mcp_tool() for spec in self._specs.values()]

        async def call_tool(request: types.CallToolRequest) -> types.ServerResult:
            result = await self.call(request.params.name, request.params.arguments)
            return types.ServerResult(
                types.CallToolResult(
                    content=[types.TextContent(type="text", text=json.dumps(result))],
                    structuredContent=result,
                    isError=False,
                )
            )

        mcp_server.request_handlers[types.CallToolRequest] = call_tool

    def __contains__(self, name: object) -> bool:
        return name in self._specs

    def __len__(self) -> int:
        return len(self._specs)
