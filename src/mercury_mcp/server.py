"""MCP stdio server wiring for the Mercury tool registry."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from mcp import types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from mercury_mcp import __version__
from mercury_mcp.core.config import MercurySettings
from mercury_mcp.core.mercury import open_context
from mercury_mcp.core.results import ToolResult
from mercury_mcp.core.tool_registry import (
    ToolInputError,
    ToolNotFoundError,
    ToolRegistry,
    build_default_registry,
    build_tool_manifest,
)

logger = logging.getLogger(__name__)


def to_call_tool_result(result: ToolResult) -> types.CallToolResult:
    return types.CallToolResult(
        content=[types.TextContent(type="text", text=result.content)],
        isError=result.is_error,
    )


def list_tool_specs(registry: ToolRegistry) -> list[types.Tool]:
    return [
        types.Tool(name=entry.name, description=entry.description, inputSchema=entry.input_schema)
        for entry in build_tool_manifest(registry.available_tools().values())
    ]


async def call_tool(registry: ToolRegistry, name: str, arguments: Mapping[str, Any] | None) -> types.CallToolResult:
    """Invoke ``name`` and render the outcome; registry errors become error results."""

    try:
        result = await registry.invoke(name, arguments)
    except ToolNotFoundError:
        logger.warning("Rejected call to unknown tool '%s'", name)
        result = ToolResult.failure(f"No such operation: '{name}'", kind="unknown_tool")
    except ToolInputError as exc:
        logger.warning("Rejected invalid input for '%s': %s", name, exc)
        result = ToolResult.failure(str(exc), kind="validation")
    return to_call_tool_result(result)


def create_server(registry: ToolRegistry, *, name: str = "mercury") -> Server:
    server: Server = Server(name, version=__version__)

    @server.list_tools()
    async def _list_tools() -> list[types.Tool]:
        return list_tool_specs(registry)

    # Arguments are validated by the registry against each tool's own model.
    @server.call_tool(validate_input=False)
    async def _call_tool(tool_name: str, arguments: dict[str, Any]) -> types.CallToolResult:
        return await call_tool(registry, tool_name, arguments)

    return server


async def serve(settings: MercurySettings) -> None:
    """Run the MCP server over stdio until the client disconnects."""

    async with open_context(settings) as context:
        registry = build_default_registry(context)
        server = create_server(registry, name=settings.server_name)
        async with stdio_server() as (read_stream, write_stream):
            logger.info("Mercury MCP server running on stdio (%d tools)", len(registry.available_tools()))
            await server.run(read_stream, write_stream, server.create_initialization_options())


__all__ = ["call_tool", "create_server", "list_tool_specs", "serve", "to_call_tool_result"]
