#!/usr/bin/env python3
"""
MCP stdio Entrypoint

Serves the registered Shopify tools to an MCP host over stdin/stdout.
Logs go to stderr so they never corrupt the protocol stream.
"""

import asyncio
import json
import logging
import sys
from typing import Any

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from .config import Settings, configure_logging
from .registry import ToolRegistry

logger = logging.getLogger(__name__)


def build_server(registry: ToolRegistry) -> Server:
    server = Server("shopify-mcp")

    @server.list_tools()
    async def list_tools() -> list[Tool]:
        """List every registered Shopify tool."""
        return [
            Tool(
                name=definition.name,
                description=definition.description,
                inputSchema=definition.input_schema,
            )
            for definition in registry.get_all_tools().values()
        ]

    @server.call_tool()
    async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
        """Handle tool calls."""
        result = await registry.execute_tool(name, **(arguments or {}))
        return [TextContent(
            type="text",
            text=json.dumps(result, indent=2, ensure_ascii=False),
        )]

    return server


async def serve(settings: Settings) -> None:
    registry = ToolRegistry.from_settings(settings)
    server = build_server(registry)
    logger.info(f"Shopify MCP stdio server ready with {len(registry.list_tool_names())} tools")
    try:
        async with stdio_server() as (read_stream, write_stream):
            await server.run(
                read_stream,
                write_stream,
                server.create_initialization_options()
            )
    finally:
        await registry.aclose()


def main():
    """Run the MCP server."""
    settings = Settings.from_env()
    configure_logging(settings.log_level, stream=sys.stderr)
    asyncio.run(serve(settings))


if __name__ == "__main__":
    main()
