"""
MCP Tool Registry

Single Source of Truth (SSOT) for tool discovery and collection.
Automatically discovers all MCPTool subclasses in shopify_mcp/tools/ and
instantiates each one with the registry's ShopifyClient.
"""

import importlib
import inspect
import logging
import pkgutil
from pathlib import Path
from typing import Dict, List, Optional

from .base import MCPTool, ToolDefinition
from .config import Settings
from .logs import RequestLogger
from .shopify import ShopifyClient

logger = logging.getLogger(__name__)

TOOLS_PACKAGE = f"{__package__}.tools"


class ToolRegistry:
    """Tools bound to one ShopifyClient (and so to one rate limiter)."""

    def __init__(self, client: ShopifyClient, request_logger: Optional[RequestLogger] = None):
        self.client = client
        self.request_logger = request_logger
        self._tools: Dict[str, MCPTool] = {}
        self._initialized = False

    @classmethod
    def from_settings(cls, settings: Settings, transport=None) -> "ToolRegistry":
        request_logger = RequestLogger(settings.request_log_dir) if settings.request_log_dir else None
        client = ShopifyClient.from_settings(settings, transport=transport, request_logger=request_logger)
        return cls(client, request_logger)

    def _discover_tools(self) -> None:
        """
        Discover and register all tools from the tools package.
        This is the ONLY place where tools are collected.
        """
        if self._initialized:
            return

        tools_path = Path(__file__).parent / "tools"

        for _, module_name, _ in pkgutil.iter_modules([str(tools_path)]):
            if module_name.startswith("_"):
                continue

            full_module_name = f"{TOOLS_PACKAGE}.{module_name}"
            module = importlib.import_module(full_module_name)
            logger.debug(f"Loaded tool module: {full_module_name}")

            # Find all MCPTool subclasses defined in the module
            for _, obj in inspect.getmembers(module, inspect.isclass):
                if (
                    issubclass(obj, MCPTool)
                    and obj is not MCPTool
                    and not inspect.isabstract(obj)
                    and obj.__module__ == module.__name__
                ):
                    self.register(obj(self.client, self.request_logger))

        self._initialized = True
        logger.info(f"Tool discovery complete. Total tools: {len(self._tools)}")

    def register(self, tool: MCPTool) -> None:
        if tool.name in self._tools:
            raise ValueError(f"Duplicate tool name: {tool.name}")
        self._tools[tool.name] = tool
        logger.debug(f"Registered tool: {tool.name}")

    def get_all_tools(self) -> Dict[str, ToolDefinition]:
        self._discover_tools()
        return {name: tool.to_definition() for name, tool in self._tools.items()}

    def get_tool(self, name: str) -> Optional[ToolDefinition]:
        self._discover_tools()
        tool = self._tools.get(name)
        return tool.to_definition() if tool else None

    def get_tools_by_category(self, category: str) -> Dict[str, ToolDefinition]:
        return {
            name: definition
            for name, definition in self.get_all_tools().items()
            if definition.category == category
        }

    def list_tool_names(self) -> List[str]:
        self._discover_tools()
        return list(self._tools.keys())

    def get_openai_tools_schema(self) -> List[Dict]:
        """
        Get all tools in OpenAI function calling format.
        """
        self._discover_tools()
        return [tool.to_openai_schema() for tool in self._tools.values()]

    async def execute_tool(self, name: str, **kwargs) -> Dict:
        """
        Execute a tool by name with given arguments.
        Returns standardized response format.
        """
        self._discover_tools()
        tool = self._tools.get(name)

        if tool is None:
            return {
                "success": False,
                "tool": name,
                "error": {
                    "message": f"Tool not found: {name}",
                    "detail": {"available": sorted(self._tools)},
                    "type": "not_found",
                },
            }

        return await tool.run(**kwargs)

    async def aclose(self) -> None:
        await self.client.aclose()

