"""
Shopify MCP Server

Exposes the Shopify GraphQL Admin API as MCP tools.
All tools are auto-discovered via registry.py
"""

from .base import MCPTool
from .registry import ToolRegistry

__all__ = ["MCPTool", "ToolRegistry"]
