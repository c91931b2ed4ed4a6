"""
Shop MCP Tools
"""

from typing import Any, Dict

from ..base import MCPTool


class GetShopTool(MCPTool):

    @property
    def name(self) -> str:
        return "get-shop"

    @property
    def description(self) -> str:
        return "Get shop details"

    @property
    def category(self) -> str:
        return "shop"

    @property
    def failure_message(self) -> str:
        return "Failed to retrieve shop"

    async def execute(self) -> Dict[str, Any]:
        return await self.client.load_shop()


class GetShopDetailsTool(MCPTool):
    """Extended shop details: plan, billing address, timezone, ship-to countries."""

    @property
    def name(self) -> str:
        return "get-shop-details"

    @property
    def description(self) -> str:
        return "Get extended shop details including shipping countries"

    @property
    def category(self) -> str:
        return "shop"

    @property
    def failure_message(self) -> str:
        return "Failed to retrieve extended shop details"

    async def execute(self) -> Dict[str, Any]:
        return await self.client.load_shop_details()
