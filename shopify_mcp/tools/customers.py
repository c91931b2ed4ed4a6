"""
Customer MCP Tools
"""

from typing import Any, Dict, List

from ..base import MCPTool, ToolParameter


class GetCustomersTool(MCPTool):

    @property
    def name(self) -> str:
        return "get-customers"

    @property
    def description(self) -> str:
        return "Get shopify customers with pagination support"

    @property
    def parameters(self) -> List[ToolParameter]:
        return [
            ToolParameter(
                name="limit",
                type="integer",
                description="Limit of customers to return",
                required=False,
                default=10,
                minimum=1,
            ),
            ToolParameter(
                name="cursor",
                type="string",
                description="Pagination cursor returned as `next` by a previous call",
                required=False,
            ),
        ]

    @property
    def category(self) -> str:
        return "customers"

    @property
    def failure_message(self) -> str:
        return "Failed to retrieve customers data"

    async def execute(self, limit: int = 10, cursor: str = None) -> Dict[str, Any]:
        return await self.client.load_customers(limit=limit, after=cursor)


class TagCustomerTool(MCPTool):
    """Replace a customer's tags with the given list."""

    @property
    def name(self) -> str:
        return "tag-customer"

    @property
    def description(self) -> str:
        return "Add tags to a customer"

    @property
    def parameters(self) -> List[ToolParameter]:
        return [
            ToolParameter(
                name="customerId",
                type="string",
                description="Customer ID to tag",
            ),
            ToolParameter(
                name="tags",
                type="array",
                description="Tags to add to the customer",
                items_type="string",
                min_items=1,
            ),
        ]

    @property
    def category(self) -> str:
        return "customers"

    @property
    def failure_message(self) -> str:
        return "Failed to tag customer"

    async def execute(self, customerId: str, tags: List[str]) -> Dict[str, Any]:
        return await self.client.tag_customer(customerId, tags)
