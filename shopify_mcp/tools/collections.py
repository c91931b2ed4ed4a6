"""
Collection MCP Tools
"""

from typing import Any, Dict, List

from ..base import MCPTool, ToolParameter


class GetCollectionsTool(MCPTool):

    @property
    def name(self) -> str:
        return "get-collections"

    @property
    def description(self) -> str:
        return "Get all collections"

    @property
    def parameters(self) -> List[ToolParameter]:
        return [
            ToolParameter(
                name="limit",
                type="integer",
                description="Maximum number of collections to return",
                required=False,
                default=10,
                minimum=1,
            ),
            ToolParameter(
                name="name",
                type="string",
                description="Filter collections by title",
                required=False,
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
        return "collections"

    @property
    def failure_message(self) -> str:
        return "Failed to retrieve collections"

    async def execute(self, limit: int = 10, name: str = None, cursor: str = None) -> Dict[str, Any]:
        return await self.client.load_collections(limit=limit, name=name, after=cursor)
