"""
Inventory MCP Tool

Quantities are the ``available`` state at a single location.
"""

from typing import Any, Dict, List

from ..base import MCPTool, ToolParameter, ValidationError

INVENTORY_REASONS = [
    "correction",
    "cycle_count_available",
    "damaged",
    "other",
    "promotion",
    "quality_control",
    "received",
    "restock",
    "safety_stock",
    "shrinkage",
]


class ManageInventoryTool(MCPTool):

    @property
    def name(self) -> str:
        return "manage-inventory"

    @property
    def description(self) -> str:
        return "Set or adjust the available inventory of a product variant"

    @property
    def parameters(self) -> List[ToolParameter]:
        return [
            ToolParameter(
                name="variantId",
                type="string",
                description="ID of the product variant",
            ),
            ToolParameter(
                name="action",
                type="string",
                description="SET replaces the quantity, ADJUST adds a signed delta",
                enum=["SET", "ADJUST"],
            ),
            ToolParameter(
                name="quantity",
                type="integer",
                description="New quantity (SET) or delta (ADJUST)",
            ),
            ToolParameter(
                name="locationId",
                type="string",
                description="Location ID; defaults to the variant's first stocked location",
                required=False,
            ),
            ToolParameter(
                name="reason",
                type="string",
                description="Reason recorded with the change",
                required=False,
                default="correction",
                enum=INVENTORY_REASONS,
            ),
        ]

    @property
    def category(self) -> str:
        return "inventory"

    @property
    def failure_message(self) -> str:
        return "Failed to manage inventory"

    async def execute(self, variantId: str, action: str, quantity: int, locationId: str = None,
                      reason: str = "correction") -> Dict[str, Any]:
        if action == "SET" and quantity < 0:
            raise ValidationError("quantity must be >= 0 for SET", tool_name=self.name)
        return await self.client.manage_inventory(
            variantId,
            action,
            quantity,
            location_id=locationId,
            reason=reason,
        )
