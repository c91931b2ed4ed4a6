"""
Discount MCP Tools

Basic discount codes applying to all products and all customers.
"""

from typing import Any, Dict, List

from ..base import MCPTool, ToolParameter, ValidationError


class CreateDiscountTool(MCPTool):

    @property
    def name(self) -> str:
        return "create-discount"

    @property
    def description(self) -> str:
        return "Create a basic discount code"

    @property
    def parameters(self) -> List[ToolParameter]:
        return [
            ToolParameter(
                name="title",
                type="string",
                description="Title of the discount",
            ),
            ToolParameter(
                name="code",
                type="string",
                description="Discount code that customers will enter",
            ),
            ToolParameter(
                name="valueType",
                type="string",
                description="Type of discount",
                enum=["percentage", "fixed_amount"],
            ),
            ToolParameter(
                name="value",
                type="number",
                description="Discount value (percentage as 0-100, or fixed amount in shop currency)",
                minimum=0,
            ),
            ToolParameter(
                name="startsAt",
                type="string",
                description="Start date in ISO format (defaults to now)",
                required=False,
            ),
            ToolParameter(
                name="endsAt",
                type="string",
                description="Optional end date in ISO format",
                required=False,
            ),
            ToolParameter(
                name="appliesOncePerCustomer",
                type="boolean",
                description="Whether the discount can be used only once per customer",
                required=False,
                default=False,
            ),
        ]

    @property
    def category(self) -> str:
        return "discounts"

    @property
    def failure_message(self) -> str:
        return "Failed to create discount"

    async def execute(self, title: str, code: str, valueType: str, value: float,
                      startsAt: str = None, endsAt: str = None,
                      appliesOncePerCustomer: bool = False) -> Dict[str, Any]:
        if valueType == "percentage" and not 0 < value <= 100:
            raise ValidationError("Percentage discounts must be between 0 and 100", tool_name=self.name)

        return await self.client.create_basic_discount_code(
            title,
            code,
            valueType,
            value,
            starts_at=startsAt,
            ends_at=endsAt,
            applies_once_per_customer=appliesOncePerCustomer,
        )


class GetDiscountTool(MCPTool):

    @property
    def name(self) -> str:
        return "get-discount"

    @property
    def description(self) -> str:
        return "Look up a discount code and its value"

    @property
    def parameters(self) -> List[ToolParameter]:
        return [
            ToolParameter(
                name="code",
                type="string",
                description="Discount code to look up",
            ),
        ]

    @property
    def category(self) -> str:
        return "discounts"

    @property
    def failure_message(self) -> str:
        return "Failed to retrieve discount"

    async def execute(self, code: str) -> Dict[str, Any]:
        return await self.client.get_discount_by_code(code)
