"""
Order MCP Tools

Orders and draft orders. Draft-order creation and completion are two
independent calls; a failed completion leaves the draft in place.
"""

from typing import Any, Dict, List

from ..base import MCPTool, ToolParameter

ORDER_SORT_KEYS = ["PROCESSED_AT", "TOTAL_PRICE", "ID", "CREATED_AT", "UPDATED_AT", "ORDER_NUMBER"]


class GetOrdersTool(MCPTool):

    @property
    def name(self) -> str:
        return "get-orders"

    @property
    def description(self) -> str:
        return "Get all orders"

    @property
    def parameters(self) -> List[ToolParameter]:
        return [
            ToolParameter(
                name="first",
                type="integer",
                description="Maximum number of orders to return",
                required=False,
                default=10,
                minimum=1,
            ),
            ToolParameter(
                name="after",
                type="string",
                description="Cursor for pagination",
                required=False,
            ),
            ToolParameter(
                name="query",
                type="string",
                description="Search query for filtering orders",
                required=False,
            ),
            ToolParameter(
                name="sortKey",
                type="string",
                description="Field to sort orders by",
                required=False,
                enum=ORDER_SORT_KEYS,
            ),
            ToolParameter(
                name="reverse",
                type="boolean",
                description="Whether to sort in reverse order",
                required=False,
            ),
        ]

    @property
    def category(self) -> str:
        return "orders"

    @property
    def failure_message(self) -> str:
        return "Failed to retrieve orders"

    async def execute(self, first: int = 10, after: str = None, query: str = None,
                      sortKey: str = None, reverse: bool = None) -> Dict[str, Any]:
        return await self.client.load_orders(
            first=first,
            after=after,
            query=query,
            sort_key=sortKey,
            reverse=reverse,
        )


class GetOrderTool(MCPTool):

    @property
    def name(self) -> str:
        return "get-order"

    @property
    def description(self) -> str:
        return "Get a specific order by ID"

    @property
    def parameters(self) -> List[ToolParameter]:
        return [
            ToolParameter(
                name="id",
                type="string",
                description="Order ID",
            ),
        ]

    @property
    def category(self) -> str:
        return "orders"

    @property
    def failure_message(self) -> str:
        return "Failed to retrieve order"

    async def execute(self, id: str) -> Dict[str, Any]:
        return await self.client.get_order(id)


ADDRESS_FIELDS = [
    ToolParameter("address1", "string", "Street address"),
    ToolParameter("address2", "string", "Apartment, suite, etc.", required=False),
    ToolParameter("city", "string", "City"),
    ToolParameter("province", "string", "State/Province"),
    ToolParameter("country", "string", "Country"),
    ToolParameter("zip", "string", "ZIP/Postal code"),
    ToolParameter("firstName", "string", "First name"),
    ToolParameter("lastName", "string", "Last name"),
    ToolParameter("phone", "string", "Phone number", required=False),
]


class CreateDraftOrderTool(MCPTool):

    @property
    def name(self) -> str:
        return "create-draft-order"

    @property
    def description(self) -> str:
        return "Create a draft order"

    @property
    def parameters(self) -> List[ToolParameter]:
        return [
            ToolParameter(
                name="email",
                type="string",
                description="Customer email",
                format="email",
            ),
            ToolParameter(
                name="lineItems",
                type="array",
                description="Order line items",
                items_type="object",
                min_items=1,
                properties=[
                    ToolParameter("variantId", "string", "Product variant ID"),
                    ToolParameter("quantity", "integer", "Quantity of items", minimum=1),
                ],
            ),
            ToolParameter(
                name="shippingAddress",
                type="object",
                description="Shipping address, also used as the billing address",
                required=False,
                properties=ADDRESS_FIELDS,
            ),
            ToolParameter(
                name="note",
                type="string",
                description="Order note",
                required=False,
            ),
        ]

    @property
    def category(self) -> str:
        return "orders"

    @property
    def failure_message(self) -> str:
        return "Failed to create draft order"

    async def execute(self, email: str, lineItems: List[Dict[str, Any]],
                      shippingAddress: Dict[str, Any] = None, note: str = None) -> Dict[str, Any]:
        return await self.client.create_draft_order(
            email,
            lineItems,
            shipping_address=shippingAddress,
            note=note,
        )


class CompleteDraftOrderTool(MCPTool):

    @property
    def name(self) -> str:
        return "complete-draft-order"

    @property
    def description(self) -> str:
        return "Complete a draft order"

    @property
    def parameters(self) -> List[ToolParameter]:
        return [
            ToolParameter(
                name="draftOrderId",
                type="string",
                description="ID of the draft order to complete",
            ),
            ToolParameter(
                name="variantId",
                type="string",
                description="ID of the variant in the draft order",
            ),
        ]

    @property
    def category(self) -> str:
        return "orders"

    @property
    def failure_message(self) -> str:
        return "Failed to complete draft order"

    async def execute(self, draftOrderId: str, variantId: str) -> Dict[str, Any]:
        return await self.client.complete_draft_order(draftOrderId, variantId)
