"""
Catalog Maintenance MCP Tools

Bulk variant changes, product metafields, collection membership and
product images. Each tool checks the per-action requirements before any
call goes out.
"""

from typing import Any, Dict, List

from ..base import MCPTool, ToolParameter, ValidationError

WEIGHT_UNITS = ["KILOGRAMS", "GRAMS", "POUNDS", "OUNCES"]

VARIANT_FIELDS = [
    ToolParameter("id", "string", "Variant ID (UPDATE, DELETE)", required=False),
    ToolParameter("price", "number", "Variant price", required=False, minimum=0),
    ToolParameter("compareAtPrice", "number", "Compare-at price", required=False, minimum=0),
    ToolParameter("sku", "string", "Stock keeping unit", required=False),
    ToolParameter("barcode", "string", "Barcode (ISBN, UPC, GTIN)", required=False),
    ToolParameter("taxable", "boolean", "Whether the variant is taxed", required=False),
    ToolParameter("requiresShipping", "boolean", "Whether the variant is shipped", required=False),
    ToolParameter("weight", "number", "Shipping weight", required=False, minimum=0),
    ToolParameter("weightUnit", "string", "Unit of the weight", required=False, enum=WEIGHT_UNITS),
    ToolParameter(
        "options", "array", "Option values, e.g. Size = M", required=False, items_type="object",
        properties=[
            ToolParameter("optionName", "string", "Option name"),
            ToolParameter("name", "string", "Option value"),
        ],
    ),
]


class BulkVariantOperationsTool(MCPTool):
    """Create, update or delete variants across one or more products."""

    @property
    def name(self) -> str:
        return "bulk-variant-operations"

    @property
    def description(self) -> str:
        return "Create, update or delete product variants in bulk"

    @property
    def parameters(self) -> List[ToolParameter]:
        return [
            ToolParameter(
                name="operations",
                type="array",
                description="Variant operations, grouped per action and product when sent",
                items_type="object",
                min_items=1,
                properties=[
                    ToolParameter("action", "string", "Operation", enum=["CREATE", "UPDATE", "DELETE"]),
                    ToolParameter("productId", "string", "Product the variant belongs to"),
                    ToolParameter("variantData", "object", "Variant fields", properties=VARIANT_FIELDS),
                ],
            ),
        ]

    @property
    def category(self) -> str:
        return "products"

    @property
    def failure_message(self) -> str:
        return "Failed to run variant operations"

    async def execute(self, operations: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        for i, op in enumerate(operations):
            if op["action"] != "CREATE" and not op["variantData"].get("id"):
                raise ValidationError(
                    f"operations[{i}].variantData.id is required for {op['action']}",
                    tool_name=self.name,
                )
        return await self.client.bulk_variant_operations(operations)


class ManageProductMetafieldsTool(MCPTool):

    @property
    def name(self) -> str:
        return "manage-product-metafields"

    @property
    def description(self) -> str:
        return "Set or delete metafields on a product"

    @property
    def parameters(self) -> List[ToolParameter]:
        return [
            ToolParameter(
                name="productId",
                type="string",
                description="ID of the product",
            ),
            ToolParameter(
                name="operations",
                type="array",
                description="Metafield operations",
                items_type="object",
                min_items=1,
                properties=[
                    ToolParameter("action", "string", "Operation", enum=["SET", "DELETE"]),
                    ToolParameter("namespace", "string", "Metafield namespace"),
                    ToolParameter("key", "string", "Metafield key"),
                    ToolParameter("value", "string", "Value (SET)", required=False),
                    ToolParameter("type", "string", "Metafield type, e.g. single_line_text_field (SET)",
                                  required=False),
                ],
            ),
        ]

    @property
    def category(self) -> str:
        return "products"

    @property
    def failure_message(self) -> str:
        return "Failed to manage product metafields"

    async def execute(self, productId: str, operations: List[Dict[str, Any]]) -> Dict[str, Any]:
        for i, op in enumerate(operations):
            if op["action"] == "SET" and (op.get("value") is None or not op.get("type")):
                raise ValidationError(f"operations[{i}] needs value and type for SET", tool_name=self.name)
        return await self.client.manage_product_metafields(productId, operations)


class ManageProductCollectionsTool(MCPTool):

    @property
    def name(self) -> str:
        return "manage-product-collections"

    @property
    def description(self) -> str:
        return "Add products to or remove products from collections"

    @property
    def parameters(self) -> List[ToolParameter]:
        return [
            ToolParameter(
                name="action",
                type="string",
                description="Whether to add or remove the products",
                enum=["ADD", "REMOVE"],
            ),
            ToolParameter(
                name="productIds",
                type="array",
                description="Products to add or remove",
                items_type="string",
                min_items=1,
            ),
            ToolParameter(
                name="collectionIds",
                type="array",
                description="Collections to change",
                items_type="string",
                min_items=1,
            ),
        ]

    @property
    def category(self) -> str:
        return "collections"

    @property
    def failure_message(self) -> str:
        return "Failed to manage product collections"

    async def execute(self, action: str, productIds: List[str], collectionIds: List[str]) -> Dict[str, Any]:
        return await self.client.manage_product_collections(action, productIds, collectionIds)


class ManageProductImagesTool(MCPTool):

    @property
    def name(self) -> str:
        return "manage-product-images"

    @property
    def description(self) -> str:
        return "Add, update or remove product images"

    @property
    def parameters(self) -> List[ToolParameter]:
        return [
            ToolParameter(
                name="productId",
                type="string",
                description="ID of the product",
            ),
            ToolParameter(
                name="action",
                type="string",
                description="Image operation",
                enum=["ADD", "UPDATE", "REMOVE"],
            ),
            ToolParameter(
                name="images",
                type="array",
                description="Images to add, update or remove",
                items_type="object",
                min_items=1,
                properties=[
                    ToolParameter("id", "string", "Media image ID (UPDATE, REMOVE)", required=False),
                    ToolParameter("url", "string", "Image URL (ADD)", required=False),
                    ToolParameter("altText", "string", "Alt text", required=False),
                ],
            ),
        ]

    @property
    def category(self) -> str:
        return "products"

    @property
    def failure_message(self) -> str:
        return "Failed to manage product images"

    async def execute(self, productId: str, action: str, images: List[Dict[str, Any]]) -> Dict[str, Any]:
        needed = "url" if action == "ADD" else "id"
        for i, image in enumerate(images):
            if not image.get(needed):
                raise ValidationError(f"images[{i}].{needed} is required for {action}", tool_name=self.name)
        return await self.client.manage_product_images(productId, action, images)
