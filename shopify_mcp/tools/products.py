"""
Product MCP Tools

List, search, inspect, create and update products and variant prices.
"""

from typing import Any, Dict, List

from ..base import MCPTool, ToolParameter, ValidationError

PRODUCT_STATUSES = ["ACTIVE", "ARCHIVED", "DRAFT"]


class GetProductsTool(MCPTool):
    """List products, optionally filtered by a title search."""

    @property
    def name(self) -> str:
        return "get-products"

    @property
    def description(self) -> str:
        return "Get all products or search by title"

    @property
    def parameters(self) -> List[ToolParameter]:
        return [
            ToolParameter(
                name="searchTitle",
                type="string",
                description="Search products by title",
                required=False,
            ),
            ToolParameter(
                name="limit",
                type="integer",
                description="Maximum number of products to return",
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
        return "products"

    @property
    def failure_message(self) -> str:
        return "Failed to retrieve products"

    async def execute(self, searchTitle: str = None, limit: int = 10, cursor: str = None) -> Dict[str, Any]:
        return await self.client.load_products(searchTitle, limit=limit, after=cursor)


class GetProductsByCollectionTool(MCPTool):

    @property
    def name(self) -> str:
        return "get-products-by-collection"

    @property
    def description(self) -> str:
        return "Get products from a specific collection"

    @property
    def parameters(self) -> List[ToolParameter]:
        return [
            ToolParameter(
                name="collectionId",
                type="string",
                description="ID of the collection to get products from",
            ),
            ToolParameter(
                name="limit",
                type="integer",
                description="Maximum number of products to return",
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
        return "products"

    @property
    def failure_message(self) -> str:
        return "Failed to retrieve products from collection"

    async def execute(self, collectionId: str, limit: int = 10, cursor: str = None) -> Dict[str, Any]:
        return await self.client.load_products_by_collection(collectionId, limit=limit, after=cursor)


class GetProductDetailsTool(MCPTool):

    @property
    def name(self) -> str:
        return "get-product-details"

    @property
    def description(self) -> str:
        return "Get detailed information about a product, including variants and images"

    @property
    def parameters(self) -> List[ToolParameter]:
        return [
            ToolParameter(
                name="productId",
                type="string",
                description="ID of the product to retrieve",
            ),
        ]

    @property
    def category(self) -> str:
        return "products"

    @property
    def failure_message(self) -> str:
        return "Failed to retrieve product details"

    async def execute(self, productId: str) -> Dict[str, Any]:
        return await self.client.get_product(productId)


class SearchProductsTool(MCPTool):
    """
    Search products by one attribute.

    A price range takes precedence over a collection, which takes
    precedence over a title search. Results are trimmed to a short
    listing (id, title, first variant price, availability).
    """

    @property
    def name(self) -> str:
        return "search-products"

    @property
    def description(self) -> str:
        return "Search products by title, price range or collection"

    @property
    def parameters(self) -> List[ToolParameter]:
        return [
            ToolParameter(
                name="title",
                type="string",
                description="Product title to search for",
                required=False,
            ),
            ToolParameter(
                name="minPrice",
                type="number",
                description="Minimum price",
                required=False,
                minimum=0,
            ),
            ToolParameter(
                name="maxPrice",
                type="number",
                description="Maximum price",
                required=False,
                minimum=0,
            ),
            ToolParameter(
                name="collection",
                type="string",
                description="Collection ID to search in",
                required=False,
            ),
            ToolParameter(
                name="limit",
                type="integer",
                description="Maximum number of products to return",
                required=False,
                default=10,
                minimum=1,
            ),
        ]

    @property
    def category(self) -> str:
        return "products"

    @property
    def failure_message(self) -> str:
        return "Failed to search products"

    async def execute(
        self,
        title: str = None,
        minPrice: float = None,
        maxPrice: float = None,
        collection: str = None,
        limit: int = 10,
    ) -> List[Dict[str, Any]]:
        if (minPrice is None) != (maxPrice is None):
            raise ValidationError("minPrice and maxPrice must be given together", tool_name=self.name)
        if minPrice is not None and minPrice > maxPrice:
            raise ValidationError("minPrice must not exceed maxPrice", tool_name=self.name)

        if minPrice is not None:
            result = await self.client.search_products_by_price_range(minPrice, maxPrice, limit=limit)
        elif collection:
            result = await self.client.load_products_by_collection(collection, limit=limit)
        else:
            result = await self.client.load_products(title, limit=limit)

        return [
            {
                "id": product["id"],
                "title": product["title"],
                "price": product["price"] or "0",
                "available_for_sale": bool(product["variants"] and product["variants"][0]["available_for_sale"]),
            }
            for product in result["products"]
        ]


def _product_fields(required_title: bool) -> List[ToolParameter]:
    return [
        ToolParameter(
            name="title",
            type="string",
            description="Product title",
            required=required_title,
        ),
        ToolParameter(
            name="description",
            type="string",
            description="Product description (HTML allowed)",
            required=False,
        ),
        ToolParameter(
            name="vendor",
            type="string",
            description="Product vendor",
            required=False,
        ),
        ToolParameter(
            name="productType",
            type="string",
            description="Product type",
            required=False,
        ),
        ToolParameter(
            name="tags",
            type="array",
            description="Product tags",
            required=False,
            items_type="string",
        ),
        ToolParameter(
            name="status",
            type="string",
            description="Product status",
            required=False,
            enum=PRODUCT_STATUSES,
        ),
    ]


class CreateProductTool(MCPTool):

    @property
    def name(self) -> str:
        return "create-product"

    @property
    def description(self) -> str:
        return "Create a new product"

    @property
    def parameters(self) -> List[ToolParameter]:
        return _product_fields(required_title=True)

    @property
    def category(self) -> str:
        return "products"

    @property
    def failure_message(self) -> str:
        return "Failed to create product"

    async def execute(self, title: str, description: str = None, vendor: str = None,
                      productType: str = None, tags: List[str] = None, status: str = None) -> Dict[str, Any]:
        return await self.client.create_product(
            title,
            description=description,
            vendor=vendor,
            product_type=productType,
            tags=tags,
            status=status,
        )


class UpdateProductTool(MCPTool):

    @property
    def name(self) -> str:
        return "update-product"

    @property
    def description(self) -> str:
        return "Update an existing product. Only the given fields are changed."

    @property
    def parameters(self) -> List[ToolParameter]:
        return [
            ToolParameter(
                name="productId",
                type="string",
                description="ID of the product to update",
            ),
        ] + _product_fields(required_title=False)

    @property
    def category(self) -> str:
        return "products"

    @property
    def failure_message(self) -> str:
        return "Failed to update product"

    async def execute(self, productId: str, **fields) -> Dict[str, Any]:
        return await self.client.update_product(
            productId,
            title=fields.get("title"),
            description=fields.get("description"),
            vendor=fields.get("vendor"),
            product_type=fields.get("productType"),
            tags=fields.get("tags"),
            status=fields.get("status"),
        )


class UpdateVariantPricesTool(MCPTool):

    @property
    def name(self) -> str:
        return "update-variant-prices"

    @property
    def description(self) -> str:
        return "Update the prices of one or more variants of a product"

    @property
    def parameters(self) -> List[ToolParameter]:
        return [
            ToolParameter(
                name="productId",
                type="string",
                description="ID of the product the variants belong to",
            ),
            ToolParameter(
                name="variants",
                type="array",
                description="Variants to update",
                items_type="object",
                min_items=1,
                properties=[
                    ToolParameter("variantId", "string", "Product variant ID"),
                    ToolParameter("price", "number", "New price", minimum=0),
                ],
            ),
        ]

    @property
    def category(self) -> str:
        return "products"

    @property
    def failure_message(self) -> str:
        return "Failed to update variant prices"

    async def execute(self, productId: str, variants: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        return await self.client.update_variant_prices(productId, variants)
