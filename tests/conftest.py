"""
Shared fixtures for the Shopify tool tests.

No test talks to a real shop: HTTP goes through ``httpx.MockTransport``
and the rate limiter runs with a zero interval unless a test says otherwise.
"""

import json
from typing import Any, Callable, Dict, List

import httpx
import pytest

from shopify_mcp.shopify import (
    GraphQLPipeline,
    RateLimiter,
    ShopifyClient,
    ShopifyCredentials,
)

SHOP_DOMAIN = "test-shop.myshopify.com"
ACCESS_TOKEN = "shpat_test_token"


class RecordingTransport:
    """Callable for ``httpx.MockTransport`` that replays canned responses."""

    def __init__(self, responses: List[httpx.Response] = None, handler: Callable = None):
        self.responses = list(responses or [])
        self.handler = handler
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.handler is not None:
            return self.handler(request)
        return self.responses.pop(0)

    @property
    def bodies(self) -> List[Dict[str, Any]]:
        return [json.loads(r.content) for r in self.requests]

    @property
    def last_variables(self) -> Dict[str, Any]:
        return self.bodies[-1].get("variables")


def graphql_data(data: Dict[str, Any]) -> httpx.Response:
    return httpx.Response(200, json={"data": data})


def make_client(transport: RecordingTransport, min_interval: float = 0.0) -> ShopifyClient:
    pipeline = GraphQLPipeline(
        rate_limiter=RateLimiter(min_interval),
        transport=httpx.MockTransport(transport),
    )
    return ShopifyClient(ShopifyCredentials(ACCESS_TOKEN, SHOP_DOMAIN), pipeline)


@pytest.fixture
def credentials() -> ShopifyCredentials:
    return ShopifyCredentials(ACCESS_TOKEN, SHOP_DOMAIN)


@pytest.fixture
def product_node() -> Dict[str, Any]:
    """A product as returned by the Admin API."""
    return {
        "id": "gid://shopify/Product/1001",
        "handle": "blue-shirt",
        "title": "Blue Shirt",
        "description": "A shirt, blue",
        "status": "ACTIVE",
        "vendor": "Acme",
        "productType": "Shirts",
        "tags": ["summer"],
        "publishedAt": "2024-01-01T00:00:00Z",
        "updatedAt": "2024-02-01T00:00:00Z",
        "options": [{"name": "Size", "values": ["S", "M"]}],
        "images": {"edges": [{"node": {"src": "https://cdn/shirt.png", "altText": "shirt",
                                       "width": 100, "height": 100}}]},
        "variants": {"edges": [
            {"node": {
                "id": "gid://shopify/ProductVariant/2001",
                "title": "S",
                "price": "19.99",
                "compareAtPrice": None,
                "sku": "SHIRT-S",
                "inventoryQuantity": 5,
                "availableForSale": True,
                "inventoryPolicy": "DENY",
                "selectedOptions": [{"name": "Size", "value": "S"}],
                "image": None,
            }},
        ]},
    }


@pytest.fixture
def order_node() -> Dict[str, Any]:
    return {
        "id": "gid://shopify/Order/5001",
        "name": "#1001",
        "createdAt": "2024-03-01T10:00:00Z",
        "displayFinancialStatus": "PAID",
        "displayFulfillmentStatus": "UNFULFILLED",
        "email": "buyer@example.com",
        "note": None,
        "tags": [],
        "totalPriceSet": {"shopMoney": {"amount": "39.98", "currencyCode": "USD"}},
        "customer": {"id": "gid://shopify/Customer/7001", "email": "buyer@example.com"},
        "shippingAddress": None,
        "lineItems": {"edges": [{"node": {
            "id": "gid://shopify/LineItem/9001",
            "title": "Blue Shirt",
            "quantity": 2,
            "originalTotalSet": {"shopMoney": {"amount": "39.98", "currencyCode": "USD"}},
            "variant": {"id": "gid://shopify/ProductVariant/2001", "title": "S",
                        "sku": "SHIRT-S", "price": "19.99"},
        }}]},
    }
