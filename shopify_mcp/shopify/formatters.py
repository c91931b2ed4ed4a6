"""
Response reshaping for Shopify GraphQL payloads.

GraphQL connections come back as ``{edges: [{node}]}`` or ``{nodes: [...]}``
with camelCase fields; tools hand back flat lists with decoded IDs.
"""

from typing import Any, Dict, List, Optional

from .ids import decode_gid


def connection_nodes(connection: Optional[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Flatten a GraphQL connection (edges or nodes form) into a list of nodes."""
    if not connection:
        return []
    if "edges" in connection:
        return [edge["node"] for edge in connection.get("edges") or []]
    return list(connection.get("nodes") or [])


def next_cursor(connection: Optional[Dict[str, Any]]) -> Optional[str]:
    """End cursor of a connection, only when more pages exist."""
    page_info = (connection or {}).get("pageInfo") or {}
    if page_info.get("hasNextPage"):
        return page_info.get("endCursor")
    return None


def _image(image: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    if not image:
        return None
    return {
        "src": image.get("src"),
        "alt": image.get("altText"),
        "width": image.get("width"),
        "height": image.get("height"),
    }


def format_variant(variant: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "id": decode_gid(variant["id"]),
        "title": variant.get("title"),
        "price": variant.get("price"),
        "compare_at_price": variant.get("compareAtPrice"),
        "sku": variant.get("sku"),
        "inventory_quantity": variant.get("inventoryQuantity"),
        "available_for_sale": variant.get("availableForSale"),
        "inventory_policy": variant.get("inventoryPolicy"),
        "options": {
            opt["name"]: opt["value"] for opt in variant.get("selectedOptions") or []
        },
        "image": _image(variant.get("image")),
    }


def format_product(product: Dict[str, Any]) -> Dict[str, Any]:
    variants = [format_variant(v) for v in connection_nodes(product.get("variants"))]
    return {
        "id": decode_gid(product["id"]),
        "handle": product.get("handle"),
        "title": product.get("title"),
        "description": product.get("description"),
        "status": product.get("status"),
        "vendor": product.get("vendor"),
        "product_type": product.get("productType"),
        "tags": product.get("tags") or [],
        "published_at": product.get("publishedAt"),
        "updated_at": product.get("updatedAt"),
        "options": [
            {"name": opt.get("name"), "values": opt.get("values") or []}
            for opt in product.get("options") or []
        ],
        "images": [_image(img) for img in connection_nodes(product.get("images"))],
        "variants": variants,
        # First variant's price stands in for the product price in listings
        "price": variants[0]["price"] if variants else None,
    }


def _money(money_set: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    shop_money = (money_set or {}).get("shopMoney")
    if not shop_money:
        return None
    return {"amount": shop_money.get("amount"), "currency_code": shop_money.get("currencyCode")}


def format_order(order: Dict[str, Any]) -> Dict[str, Any]:
    customer = order.get("customer")
    return {
        "id": decode_gid(order["id"]),
        "name": order.get("name"),
        "created_at": order.get("createdAt"),
        "financial_status": order.get("displayFinancialStatus"),
        "fulfillment_status": order.get("displayFulfillmentStatus"),
        "email": order.get("email"),
        "note": order.get("note"),
        "tags": order.get("tags") or [],
        "total_price": _money(order.get("totalPriceSet")),
        "customer": {
            "id": decode_gid(customer["id"]),
            "email": customer.get("email"),
        } if customer else None,
        "shipping_address": order.get("shippingAddress"),
        "line_items": [
            {
                "id": decode_gid(item["id"]),
                "title": item.get("title"),
                "quantity": item.get("quantity"),
                "total": _money(item.get("originalTotalSet")),
                "variant": {
                    "id": decode_gid(item["variant"]["id"]),
                    "title": item["variant"].get("title"),
                    "sku": item["variant"].get("sku"),
                    "price": item["variant"].get("price"),
                } if item.get("variant") else None,
            }
            for item in connection_nodes(order.get("lineItems"))
        ],
    }


def format_customer(customer: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "id": decode_gid(customer["id"]),
        "email": customer.get("email"),
        "first_name": customer.get("firstName"),
        "last_name": customer.get("lastName"),
        "phone": customer.get("phone"),
        "orders_count": customer.get("ordersCount"),
        "tags": customer.get("tags") or [],
        "country": (customer.get("defaultAddress") or {}).get("countryCodeV2"),
    }


def format_collection(collection: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "id": decode_gid(collection["id"]),
        "handle": collection.get("handle"),
        "title": collection.get("title"),
        "description": collection.get("description"),
        "products_count": collection.get("productsCount"),
        "updated_at": collection.get("updatedAt"),
        "image": _image(collection.get("image")),
    }


def format_article(article: Dict[str, Any]) -> Dict[str, Any]:
    image = article.get("image")
    return {
        "id": decode_gid(article["id"]),
        "title": article.get("title"),
        "author": (article.get("author") or {}).get("name"),
        "body_html": article.get("bodyHtml"),
        "published_at": article.get("publishedAt"),
        "tags": article.get("tags") or [],
        "status": (article.get("status") or "").lower() or None,
        "image": {"src": image.get("src"), "alt": image.get("altText")} if image else None,
    }


def format_discount(node: Dict[str, Any]) -> Dict[str, Any]:
    discount = node.get("codeDiscount") or {}
    value = (discount.get("customerGets") or {}).get("value") or {}
    if "percentage" in value:
        # Shopify stores 0.1 for 10%
        value = {"type": "percentage", "value": round(float(value["percentage"]) * 100, 4)}
    elif "amount" in value:
        value = {
            "type": "fixed_amount",
            "value": float(value["amount"]["amount"]),
            "currency_code": value["amount"].get("currencyCode"),
        }
    else:
        value = None

    return {
        "id": decode_gid(node["id"]),
        "title": discount.get("title"),
        "status": discount.get("status"),
        "codes": [c.get("code") for c in connection_nodes(discount.get("codes"))],
        "starts_at": discount.get("startsAt"),
        "ends_at": discount.get("endsAt"),
        "applies_once_per_customer": discount.get("appliesOncePerCustomer"),
        "usage_count": discount.get("asyncUsageCount"),
        "value": value,
    }
