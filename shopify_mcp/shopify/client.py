"""
Shopify Admin client.

One coroutine per platform operation. Each builds its variables, sends a
document through the shared ``GraphQLPipeline`` and reshapes the result.
Mutations go through ``_mutate`` so their ``userErrors`` are decoded in
one place.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from . import queries
from .errors import ShopifyNotFoundError
from .formatters import (
    connection_nodes,
    format_article,
    format_collection,
    format_customer,
    format_discount,
    format_order,
    format_product,
    next_cursor,
)
from .ids import decode_gid, to_gid
from .pipeline import GraphQLPipeline, RateLimiter, ShopifyCredentials
from .result import MutationResult

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 10


def _compact(values: Dict[str, Any]) -> Dict[str, Any]:
    """Drop keys whose value is None so unset fields are left untouched upstream."""
    return {k: v for k, v in values.items() if v is not None}


class ShopifyClient:
    """Shopify GraphQL Admin API operations for a single shop."""

    def __init__(self, credentials: ShopifyCredentials, pipeline: Optional[GraphQLPipeline] = None):
        self.credentials = credentials
        self.pipeline = pipeline or GraphQLPipeline()

    @classmethod
    def from_settings(cls, settings, transport=None, request_logger=None) -> "ShopifyClient":
        pipeline = GraphQLPipeline(
            api_version=settings.api_version,
            rate_limiter=RateLimiter(settings.rate_limit_ms / 1000.0),
            timeout=settings.request_timeout,
            transport=transport,
            request_logger=request_logger,
        )
        return cls(settings.credentials, pipeline)

    async def aclose(self) -> None:
        await self.pipeline.aclose()

    async def _request(self, query: str, variables: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return await self.pipeline.send(self.credentials, query, variables)

    async def _mutate(
        self,
        mutation: str,
        query: str,
        variables: Dict[str, Any],
        input_payload: Any = None,
        errors_key: str = "userErrors",
    ) -> Dict[str, Any]:
        data = await self._request(query, variables)
        return MutationResult.from_payload(data, mutation, errors_key).unwrap(input_payload)

    # ============== Products ==============

    async def load_products(
        self,
        search_title: Optional[str] = None,
        limit: Optional[int] = None,
        after: Optional[str] = None,
    ) -> Dict[str, Any]:
        data = await self._request(queries.GET_PRODUCTS, {
            "query": search_title,
            "first": limit or DEFAULT_PAGE_SIZE,
            "after": after,
        })
        return {
            "products": [format_product(p) for p in connection_nodes(data["products"])],
            "currency_code": data["shop"]["currencyCode"],
            "next": next_cursor(data["products"]),
        }

    async def load_products_by_collection(
        self,
        collection_id: str,
        limit: Optional[int] = None,
        after: Optional[str] = None,
    ) -> Dict[str, Any]:
        data = await self._request(queries.GET_COLLECTION_PRODUCTS, {
            "id": to_gid("Collection", collection_id),
            "first": limit or DEFAULT_PAGE_SIZE,
            "after": after,
        })
        collection = data.get("collection")
        if collection is None:
            raise ShopifyNotFoundError("Collection", collection_id)

        return {
            "collection": {"id": decode_gid(collection["id"]), "title": collection.get("title")},
            "products": [format_product(p) for p in connection_nodes(collection["products"])],
            "currency_code": data["shop"]["currencyCode"],
            "next": next_cursor(collection["products"]),
        }

    async def get_product(self, product_id: str) -> Dict[str, Any]:
        data = await self._request(queries.GET_PRODUCT, {"id": to_gid("Product", product_id)})
        product = data.get("product")
        if product is None:
            raise ShopifyNotFoundError("Product", product_id)
        return {"product": format_product(product), "currency_code": data["shop"]["currencyCode"]}

    async def search_products_by_price_range(
        self,
        min_price: float,
        max_price: float,
        limit: Optional[int] = None,
    ) -> Dict[str, Any]:
        return await self.load_products(
            f"variants.price:>={min_price} AND variants.price:<={max_price}",
            limit=limit,
        )

    async def create_product(
        self,
        title: str,
        description: Optional[str] = None,
        vendor: Optional[str] = None,
        product_type: Optional[str] = None,
        tags: Optional[List[str]] = None,
        status: Optional[str] = None,
    ) -> Dict[str, Any]:
        product_input = _compact({
            "title": title,
            "descriptionHtml": description,
            "vendor": vendor,
            "productType": product_type,
            "tags": tags,
            "status": status,
        })
        payload = await self._mutate(
            "productCreate", queries.PRODUCT_CREATE, {"input": product_input}, product_input,
        )
        return format_product(payload["product"])

    async def update_product(self, product_id: str, **fields) -> Dict[str, Any]:
        product_input = _compact({
            "id": to_gid("Product", product_id),
            "title": fields.get("title"),
            "descriptionHtml": fields.get("description"),
            "vendor": fields.get("vendor"),
            "productType": fields.get("product_type"),
            "tags": fields.get("tags"),
            "status": fields.get("status"),
        })
        payload = await self._mutate(
            "productUpdate", queries.PRODUCT_UPDATE, {"input": product_input}, product_input,
        )
        return format_product(payload["product"])

    async def update_variant_prices(
        self,
        product_id: str,
        updates: List[Dict[str, Any]],
    ) -> List[Dict[str, Any]]:
        variables = {
            "productId": to_gid("Product", product_id),
            "variants": [
                {"id": to_gid("ProductVariant", u["variantId"]), "price": str(u["price"])}
                for u in updates
            ],
        }
        payload = await self._mutate(
            "productVariantsBulkUpdate", queries.PRODUCT_VARIANTS_BULK_UPDATE, variables,
            {"productId": product_id, "variants": updates},
        )
        return [
            {"variant_id": decode_gid(v["id"]), "title": v.get("title"), "price": v.get("price")}
            for v in payload.get("productVariants") or []
        ]

    @staticmethod
    def _variant_input(variant: Dict[str, Any]) -> Dict[str, Any]:
        """Map flat variant fields onto ``ProductVariantsBulkInput``."""
        inventory_item = _compact({
            "sku": variant.get("sku"),
            "requiresShipping": variant.get("requiresShipping"),
        })
        if variant.get("weight") is not None:
            inventory_item["measurement"] = {
                "weight": {"value": variant["weight"], "unit": variant.get("weightUnit") or "KILOGRAMS"},
            }

        price = variant.get("price")
        compare_at = variant.get("compareAtPrice")
        bulk_input = _compact({
            "id": to_gid("ProductVariant", variant["id"]) if variant.get("id") else None,
            "price": str(price) if price is not None else None,
            "compareAtPrice": str(compare_at) if compare_at is not None else None,
            "barcode": variant.get("barcode"),
            "taxable": variant.get("taxable"),
            "optionValues": [
                {"optionName": o["optionName"], "name": o["name"]} for o in variant["options"]
            ] if variant.get("options") else None,
        })
        if inventory_item:
            bulk_input["inventoryItem"] = inventory_item
        return bulk_input

    async def bulk_variant_operations(self, operations: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """Run variant CREATE/UPDATE/DELETE operations.

        Operations are grouped by action and product, in the order each group
        first appears, and every group is one bulk mutation. A group that
        fails with userErrors stops the run; earlier groups stay applied.
        """
        groups: Dict[Tuple[str, str], List[Dict[str, Any]]] = {}
        for op in operations:
            groups.setdefault((op["action"], op["productId"]), []).append(op.get("variantData") or {})

        results = []
        for (action, product_id), variants in groups.items():
            product_gid = to_gid("Product", product_id)
            input_payload = {"action": action, "productId": product_id, "variants": variants}

            if action == "DELETE":
                variant_gids = [to_gid("ProductVariant", v["id"]) for v in variants]
                await self._mutate(
                    "productVariantsBulkDelete", queries.PRODUCT_VARIANTS_BULK_DELETE,
                    {"productId": product_gid, "variantsIds": variant_gids}, input_payload,
                )
                variant_ids = [decode_gid(gid) for gid in variant_gids]
            else:
                if action == "CREATE":
                    mutation, query = "productVariantsBulkCreate", queries.PRODUCT_VARIANTS_BULK_CREATE
                else:
                    mutation, query = "productVariantsBulkUpdate", queries.PRODUCT_VARIANTS_BULK_UPDATE
                payload = await self._mutate(
                    mutation, query,
                    {"productId": product_gid, "variants": [self._variant_input(v) for v in variants]},
                    input_payload,
                )
                variant_ids = [decode_gid(v["id"]) for v in payload.get("productVariants") or []]

            results.append({
                "action": action,
                "product_id": decode_gid(str(product_id)),
                "variant_ids": variant_ids,
            })
        return results

    # ============== Inventory ==============

    async def manage_inventory(
        self,
        variant_id: str,
        action: str,
        quantity: int,
        location_id: Optional[str] = None,
        reason: str = "correction",
    ) -> Dict[str, Any]:
        """Set or adjust the ``available`` quantity of a variant at one location.

        Without ``location_id`` the variant's first stocked location is used.
        """
        data = await self._request(queries.GET_VARIANT_INVENTORY, {"id": to_gid("ProductVariant", variant_id)})
        variant = data.get("productVariant")
        if variant is None:
            raise ShopifyNotFoundError("Variant", variant_id)

        item = variant.get("inventoryItem") or {}
        levels = connection_nodes(item.get("inventoryLevels"))
        if location_id is not None:
            wanted = decode_gid(str(location_id))
            levels = [level for level in levels if decode_gid(level["location"]["id"]) == wanted]
        if not levels:
            where = f" at location {location_id}" if location_id else ""
            raise ShopifyNotFoundError(
                "Location", location_id or variant_id,
                message=f"No inventory level for variant {variant_id}{where}",
            )

        level = levels[0]
        location_gid = level["location"]["id"]
        previous = next(
            (q["quantity"] for q in level.get("quantities") or [] if q["name"] == "available"), 0,
        )
        input_payload = {"variantId": variant_id, "action": action, "quantity": quantity, "locationId": location_id}

        if action == "ADJUST":
            await self._mutate("inventoryAdjustQuantities", queries.INVENTORY_ADJUST_QUANTITIES, {"input": {
                "reason": reason,
                "name": "available",
                "changes": [{"delta": quantity, "inventoryItemId": item["id"], "locationId": location_gid}],
            }}, input_payload)
            new_quantity = previous + quantity
        else:
            await self._mutate("inventorySetQuantities", queries.INVENTORY_SET_QUANTITIES, {"input": {
                "reason": reason,
                "name": "available",
                "ignoreCompareQuantity": True,
                "quantities": [{"inventoryItemId": item["id"], "locationId": location_gid, "quantity": quantity}],
            }}, input_payload)
            new_quantity = quantity

        return {
            "variant_id": decode_gid(variant["id"]),
            "inventory_item_id": decode_gid(item["id"]),
            "location_id": decode_gid(location_gid),
            "previous_quantity": previous,
            "new_quantity": new_quantity,
        }

    # ============== Metafields ==============

    async def manage_product_metafields(self, product_id: str, operations: List[Dict[str, Any]]) -> Dict[str, Any]:
        """SET operations go out as one ``metafieldsSet``; each DELETE is a lookup plus ``metafieldDelete``."""
        product_gid = to_gid("Product", product_id)
        result: Dict[str, Any] = {"product_id": decode_gid(str(product_id)), "set": [], "deleted": []}

        to_set = [op for op in operations if op["action"] == "SET"]
        if to_set:
            payload = await self._mutate(
                "metafieldsSet", queries.METAFIELDS_SET,
                {"metafields": [
                    {
                        "ownerId": product_gid,
                        "namespace": op["namespace"],
                        "key": op["key"],
                        "value": op["value"],
                        "type": op["type"],
                    }
                    for op in to_set
                ]},
                {"productId": product_id, "operations": to_set},
            )
            result["set"] = [
                {
                    "id": decode_gid(m["id"]),
                    "namespace": m.get("namespace"),
                    "key": m.get("key"),
                    "value": m.get("value"),
                    "type": m.get("type"),
                }
                for m in payload.get("metafields") or []
            ]

        for op in operations:
            if op["action"] != "DELETE":
                continue
            namespace, key = op["namespace"], op["key"]
            data = await self._request(queries.GET_PRODUCT_METAFIELD, {
                "id": product_gid,
                "namespace": namespace,
                "key": key,
            })
            product = data.get("product")
            if product is None:
                raise ShopifyNotFoundError("Product", product_id)
            metafield = product.get("metafield")
            if metafield is None:
                raise ShopifyNotFoundError(
                    "Metafield", f"{namespace}.{key}",
                    message=f"Metafield {namespace}.{key} not found on product {product_id}",
                )
            payload = await self._mutate(
                "metafieldDelete", queries.METAFIELD_DELETE,
                {"input": {"id": metafield["id"]}},
                {"productId": product_id, "namespace": namespace, "key": key},
            )
            result["deleted"].append({
                "id": decode_gid(payload.get("deletedId") or metafield["id"]),
                "namespace": namespace,
                "key": key,
            })

        return result

    # ============== Collection membership ==============

    async def manage_product_collections(
        self,
        action: str,
        product_ids: List[str],
        collection_ids: List[str],
    ) -> Dict[str, Any]:
        """Add products to, or remove them from, each collection in turn."""
        if action == "ADD":
            mutation, query = "collectionAddProducts", queries.COLLECTION_ADD_PRODUCTS
        else:
            mutation, query = "collectionRemoveProducts", queries.COLLECTION_REMOVE_PRODUCTS

        product_gids = [to_gid("Product", pid) for pid in product_ids]
        collections = []
        for collection_id in collection_ids:
            await self._mutate(
                mutation, query,
                {"id": to_gid("Collection", collection_id), "productIds": product_gids},
                {"action": action, "collectionId": collection_id, "productIds": product_ids},
            )
            collections.append(decode_gid(str(collection_id)))

        return {
            "action": action,
            "product_ids": [decode_gid(str(pid)) for pid in product_ids],
            "collection_ids": collections,
        }

    # ============== Product media ==============

    async def manage_product_images(
        self,
        product_id: str,
        action: str,
        images: List[Dict[str, Any]],
    ) -> Dict[str, Any]:
        product_gid = to_gid("Product", product_id)
        input_payload = {"productId": product_id, "action": action, "images": images}
        result: Dict[str, Any] = {"product_id": decode_gid(str(product_id)), "action": action}

        if action == "REMOVE":
            payload = await self._mutate(
                "productDeleteMedia", queries.PRODUCT_DELETE_MEDIA,
                {"productId": product_gid, "mediaIds": [to_gid("MediaImage", image["id"]) for image in images]},
                input_payload,
                errors_key="mediaUserErrors",
            )
            result["deleted_media_ids"] = [decode_gid(gid) for gid in payload.get("deletedMediaIds") or []]
            return result

        if action == "ADD":
            mutation, query = "productCreateMedia", queries.PRODUCT_CREATE_MEDIA
            media = [
                _compact({"originalSource": image["url"], "alt": image.get("altText"), "mediaContentType": "IMAGE"})
                for image in images
            ]
        else:
            mutation, query = "productUpdateMedia", queries.PRODUCT_UPDATE_MEDIA
            media = [
                _compact({
                    "id": to_gid("MediaImage", image["id"]),
                    "alt": image.get("altText"),
                    "previewImageSource": image.get("url"),
                })
                for image in images
            ]

        payload = await self._mutate(
            mutation, query, {"productId": product_gid, "media": media}, input_payload,
            errors_key="mediaUserErrors",
        )
        result["media"] = [
            {
                "id": decode_gid(m["id"]),
                "alt": m.get("alt"),
                "status": m.get("status"),
                "media_content_type": m.get("mediaContentType"),
            }
            for m in payload.get("media") or []
        ]
        return result

    # ============== Customers ==============

    async def load_customers(self, limit: Optional[int] = None, after: Optional[str] = None) -> Dict[str, Any]:
        data = await self._request(queries.GET_CUSTOMERS, {
            "first": limit or DEFAULT_PAGE_SIZE,
            "after": after,
        })
        return {
            "customers": [format_customer(c) for c in connection_nodes(data["customers"])],
            "next": next_cursor(data["customers"]),
        }

    async def tag_customer(self, customer_id: str, tags: List[str]) -> Dict[str, Any]:
        variables = {
            "input": {
                "id": to_gid("Customer", customer_id),
                "tags": ", ".join(tags),
            }
        }
        payload = await self._mutate(
            "customerUpdate", queries.CUSTOMER_UPDATE_TAGS, variables,
            {"customerId": customer_id, "tags": tags},
        )
        customer = payload.get("customer") or {}
        return {
            "customer_id": decode_gid(customer["id"]) if customer.get("id") else customer_id,
            "tags": customer.get("tags", tags),
        }

    # ============== Orders ==============

    async def load_orders(
        self,
        first: Optional[int] = None,
        after: Optional[str] = None,
        query: Optional[str] = None,
        sort_key: Optional[str] = None,
        reverse: Optional[bool] = None,
    ) -> Dict[str, Any]:
        data = await self._request(queries.GET_ORDERS, {
            "first": first or DEFAULT_PAGE_SIZE,
            "after": after,
            "query": query,
            "sortKey": sort_key,
            "reverse": reverse,
        })
        return {
            "orders": [format_order(o) for o in connection_nodes(data["orders"])],
            "next": next_cursor(data["orders"]),
        }

    async def get_order(self, order_id: str) -> Dict[str, Any]:
        result = await self.load_orders(first=1, query=f"id:{decode_gid(str(order_id))}")
        if not result["orders"]:
            raise ShopifyNotFoundError("Order", order_id)
        return result["orders"][0]

    async def create_draft_order(
        self,
        email: str,
        line_items: List[Dict[str, Any]],
        shipping_address: Optional[Dict[str, Any]] = None,
        note: Optional[str] = None,
    ) -> Dict[str, Any]:
        draft_input = _compact({
            "email": email,
            "lineItems": [
                {"variantId": to_gid("ProductVariant", item["variantId"]), "quantity": item["quantity"]}
                for item in line_items
            ],
            "shippingAddress": _compact(shipping_address) if shipping_address else None,
            "billingAddress": _compact(shipping_address) if shipping_address else None,
            "note": note,
        })
        payload = await self._mutate(
            "draftOrderCreate", queries.DRAFT_ORDER_CREATE, {"input": draft_input}, draft_input,
        )
        draft = payload["draftOrder"]
        total = ((draft.get("totalPriceSet") or {}).get("shopMoney")) or {}
        return {
            "draft_order_id": decode_gid(draft["id"]),
            "draft_order_name": draft.get("name"),
            "status": draft.get("status"),
            "invoice_url": draft.get("invoiceUrl"),
            "total_price": {"amount": total.get("amount"), "currency_code": total.get("currencyCode")},
        }

    async def complete_draft_order(self, draft_order_id: str, variant_id: str) -> Dict[str, Any]:
        """Complete a draft order after checking it contains ``variant_id``.

        Two independent calls: a lookup, then ``draftOrderComplete``.
        """
        draft_gid = to_gid("DraftOrder", draft_order_id)
        data = await self._request(queries.GET_DRAFT_ORDER, {"id": draft_gid})
        draft = data.get("draftOrder")
        if draft is None:
            raise ShopifyNotFoundError("Draft order", draft_order_id)

        wanted = decode_gid(str(variant_id))
        variant_ids = {
            decode_gid(item["variant"]["id"])
            for item in connection_nodes(draft.get("lineItems"))
            if item.get("variant")
        }
        if wanted not in variant_ids:
            logger.debug(f"Draft order {draft_order_id} has no line item for variant {variant_id}")
            raise ShopifyNotFoundError(
                "Variant", variant_id,
                message=f"Variant with ID {variant_id} not found in draft order {draft_order_id}",
            )

        payload = await self._mutate(
            "draftOrderComplete", queries.DRAFT_ORDER_COMPLETE,
            {"id": draft_gid, "paymentPending": False},
            {"draftOrderId": draft_order_id, "variantId": variant_id},
        )
        completed = payload["draftOrder"]
        order = completed.get("order") or {}
        return {
            "draft_order_id": decode_gid(completed["id"]),
            "draft_order_name": completed.get("name"),
            "status": completed.get("status"),
            "order_id": decode_gid(order["id"]) if order.get("id") else None,
            "order_name": order.get("name"),
        }

    # ============== Collections ==============

    async def load_collections(
        self,
        limit: Optional[int] = None,
        name: Optional[str] = None,
        after: Optional[str] = None,
    ) -> Dict[str, Any]:
        data = await self._request(queries.GET_COLLECTIONS, {
            "first": limit or DEFAULT_PAGE_SIZE,
            "after": after,
            "query": f"title:{name}" if name else None,
        })
        return {
            "collections": [format_collection(c) for c in connection_nodes(data["collections"])],
            "next": next_cursor(data["collections"]),
        }

    # ============== Shop ==============

    async def load_shop(self) -> Dict[str, Any]:
        data = await self._request(queries.GET_SHOP)
        return data["shop"]

    async def load_shop_details(self) -> Dict[str, Any]:
        data = await self._request(queries.GET_SHOP_DETAILS)
        return data["shop"]

    # ============== Discounts ==============

    async def create_basic_discount_code(
        self,
        title: str,
        code: str,
        value_type: str,
        value: float,
        starts_at: Optional[str] = None,
        ends_at: Optional[str] = None,
        applies_once_per_customer: bool = False,
    ) -> Dict[str, Any]:
        if value_type == "percentage":
            discount_value = {"percentage": value / 100.0}
        else:
            discount_value = {"discountAmount": {"amount": value, "appliesOnEachItem": False}}

        discount_input = _compact({
            "title": title,
            "code": code,
            "startsAt": starts_at or datetime.now(timezone.utc).isoformat(),
            "endsAt": ends_at,
            "appliesOncePerCustomer": applies_once_per_customer,
            "customerSelection": {"all": True},
            "customerGets": {
                "value": discount_value,
                "items": {"all": True},
            },
        })
        payload = await self._mutate(
            "discountCodeBasicCreate", queries.DISCOUNT_CODE_BASIC_CREATE,
            {"basicCodeDiscount": discount_input}, discount_input,
        )
        node = payload["codeDiscountNode"]
        discount = node.get("codeDiscount") or {}
        codes = [c.get("code") for c in connection_nodes(discount.get("codes"))]
        return {
            "id": decode_gid(node["id"]),
            "title": discount.get("title", title),
            "code": codes[0] if codes else code,
            "status": discount.get("status"),
            "starts_at": discount.get("startsAt"),
            "ends_at": discount.get("endsAt"),
        }

    async def get_discount_by_code(self, code: str) -> Dict[str, Any]:
        data = await self._request(queries.GET_DISCOUNT_BY_CODE, {"code": code})
        node = data.get("codeDiscountNodeByCode")
        if node is None:
            raise ShopifyNotFoundError("Discount code", code, message=f"Discount code {code} not found")
        return format_discount(node)

    # ============== Blog articles ==============

    async def load_blog_articles(
        self,
        limit: Optional[int] = None,
        status: Optional[str] = None,
        tag: Optional[str] = None,
        after: Optional[str] = None,
    ) -> Dict[str, Any]:
        query_string = " ".join(
            part for part in (status and f"status:{status}", tag and f"tag:{tag}") if part
        )
        data = await self._request(queries.GET_ARTICLES, {
            "first": limit or DEFAULT_PAGE_SIZE,
            "after": after,
            "query": query_string or None,
        })
        return {
            "articles": [format_article(a) for a in connection_nodes(data["articles"])],
            "next": next_cursor(data["articles"]),
        }

    async def load_blog_article(self, article_id: str) -> Dict[str, Any]:
        data = await self._request(queries.GET_ARTICLE, {"id": to_gid("Article", article_id)})
        article = data.get("article")
        if article is None:
            raise ShopifyNotFoundError("Article", article_id)
        return format_article(article)

    @staticmethod
    def _article_input(article: Dict[str, Any]) -> Dict[str, Any]:
        image = article.get("image")
        return _compact({
            "blogId": to_gid("Blog", article["blog_id"]) if article.get("blog_id") else None,
            "title": article.get("title"),
            "author": article.get("author"),
            "bodyHtml": article.get("body_html"),
            "publishedAt": article.get("published_at"),
            "tags": article.get("tags"),
            "image": _compact({"src": image.get("src"), "altText": image.get("alt")}) if image else None,
            "status": article["status"].upper() if article.get("status") else None,
        })

    @staticmethod
    def _article_summary(article: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "id": decode_gid(article["id"]),
            "title": article.get("title"),
            "status": (article.get("status") or "").lower() or None,
        }

    async def create_blog_article(self, article: Dict[str, Any]) -> Dict[str, Any]:
        article_input = self._article_input(article)
        payload = await self._mutate(
            "articleCreate", queries.ARTICLE_CREATE, {"input": article_input}, article,
        )
        return self._article_summary(payload["article"])

    async def update_blog_article(self, article_id: str, updates: Dict[str, Any]) -> Dict[str, Any]:
        variables = {
            "id": to_gid("Article", article_id),
            "input": self._article_input(updates),
        }
        payload = await self._mutate(
            "articleUpdate", queries.ARTICLE_UPDATE, variables,
            {"articleId": article_id, "updates": updates},
        )
        return self._article_summary(payload["article"])

    async def delete_blog_article(self, article_id: str) -> Dict[str, Any]:
        payload = await self._mutate(
            "articleDelete", queries.ARTICLE_DELETE, {"id": to_gid("Article", article_id)},
            {"articleId": article_id},
        )
        deleted = payload.get("deletedArticleId")
        return {"deleted": True, "id": decode_gid(deleted) if deleted else article_id}

    # ============== Webhooks ==============

    async def subscribe_webhook(self, callback_url: str, topic: str) -> Dict[str, Any]:
        payload = await self._mutate(
            "webhookSubscriptionCreate", queries.WEBHOOK_SUBSCRIPTION_CREATE,
            {"topic": topic, "webhookSubscription": {"callbackUrl": callback_url}},
            {"topic": topic, "callbackUrl": callback_url},
        )
        sub = payload["webhookSubscription"]
        return {"id": decode_gid(sub["id"]), "topic": sub.get("topic"), "callback_url": sub.get("callbackUrl")}

    async def find_webhook(self, callback_url: str, topic: str) -> Optional[Dict[str, Any]]:
        data = await self._request(queries.GET_WEBHOOKS, {"first": 100})
        for node in connection_nodes(data["webhookSubscriptions"]):
            if node.get("topic") == topic and node.get("callbackUrl") == callback_url:
                return {"id": decode_gid(node["id"]), "topic": node["topic"], "callback_url": node["callbackUrl"]}
        return None

    async def unsubscribe_webhook(self, webhook_id: str) -> Dict[str, Any]:
        payload = await self._mutate(
            "webhookSubscriptionDelete", queries.WEBHOOK_SUBSCRIPTION_DELETE,
            {"id": to_gid("WebhookSubscription", webhook_id)},
            {"webhookId": webhook_id},
        )
        deleted = payload.get("deletedWebhookSubscriptionId")
        return {"deleted": True, "id": decode_gid(deleted) if deleted else webhook_id}
