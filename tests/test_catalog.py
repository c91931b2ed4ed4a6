"""
Tests for catalog maintenance: inventory, bulk variants, metafields,
collection membership and product images.

Client tests run against a mocked Admin API; tool tests use an AsyncMock
client and cover the per-action argument checks.
"""

from unittest.mock import AsyncMock

import pytest

from shopify_mcp.shopify import ShopifyNotFoundError, ShopifyUserError
from shopify_mcp.tools.catalog import (
    BulkVariantOperationsTool,
    ManageProductCollectionsTool,
    ManageProductImagesTool,
    ManageProductMetafieldsTool,
)
from shopify_mcp.tools.inventory import ManageInventoryTool

from conftest import RecordingTransport, graphql_data, make_client


def _inventory_variant(available=5, location="gid://shopify/Location/77"):
    return {"productVariant": {
        "id": "gid://shopify/ProductVariant/2001",
        "inventoryItem": {
            "id": "gid://shopify/InventoryItem/3001",
            "inventoryLevels": {"edges": [{"node": {
                "location": {"id": location},
                "quantities": [{"name": "available", "quantity": available}],
            }}]},
        },
    }}


def _adjustment(mutation):
    return graphql_data({mutation: {
        "inventoryAdjustmentGroup": {"reason": "correction", "changes": []},
        "userErrors": [],
    }})


# ========== Inventory ==========

class TestManageInventory:

    @pytest.mark.asyncio
    async def test_adjust_sends_delta(self):
        transport = RecordingTransport([
            graphql_data(_inventory_variant(available=5)),
            _adjustment("inventoryAdjustQuantities"),
        ])

        result = await make_client(transport).manage_inventory("2001", "ADJUST", 3)

        assert transport.bodies[0]["variables"] == {"id": "gid://shopify/ProductVariant/2001"}
        assert transport.last_variables["input"] == {
            "reason": "correction",
            "name": "available",
            "changes": [{
                "delta": 3,
                "inventoryItemId": "gid://shopify/InventoryItem/3001",
                "locationId": "gid://shopify/Location/77",
            }],
        }
        assert result == {
            "variant_id": "2001",
            "inventory_item_id": "3001",
            "location_id": "77",
            "previous_quantity": 5,
            "new_quantity": 8,
        }

    @pytest.mark.asyncio
    async def test_set_replaces_quantity(self):
        transport = RecordingTransport([
            graphql_data(_inventory_variant(available=5)),
            _adjustment("inventorySetQuantities"),
        ])

        result = await make_client(transport).manage_inventory("2001", "SET", 12, reason="received")

        sent = transport.last_variables["input"]
        assert sent["reason"] == "received"
        assert sent["quantities"][0]["quantity"] == 12
        assert "inventorySetQuantities" in transport.bodies[-1]["query"]
        assert (result["previous_quantity"], result["new_quantity"]) == (5, 12)

    @pytest.mark.asyncio
    async def test_unknown_variant(self):
        transport = RecordingTransport([graphql_data({"productVariant": None})])

        with pytest.raises(ShopifyNotFoundError):
            await make_client(transport).manage_inventory("404", "SET", 1)

        assert len(transport.requests) == 1

    @pytest.mark.asyncio
    async def test_unstocked_location(self):
        transport = RecordingTransport([graphql_data(_inventory_variant())])

        with pytest.raises(ShopifyNotFoundError) as exc_info:
            await make_client(transport).manage_inventory("2001", "ADJUST", 1, location_id="99")

        assert "at location 99" in exc_info.value.message
        assert len(transport.requests) == 1

    @pytest.mark.asyncio
    async def test_user_errors(self):
        user_errors = [{"field": ["input", "reason"], "message": "Reason is invalid"}]
        transport = RecordingTransport([
            graphql_data(_inventory_variant()),
            graphql_data({"inventoryAdjustQuantities": {"inventoryAdjustmentGroup": None,
                                                        "userErrors": user_errors}}),
        ])

        with pytest.raises(ShopifyUserError) as exc_info:
            await make_client(transport).manage_inventory("2001", "ADJUST", -2)

        assert exc_info.value.details["input"]["quantity"] == -2


# ========== Bulk variants ==========

class TestBulkVariantOperations:

    @pytest.mark.asyncio
    async def test_groups_by_action_and_product(self):
        transport = RecordingTransport([
            graphql_data({"productVariantsBulkUpdate": {
                "productVariants": [{"id": "gid://shopify/ProductVariant/2001", "title": "S", "price": "9.00"},
                                    {"id": "gid://shopify/ProductVariant/2002", "title": "M", "price": "9.00"}],
                "userErrors": [],
            }}),
            graphql_data({"productVariantsBulkDelete": {"product": {"id": "gid://shopify/Product/1001"},
                                                        "userErrors": []}}),
        ])

        result = await make_client(transport).bulk_variant_operations([
            {"action": "UPDATE", "productId": "1001", "variantData": {"id": "2001", "price": 9}},
            {"action": "DELETE", "productId": "1001", "variantData": {"id": "2009"}},
            {"action": "UPDATE", "productId": "1001", "variantData": {"id": "2002", "price": 9}},
        ])

        assert len(transport.requests) == 2
        assert [v["id"] for v in transport.bodies[0]["variables"]["variants"]] == [
            "gid://shopify/ProductVariant/2001", "gid://shopify/ProductVariant/2002",
        ]
        assert transport.bodies[1]["variables"] == {
            "productId": "gid://shopify/Product/1001",
            "variantsIds": ["gid://shopify/ProductVariant/2009"],
        }
        assert result == [
            {"action": "UPDATE", "product_id": "1001", "variant_ids": ["2001", "2002"]},
            {"action": "DELETE", "product_id": "1001", "variant_ids": ["2009"]},
        ]

    @pytest.mark.asyncio
    async def test_create_maps_inventory_fields(self):
        transport = RecordingTransport([graphql_data({"productVariantsBulkCreate": {
            "productVariants": [{"id": "gid://shopify/ProductVariant/2010", "title": "L", "price": "12.50"}],
            "userErrors": [],
        }})])

        await make_client(transport).bulk_variant_operations([{
            "action": "CREATE",
            "productId": "1001",
            "variantData": {
                "price": 12.5,
                "sku": "SHIRT-L",
                "weight": 0.3,
                "options": [{"optionName": "Size", "name": "L"}],
            },
        }])

        assert transport.last_variables["variants"] == [{
            "price": "12.5",
            "optionValues": [{"optionName": "Size", "name": "L"}],
            "inventoryItem": {
                "sku": "SHIRT-L",
                "measurement": {"weight": {"value": 0.3, "unit": "KILOGRAMS"}},
            },
        }]

    @pytest.mark.asyncio
    async def test_user_errors_stop_the_run(self):
        user_errors = [{"field": ["variants", "0", "price"], "message": "Price must be greater than 0"}]
        transport = RecordingTransport([graphql_data({"productVariantsBulkCreate": {
            "productVariants": None, "userErrors": user_errors,
        }})])

        with pytest.raises(ShopifyUserError) as exc_info:
            await make_client(transport).bulk_variant_operations([
                {"action": "CREATE", "productId": "1001", "variantData": {"price": -1}},
                {"action": "DELETE", "productId": "1001", "variantData": {"id": "2009"}},
            ])

        assert exc_info.value.details["input"]["action"] == "CREATE"
        assert len(transport.requests) == 1


# ========== Metafields ==========

class TestProductMetafields:

    @pytest.mark.asyncio
    async def test_set_and_delete(self):
        transport = RecordingTransport([
            graphql_data({"metafieldsSet": {
                "metafields": [{"id": "gid://shopify/Metafield/1", "namespace": "custom",
                                "key": "fabric", "value": "cotton", "type": "single_line_text_field"}],
                "userErrors": [],
            }}),
            graphql_data({"product": {"id": "gid://shopify/Product/1001",
                                      "metafield": {"id": "gid://shopify/Metafield/2"}}}),
            graphql_data({"metafieldDelete": {"deletedId": "gid://shopify/Metafield/2", "userErrors": []}}),
        ])

        result = await make_client(transport).manage_product_metafields("1001", [
            {"action": "SET", "namespace": "custom", "key": "fabric",
             "value": "cotton", "type": "single_line_text_field"},
            {"action": "DELETE", "namespace": "custom", "key": "care"},
        ])

        assert transport.bodies[0]["variables"]["metafields"][0]["ownerId"] == "gid://shopify/Product/1001"
        assert transport.bodies[1]["variables"] == {
            "id": "gid://shopify/Product/1001", "namespace": "custom", "key": "care",
        }
        assert transport.last_variables == {"input": {"id": "gid://shopify/Metafield/2"}}
        assert result["set"][0]["value"] == "cotton"
        assert result["deleted"] == [{"id": "2", "namespace": "custom", "key": "care"}]

    @pytest.mark.asyncio
    async def test_delete_missing_metafield(self):
        transport = RecordingTransport([graphql_data({"product": {"id": "gid://shopify/Product/1001",
                                                                  "metafield": None}})])

        with pytest.raises(ShopifyNotFoundError) as exc_info:
            await make_client(transport).manage_product_metafields("1001", [
                {"action": "DELETE", "namespace": "custom", "key": "care"},
            ])

        assert exc_info.value.message == "Metafield custom.care not found on product 1001"
        assert len(transport.requests) == 1


# ========== Collection membership ==========

class TestProductCollections:

    @pytest.mark.asyncio
    async def test_add_to_each_collection(self):
        payload = {"collectionAddProducts": {"collection": {"id": "x", "title": "t"}, "userErrors": []}}
        transport = RecordingTransport([graphql_data(payload), graphql_data(payload)])

        result = await make_client(transport).manage_product_collections("ADD", ["1001", "1002"], ["55", "56"])

        assert [b["variables"]["id"] for b in transport.bodies] == [
            "gid://shopify/Collection/55", "gid://shopify/Collection/56",
        ]
        assert transport.last_variables["productIds"] == [
            "gid://shopify/Product/1001", "gid://shopify/Product/1002",
        ]
        assert result == {"action": "ADD", "product_ids": ["1001", "1002"], "collection_ids": ["55", "56"]}

    @pytest.mark.asyncio
    async def test_remove_reports_user_errors(self):
        user_errors = [{"field": ["id"], "message": "Collection is smart"}]
        transport = RecordingTransport([graphql_data({"collectionRemoveProducts": {
            "job": None, "userErrors": user_errors,
        }})])

        with pytest.raises(ShopifyUserError) as exc_info:
            await make_client(transport).manage_product_collections("REMOVE", ["1001"], ["55"])

        assert "collectionRemoveProducts" in transport.bodies[0]["query"]
        assert exc_info.value.details["input"]["collectionId"] == "55"


# ========== Product media ==========

class TestProductImages:

    @pytest.mark.asyncio
    async def test_add_images(self):
        transport = RecordingTransport([graphql_data({"productCreateMedia": {
            "media": [{"id": "gid://shopify/MediaImage/9", "alt": "front",
                       "status": "UPLOADED", "mediaContentType": "IMAGE"}],
            "mediaUserErrors": [],
        }})])

        result = await make_client(transport).manage_product_images(
            "1001", "ADD", [{"url": "https://cdn.example.com/front.png", "altText": "front"}],
        )

        assert transport.last_variables["media"] == [{
            "originalSource": "https://cdn.example.com/front.png",
            "alt": "front",
            "mediaContentType": "IMAGE",
        }]
        assert result["media"] == [{"id": "9", "alt": "front", "status": "UPLOADED", "media_content_type": "IMAGE"}]

    @pytest.mark.asyncio
    async def test_media_user_errors_are_decoded(self):
        media_errors = [{"field": ["media", "0", "originalSource"], "message": "Image URL is invalid"}]
        transport = RecordingTransport([graphql_data({"productCreateMedia": {
            "media": [], "mediaUserErrors": media_errors,
        }})])

        with pytest.raises(ShopifyUserError) as exc_info:
            await make_client(transport).manage_product_images("1001", "ADD", [{"url": "not a url"}])

        assert exc_info.value.user_errors == media_errors

    @pytest.mark.asyncio
    async def test_remove_images(self):
        transport = RecordingTransport([graphql_data({"productDeleteMedia": {
            "deletedMediaIds": ["gid://shopify/MediaImage/9"], "mediaUserErrors": [],
        }})])

        result = await make_client(transport).manage_product_images("1001", "REMOVE", [{"id": "9"}])

        assert transport.last_variables == {
            "productId": "gid://shopify/Product/1001",
            "mediaIds": ["gid://shopify/MediaImage/9"],
        }
        assert result == {"product_id": "1001", "action": "REMOVE", "deleted_media_ids": ["9"]}


# ========== Tools ==========

@pytest.fixture
def client() -> AsyncMock:
    return AsyncMock()


class TestCatalogTools:

    @pytest.mark.asyncio
    async def test_inventory_defaults_reason(self, client):
        client.manage_inventory.return_value = {"new_quantity": 4}

        result = await ManageInventoryTool(client).run(variantId="2001", action="ADJUST", quantity=-1)

        assert result["success"] is True
        client.manage_inventory.assert_awaited_once_with(
            "2001", "ADJUST", -1, location_id=None, reason="correction",
        )

    @pytest.mark.asyncio
    async def test_inventory_rejects_negative_set(self, client):
        result = await ManageInventoryTool(client).run(variantId="2001", action="SET", quantity=-1)

        assert result["error"]["type"] == "validation"
        client.manage_inventory.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_inventory_rejects_unknown_reason(self, client):
        result = await ManageInventoryTool(client).run(
            variantId="2001", action="SET", quantity=1, reason="lost in the mail",
        )

        assert result["error"]["type"] == "validation"

    @pytest.mark.asyncio
    async def test_update_needs_variant_id(self, client):
        result = await BulkVariantOperationsTool(client).run(operations=[
            {"action": "UPDATE", "productId": "1001", "variantData": {"price": 5}},
        ])

        assert result["error"]["type"] == "validation"
        assert "operations[0].variantData.id" in result["error"]["message"]
        client.bulk_variant_operations.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_variant_fields_are_checked(self, client):
        result = await BulkVariantOperationsTool(client).run(operations=[
            {"action": "CREATE", "productId": "1001", "variantData": {"weightUnit": "STONES"}},
        ])

        assert result["error"]["type"] == "validation"
        client.bulk_variant_operations.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_variant_operations_pass_through(self, client):
        client.bulk_variant_operations.return_value = []
        operations = [{"action": "DELETE", "productId": "1001", "variantData": {"id": "2009"}}]

        result = await BulkVariantOperationsTool(client).run(operations=operations)

        assert result["success"] is True
        client.bulk_variant_operations.assert_awaited_once_with(operations)

    @pytest.mark.asyncio
    async def test_metafield_set_needs_value_and_type(self, client):
        result = await ManageProductMetafieldsTool(client).run(productId="1001", operations=[
            {"action": "SET", "namespace": "custom", "key": "fabric", "value": "cotton"},
        ])

        assert result["error"]["type"] == "validation"
        client.manage_product_metafields.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_collections_need_ids(self, client):
        result = await ManageProductCollectionsTool(client).run(action="ADD", productIds=[], collectionIds=["55"])

        assert result["error"]["type"] == "validation"
        client.manage_product_collections.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_added_images_need_url(self, client):
        result = await ManageProductImagesTool(client).run(productId="1001", action="ADD", images=[{"altText": "x"}])

        assert result["error"]["type"] == "validation"
        assert "images[0].url" in result["error"]["message"]

    @pytest.mark.asyncio
    async def test_removed_images_need_id(self, client):
        result = await ManageProductImagesTool(client).run(
            productId="1001", action="REMOVE", images=[{"url": "https://cdn.example.com/a.png"}],
        )

        assert result["error"]["type"] == "validation"
        client.manage_product_images.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_user_errors_envelope(self, client):
        user_errors = [{"field": ["id"], "message": "Collection is smart"}]
        client.manage_product_collections.side_effect = ShopifyUserError(user_errors, {"collectionId": "55"})

        result = await ManageProductCollectionsTool(client).run(
            action="REMOVE", productIds=["1001"], collectionIds=["55"],
        )

        assert result["error"]["type"] == "user_errors"
        assert result["error"]["message"].startswith("Failed to manage product collections: ")
