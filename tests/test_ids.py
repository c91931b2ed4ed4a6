"""
Tests for global-ID helpers and the mutation result decoder.
"""

import pytest

from shopify_mcp.shopify import (
    MutationResult,
    ShopifyProtocolError,
    ShopifyUserError,
    decode_gid,
    to_gid,
)


class TestGlobalIds:

    def test_decode_returns_last_segment(self):
        assert decode_gid("gid://shopify/Product/123") == "123"

    def test_decode_is_lossy(self):
        assert decode_gid("gid://shopify/Order/42") == decode_gid("gid://shopify/Customer/42")

    def test_decode_without_slash_returns_input(self):
        assert decode_gid("plain-id") == "plain-id"

    def test_decode_malformed_takes_tail(self):
        assert decode_gid("gid://shopify/Product/") == ""

    def test_to_gid_builds_global_id(self):
        assert to_gid("Product", 123) == "gid://shopify/Product/123"

    def test_to_gid_passes_through_global_ids(self):
        gid = "gid://shopify/ProductVariant/9"
        assert to_gid("ProductVariant", gid) == gid

    def test_round_trip(self):
        assert decode_gid(to_gid("Collection", "77")) == "77"


class TestMutationResult:

    def test_ok_payload(self):
        result = MutationResult.from_payload(
            {"productCreate": {"product": {"id": "gid://shopify/Product/1"}, "userErrors": []}},
            "productCreate",
        )
        assert result.ok
        assert result.unwrap()["product"]["id"] == "gid://shopify/Product/1"

    def test_user_errors_raise_on_unwrap(self):
        user_errors = [{"field": ["input", "price"], "message": "Price must be positive"}]
        result = MutationResult.from_payload(
            {"productVariantsBulkUpdate": {"productVariants": None, "userErrors": user_errors}},
            "productVariantsBulkUpdate",
        )
        assert not result.ok

        with pytest.raises(ShopifyUserError) as exc_info:
            result.unwrap({"price": -1})

        err = exc_info.value
        assert err.error_type == "user_errors"
        assert err.user_errors == user_errors
        assert err.details["input"] == {"price": -1}
        assert "input.price: Price must be positive" in err.message

    def test_missing_payload_is_protocol_error(self):
        with pytest.raises(ShopifyProtocolError):
            MutationResult.from_payload({}, "productCreate")

    def test_media_errors_use_their_own_key(self):
        media_errors = [{"field": ["media", "0", "originalSource"], "message": "Image URL is invalid"}]
        payload = {"productCreateMedia": {"media": [], "mediaUserErrors": media_errors}}

        assert MutationResult.from_payload(payload, "productCreateMedia").ok

        result = MutationResult.from_payload(payload, "productCreateMedia", errors_key="mediaUserErrors")
        assert result.user_errors == media_errors
