"""
Tests for structural validation of Storefront payloads.
"""

import pytest
from pydantic import BaseModel

from storefront.catalog.schemas import (
    CartNode,
    ProductNode,
    Rejected,
    SchemaValidator,
    Verified,
    cart_validator,
    product_validator,
)
from storefront.exceptions import RecordValidationError
from tests.payloads import cart_line_node, cart_node, product_node


class TestSchemaValidator:
    def test_requires_a_pydantic_model(self):
        with pytest.raises(TypeError):
            SchemaValidator(dict)

    def test_valid_product(self):
        result = product_validator.validate(product_node(1))

        assert isinstance(result, Verified)
        assert result.ok
        assert isinstance(result.record, ProductNode)
        assert result.record.price_range.min_variant_price.amount == "450.0"
        assert result.record.ingredients.value == '["Ghee", "Saffron"]'

    def test_metafields_are_optional(self):
        raw = product_node(1)
        for key in ("ingredients", "usage", "category", "variants"):
            del raw[key]

        result = product_validator.validate(raw)

        assert result.ok
        assert result.record.category is None
        assert result.record.variants is None

    @pytest.mark.parametrize("field", ["id", "title", "handle", "priceRange"])
    def test_missing_required_field_is_rejected(self, field):
        raw = product_node(1)
        del raw[field]

        result = product_validator.validate(raw)

        assert isinstance(result, Rejected)
        assert not result.ok
        assert result.reason

    def test_wrong_type_is_rejected_with_location(self):
        result = product_validator.validate(product_node(2, title=None))

        assert not result.ok
        assert "title" in result.reason
        assert result.label == "gid://shopify/Product/2"

    def test_rejects_relative_image_url(self):
        raw = product_node(1, images={"nodes": [{"url": "/img/1.jpg"}]})

        result = product_validator.validate(raw)

        assert not result.ok
        assert "images.nodes.0.url" in result.reason
        assert result.label == "Test Product 1"

    @pytest.mark.parametrize("amount", ["free", "NaN", "inf", "-Infinity", "sNaN"])
    def test_rejects_non_decimal_amount(self, amount):
        raw = product_node(
            1, priceRange={"minVariantPrice": {"amount": amount, "currencyCode": "INR"}}
        )

        assert not product_validator.validate(raw).ok

    @pytest.mark.parametrize("raw", [None, "product", 7, ["a"]])
    def test_non_object_is_rejected(self, raw):
        result = product_validator.validate(raw)

        assert isinstance(result, Rejected)
        assert result.reason.startswith("expected an object")
        assert result.label is None

    def test_filter_valid_keeps_valid_records_in_order(self):
        raws = [
            product_node(1),
            product_node(2, title=None),
            product_node(3),
            "garbage",
        ]

        nodes = product_validator.filter_valid(raws)

        assert [n.id for n in nodes] == [
            "gid://shopify/Product/1",
            "gid://shopify/Product/3",
        ]

    def test_validate_strict_raises(self):
        with pytest.raises(RecordValidationError) as exc_info:
            product_validator.validate_strict(product_node(4, handle=None))

        assert "ProductNode" in exc_info.value.detail
        assert exc_info.value.label == "Test Product 4"

    def test_custom_schema(self):
        class Point(BaseModel):
            x: int
            y: int

        validator = SchemaValidator(Point)

        assert validator.validate({"x": 1, "y": 2}).record == Point(x=1, y=2)
        assert not validator.validate({"x": 1}).ok


class TestCartSchema:
    def test_valid_cart(self):
        result = cart_validator.validate(cart_node(cart_line_node(1, quantity=2)))

        assert result.ok
        assert isinstance(result.record, CartNode)
        assert result.record.lines.nodes[0].quantity == 2

    def test_rejects_relative_checkout_url(self):
        raw = cart_node()
        raw["checkoutUrl"] = "/cart/c/1"

        result = cart_validator.validate(raw)

        assert not result.ok
        assert "checkoutUrl" in result.reason

    def test_rejects_line_without_quantity(self):
        line = cart_line_node(1)
        del line["quantity"]

        assert not cart_validator.validate(cart_node(line)).ok
