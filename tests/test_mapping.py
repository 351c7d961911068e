"""
Tests for mapping verified records into catalog and cart shapes.
"""

import pytest

from storefront.catalog.fallback import find_fallback_product
from storefront.catalog.mapping import (
    map_cart,
    map_product,
    parse_ingredients,
    product_json_ld,
)
from storefront.catalog.schemas import cart_validator, product_validator
from tests.payloads import cart_line_node, cart_node, product_node


def _product(**overrides):
    return map_product(product_validator.validate_strict(product_node(1, **overrides)))


class TestParseIngredients:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ('["Ghee", "Saffron"]', ["Ghee", "Saffron"]),
            ("Ghee, Saffron , Almond Oil", ["Ghee", "Saffron", "Almond Oil"]),
            ("[Ghee, Saffron]", ["Ghee", "Saffron"]),
            ("", []),
            (None, []),
        ],
    )
    def test_formats(self, raw, expected):
        assert parse_ingredients(raw) == expected


class TestMapProduct:
    def test_maps_core_fields(self):
        product = _product()

        assert product.id == "gid://shopify/Product/1"
        assert product.name == "Test Product 1"
        assert product.handle == "test-product-1"
        assert product.price == 450.0
        assert product.category == "skincare"
        assert product.ingredients == ["Ghee", "Saffron"]
        assert product.usage == "Apply a small amount daily."
        assert product.image == "https://cdn.example.com/1.jpg"

    def test_defaults_for_missing_metafields(self):
        product = _product(category=None, badge=None, skinType=None, storage=None)

        assert product.category == "coming-soon"
        assert product.badge == "New"
        assert product.skin_type == "All Skin Types"
        assert product.storage == ""

    def test_default_variant_title_becomes_one_size(self):
        product = _product()

        assert [s.label for s in product.sizes] == ["One Size"]
        assert product.default_variant_id == "gid://shopify/ProductVariant/11"

    def test_variant_without_price_uses_minimum(self):
        variants = {
            "nodes": [
                {"id": "gid://shopify/ProductVariant/1", "title": "50 ml"},
                {
                    "id": "gid://shopify/ProductVariant/2",
                    "title": "100 ml",
                    "price": {"amount": "800.00"},
                },
            ]
        }

        product = _product(variants=variants)

        assert [(s.label, s.price) for s in product.sizes] == [
            ("50 ml", 450.0),
            ("100 ml", 800.0),
        ]

    def test_no_images(self):
        assert _product(images={"nodes": []}).image == ""


class TestMapCart:
    def test_maps_lines(self):
        node = cart_validator.validate_strict(
            cart_node(cart_line_node(1, quantity=2), cart_line_node(2, amount="200.0"))
        )

        cart = map_cart(node)

        assert cart.id == "gid://shopify/Cart/c1"
        assert cart.checkout_url == "https://test-shop.myshopify.com/cart/c/c1"
        assert cart.total_quantity == 3
        assert cart.subtotal == 1100.0
        first = cart.lines[0]
        assert first.variant_id == "gid://shopify/ProductVariant/11"
        assert first.product_title == "Test Product 1"
        assert first.image == "https://cdn.example.com/1.jpg"
        assert first.currency == "INR"

    def test_empty_cart(self):
        cart = map_cart(cart_validator.validate_strict(cart_node()))

        assert cart.is_empty
        assert cart.subtotal == 0.0


class TestProductJsonLd:
    def test_includes_offer_price(self):
        product = find_fallback_product("hair-elixir")

        data = product_json_ld(product, "https://nichema.example/product/hair-elixir")

        assert data["@type"] == "Product"
        assert data["sku"] == "hair-elixir"
        assert data["offers"]["price"] == 800
        assert data["offers"]["priceCurrency"] == "INR"

    def test_omits_price_when_not_announced(self):
        product = find_fallback_product("candle-collection")

        data = product_json_ld(product, "https://nichema.example/p/candles", "USD")

        assert "price" not in data["offers"]
        assert data["offers"]["priceCurrency"] == "USD"
