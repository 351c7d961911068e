"""
Tests for the static fallback catalog.
"""

from storefront.catalog.fallback import (
    FALLBACK_CATALOG,
    fallback_products,
    find_fallback_product,
)


class TestFallbackCatalog:
    def test_contents(self):
        assert [p.id for p in FALLBACK_CATALOG] == [
            "hair-elixir",
            "shatapata-butter",
            "botanical-toner",
            "body-scrubs",
            "candle-collection",
            "pottery-collection",
        ]

    def test_unannounced_prices_are_none(self):
        prices = {p.id: p.price for p in FALLBACK_CATALOG}

        assert prices["candle-collection"] is None
        assert prices["pottery-collection"] is None
        assert prices["shatapata-butter"] == 550

    def test_filter_by_exact_category(self):
        assert [p.id for p in fallback_products("skincare")] == [
            "shatapata-butter",
            "botanical-toner",
            "body-scrubs",
        ]
        assert fallback_products("Skincare") == []
        assert len(fallback_products()) == 6

    def test_returns_copies(self):
        products = fallback_products()
        products[0].name = "Changed"
        products[0].sizes.clear()

        fresh = fallback_products()[0]
        assert fresh.name == "Nichema Hair Elixir"
        assert len(fresh.sizes) == 2

    def test_find_by_id_or_slug(self):
        assert find_fallback_product("body-scrubs").name == "Nichema Body Scrubs"
        assert find_fallback_product("nichema-hair-elixir").id == "hair-elixir"
        assert find_fallback_product("unknown") is None

    def test_found_product_is_a_copy(self):
        product = find_fallback_product("hair-elixir")
        product.price = 1.0

        assert find_fallback_product("hair-elixir").price == 800
