"""
Data-access facade for catalog, cart and customer operations.
"""

from storefront.catalog.cart import CartService
from storefront.catalog.customer import AccessToken, Customer, CustomerAccounts
from storefront.catalog.fallback import fallback_products, find_fallback_product
from storefront.catalog.mapping import map_cart, map_product, product_json_ld
from storefront.catalog.models import Cart, CartLine, Product, ProductSize
from storefront.catalog.products import ProductCatalog
from storefront.catalog.schemas import (
    CartNode,
    ProductNode,
    Rejected,
    SchemaValidator,
    Verified,
)

__all__ = [
    # Facade
    "ProductCatalog",
    "CartService",
    "CustomerAccounts",
    # Internal shapes
    "Product",
    "ProductSize",
    "Cart",
    "CartLine",
    "Customer",
    "AccessToken",
    # Validation
    "SchemaValidator",
    "Verified",
    "Rejected",
    "ProductNode",
    "CartNode",
    # Mapping and fallback
    "map_product",
    "map_cart",
    "product_json_ld",
    "fallback_products",
    "find_fallback_product",
]
