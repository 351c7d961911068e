"""
Product data access: listing, single-product lookup and predictive search.

Network and validation failures are absorbed here: listings degrade to the
fallback catalog, searches to an empty result, and single lookups to the
fallback catalog before reporting "not found".
"""

from datetime import timedelta
from typing import Any

from loguru import logger

from storefront.catalog.fallback import fallback_products, find_fallback_product
from storefront.catalog.mapping import map_product
from storefront.catalog.models import Product
from storefront.catalog.queries import (
    PRODUCT_BY_HANDLE_QUERY,
    PRODUCT_BY_ID_QUERY,
    PRODUCTS_QUERY,
)
from storefront.catalog.schemas import product_validator
from storefront.exceptions import ProductNotFoundError, StorefrontError
from storefront.services.client import GraphQLClient, RequestOutcome
from storefront.settings import Settings, global_settings
from storefront.utils import log_call

GLOBAL_ID_PREFIX = "gid://"
LISTING_PAGE_SIZE = 20
SEARCH_LIMIT = 5
MIN_SEARCH_LENGTH = 2


def _connection_nodes(data: dict[str, Any] | None, root: str) -> list[Any] | None:
    """``data[root].nodes`` if present and list-shaped, else None."""
    connection = (data or {}).get(root)
    if not isinstance(connection, dict):
        return None
    nodes = connection.get("nodes")
    return nodes if isinstance(nodes, list) else None


class ProductCatalog:
    """
    Product queries against the Storefront API.

    Usage:
        catalog = ProductCatalog(client)

        products = await catalog.list_products("skincare")
        product = await catalog.fetch_product("hair-elixir")
        hits = await catalog.search_products("oil")
    """

    def __init__(self, client: GraphQLClient, settings: Settings | None = None):
        settings = settings or global_settings
        self.client = client
        self.product_cache_ttl = timedelta(seconds=settings.product_cache_ttl)
        self.search_cache_ttl = timedelta(seconds=settings.search_cache_ttl)

    @log_call
    async def list_products(self, category: str | None = None) -> list[Product]:
        """
        List products, optionally restricted to one category tag.

        Never raises. Falls back to the static catalog when the store is
        unreachable or every returned record is invalid. A store that answers
        with zero products gets an empty list, not the fallback catalog.
        """
        if category in ("", "all"):
            category = None

        outcome = await self.client.request(
            PRODUCTS_QUERY,
            variables={
                "query": f"tag:{category}" if category else "",
                "first": LISTING_PAGE_SIZE,
            },
            cache_ttl=self.product_cache_ttl,
        )

        raw_nodes = _connection_nodes(outcome.data, "products") if outcome.ok else None
        if raw_nodes is None:
            logger.warning(
                f"Product listing unavailable ({self._describe_failure(outcome)}); "
                "serving fallback catalog"
            )
            return fallback_products(category)

        if not raw_nodes:
            logger.info(f"Store returned no products for category={category!r}")
            return []

        verified = product_validator.filter_valid(raw_nodes)
        products = [map_product(node) for node in verified]
        if not products:
            logger.warning(
                f"All {len(raw_nodes)} products failed validation; "
                "serving fallback catalog"
            )
            return fallback_products(category)

        if len(products) < len(raw_nodes):
            logger.info(f"Kept {len(products)}/{len(raw_nodes)} valid products")
        return products

    @log_call
    async def fetch_product(self, identifier: str) -> Product:
        """
        Fetch one product by global id (``gid://...``) or handle.

        Raises:
            ProductNotFoundError: Neither the store nor the fallback catalog
                could resolve the identifier.
        """
        try:
            return await self._fetch_remote_product(identifier)
        except StorefrontError as e:
            logger.warning(
                f"Remote lookup of {identifier!r} failed "
                f"({type(e).__name__}: {e}); trying fallback catalog"
            )
            product = find_fallback_product(identifier)
            if product is None:
                raise ProductNotFoundError(identifier) from e
            return product

    async def _fetch_remote_product(self, identifier: str) -> Product:
        if identifier.startswith(GLOBAL_ID_PREFIX):
            query, variables = PRODUCT_BY_ID_QUERY, {"id": identifier}
        else:
            query, variables = PRODUCT_BY_HANDLE_QUERY, {"handle": identifier}

        outcome = await self.client.request(
            query, variables=variables, cache_ttl=self.product_cache_ttl
        )
        if not outcome.ok:
            raise StorefrontError(outcome.first_error or "Failed to fetch product")

        node = outcome.data.get("product")
        if node is None:
            raise ProductNotFoundError(identifier)

        return map_product(product_validator.validate_strict(node))

    @log_call
    async def search_products(self, term: str) -> list[Product]:
        """
        Predictive prefix search over titles and product types.

        Terms shorter than two characters return an empty list without a
        request. Failures return an empty list. At most five results.
        """
        term = (term or "").strip()
        if len(term) < MIN_SEARCH_LENGTH:
            return []

        outcome = await self.client.request(
            PRODUCTS_QUERY,
            variables={
                "query": f"title:{term}* OR product_type:{term}*",
                "first": SEARCH_LIMIT,
            },
            cache_ttl=self.search_cache_ttl,
        )

        raw_nodes = _connection_nodes(outcome.data, "products") if outcome.ok else None
        if raw_nodes is None:
            logger.error(
                f"Search for {term!r} failed ({self._describe_failure(outcome)})"
            )
            return []

        verified = product_validator.filter_valid(raw_nodes)
        return [map_product(node) for node in verified[:SEARCH_LIMIT]]

    @staticmethod
    def _describe_failure(outcome: RequestOutcome[Any]) -> str:
        if outcome.ok:
            return "malformed response"
        kind = outcome.error_kind.value if outcome.error_kind else "unknown"
        return f"{kind}: {outcome.first_error}"
