"""
Storefront command-line entry point.
Queries the catalog and cart through the resilient data-access layer.
"""

import argparse
import asyncio
import json
import sys
from typing import Any

from loguru import logger

from storefront.catalog import (
    CartService,
    ProductCatalog,
    ProductSize,
)
from storefront.datastore import SqlStateStore
from storefront.exceptions import StorefrontError
from storefront.log_config import setup_logging
from storefront.services import GraphQLClient
from storefront.settings import global_settings


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="storefront",
        description="Query the storefront catalog and cart.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    products = sub.add_parser("products", help="List products.")
    products.add_argument("-c", "--category", default=None)

    product = sub.add_parser("product", help="Fetch one product by id or handle.")
    product.add_argument("identifier")

    search = sub.add_parser("search", help="Predictive product search.")
    search.add_argument("term")

    sub.add_parser("cart", help="Show the current cart.")

    add = sub.add_parser("add", help="Add a product to the cart.")
    add.add_argument("product_id")
    add.add_argument("-q", "--quantity", type=int, default=1)
    add.add_argument("-v", "--variant", default=None, help="Variant id to add.")

    return parser


def _dump(value: Any) -> None:
    if isinstance(value, list):
        payload = [item.model_dump() for item in value]
    elif value is None:
        payload = None
    else:
        payload = value.model_dump()
    print(json.dumps(payload, indent=2, ensure_ascii=False))


async def run(args: argparse.Namespace) -> int:
    async with GraphQLClient() as client, SqlStateStore() as state:
        catalog = ProductCatalog(client)
        carts = CartService(client, catalog, state)

        try:
            if args.command == "products":
                _dump(await catalog.list_products(args.category))
            elif args.command == "product":
                _dump(await catalog.fetch_product(args.identifier))
            elif args.command == "search":
                _dump(await catalog.search_products(args.term))
            elif args.command == "cart":
                _dump(await carts.get_cart())
            elif args.command == "add":
                size = (
                    ProductSize(id=args.variant, label=args.variant, price=0)
                    if args.variant
                    else None
                )
                _dump(await carts.add_to_cart(args.product_id, args.quantity, size))
        except StorefrontError as e:
            logger.error(e.detail)
            return 1

    return 0


def main() -> None:
    setup_logging(global_settings.log_level)
    args = _build_parser().parse_args()
    sys.exit(asyncio.run(run(args)))


if __name__ == "__main__":
    main()
