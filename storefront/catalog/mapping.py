"""
Map verified Storefront records into internal catalog and cart shapes.
"""

import json
from typing import Any

from loguru import logger

from storefront.catalog.models import Cart, CartLine, Product, ProductSize
from storefront.catalog.schemas import CartNode, Metafield, ProductNode

DEFAULT_CATEGORY = "coming-soon"
DEFAULT_VARIANT_TITLE = "Default Title"


def _metafield_text(field: Metafield | None) -> str | None:
    if field is None or not field.value:
        return None
    return field.value


def parse_ingredients(raw: str | None) -> list[str]:
    """
    Parse the ingredients metafield.

    Accepts a JSON list (``["Ghee", "Saffron"]``) or comma-separated text.
    """
    if not raw:
        return []

    if "[" in raw:
        try:
            parsed = json.loads(raw)
        except json.JSONDecodeError:
            logger.debug(f"Ingredients metafield is not valid JSON: {raw[:60]}")
        else:
            if isinstance(parsed, list):
                return [str(item).strip() for item in parsed if str(item).strip()]

    return [part.strip() for part in raw.strip("[]").split(",") if part.strip()]


def map_product(node: ProductNode) -> Product:
    """Map a verified product record to a ``Product``."""
    min_price = node.price_range.min_variant_price.amount

    sizes = []
    if node.variants is not None:
        for variant in node.variants.nodes:
            amount = variant.price.amount if variant.price else min_price
            sizes.append(
                ProductSize(
                    id=variant.id,
                    label=(
                        "One Size"
                        if variant.title == DEFAULT_VARIANT_TITLE
                        else variant.title
                    ),
                    price=float(amount),
                )
            )

    return Product(
        id=node.id,
        name=node.title,
        handle=node.handle,
        category=_metafield_text(node.category) or DEFAULT_CATEGORY,
        price=float(min_price),
        weight=_metafield_text(node.weight),
        volume=_metafield_text(node.volume),
        badge=_metafield_text(node.badge) or "New",
        description=node.description,
        ingredients=parse_ingredients(_metafield_text(node.ingredients)),
        usage=_metafield_text(node.usage) or "",
        storage=_metafield_text(node.storage) or "",
        packaging=_metafield_text(node.packaging) or "",
        skin_type=_metafield_text(node.skin_type) or "All Skin Types",
        image=node.images.nodes[0].url if node.images.nodes else "",
        sizes=sizes,
    )


def map_cart(node: CartNode) -> Cart:
    """Map a verified cart record to a ``Cart``, replacing every line."""
    lines = []
    for line in node.lines.nodes:
        merchandise = line.merchandise
        product = merchandise.product
        images = product.images.nodes if product.images else []
        lines.append(
            CartLine(
                id=line.id,
                quantity=line.quantity,
                variant_id=merchandise.id,
                variant_title=merchandise.title,
                product_id=product.id,
                product_title=product.title,
                handle=product.handle,
                image=images[0].url if images else "",
                price=float(merchandise.price.amount) if merchandise.price else None,
                currency=(
                    merchandise.price.currency_code if merchandise.price else None
                ),
            )
        )

    return Cart(id=node.id, checkout_url=node.checkout_url, lines=lines)


def product_json_ld(
    product: Product, url: str, currency: str = "INR"
) -> dict[str, Any]:
    """schema.org ``Product`` structured data for a product page."""
    offer: dict[str, Any] = {
        "@type": "Offer",
        "url": url,
        "priceCurrency": currency,
        "availability": "https://schema.org/InStock",
        "itemCondition": "https://schema.org/NewCondition",
    }
    if product.price is not None:
        offer["price"] = product.price

    return {
        "@context": "https://schema.org/",
        "@type": "Product",
        "name": product.name,
        "image": product.image,
        "description": product.description,
        "sku": product.id,
        "offers": offer,
    }
