"""Resilient data-access layer for a Shopify-backed storefront."""

__version__ = "0.1.0"
