import os

import httpx
from dotenv import load_dotenv
from pydantic import BaseModel, Field

load_dotenv()


class Settings(BaseModel):
    # Shopify Storefront API
    shopify_store_domain: str = Field(default="", alias="SHOPIFY_STORE_DOMAIN")
    shopify_storefront_token: str = Field(
        default="", alias="SHOPIFY_STOREFRONT_ACCESS_TOKEN"
    )
    shopify_api_version: str = Field(default="2025-01", alias="SHOPIFY_API_VERSION")

    # Request client
    request_timeout: float = Field(default=15.0, alias="REQUEST_TIMEOUT")
    max_retries: int = Field(default=3, alias="MAX_RETRIES")
    cache_max_size: int = Field(default=100, alias="CACHE_MAX_SIZE")

    # Cache TTLs (seconds)
    product_cache_ttl: int = Field(default=300, alias="PRODUCT_CACHE_TTL")
    search_cache_ttl: int = Field(default=60, alias="SEARCH_CACHE_TTL")

    # Persisted storefront state (cart id, checkout url, customer token)
    state_database_url: str = Field(
        default="sqlite+aiosqlite:///./storefront.db", alias="STATE_DATABASE_URL"
    )

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from the process environment."""
        return cls.model_validate(dict(os.environ))

    @property
    def is_configured(self) -> bool:
        """
        A token must be set and the store domain must look like a hostname
        that forms a parseable endpoint URL.
        """
        if "." not in self.shopify_store_domain or not self.shopify_storefront_token:
            return False
        try:
            httpx.URL(self.graphql_endpoint)
        except httpx.InvalidURL:
            return False
        return True

    @property
    def graphql_endpoint(self) -> str:
        domain = self.shopify_store_domain.removeprefix("https://").rstrip("/")
        return f"https://{domain}/api/{self.shopify_api_version}/graphql.json"


global_settings = Settings.from_env()
