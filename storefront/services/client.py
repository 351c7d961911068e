"""
GraphQLClient - Async Storefront API client with resilience patterns.

Combines:
- CacheManager for time-bounded response caching
- Bounded retries with exponential backoff for throttled requests
- Normalized, user-displayable error outcomes (the client never raises)
"""

import asyncio
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any, Awaitable, Callable, Generic, TypeVar

import httpx
from loguru import logger

from storefront.services.cache import CacheManager
from storefront.services.errors import (
    RETRYABLE_KINDS,
    ConfigurationError,
    ErrorKind,
    RateLimitError,
    RemoteGraphQLError,
    RequestTimeoutError,
    ServiceError,
    classify_error,
    friendly_message,
)
from storefront.settings import Settings, global_settings

T = TypeVar("T")

Sleep = Callable[[float], Awaitable[Any]]


@dataclass
class ErrorDescriptor:
    """A single error, with a message safe to show to a shopper."""

    message: str
    code: str | None = None


@dataclass
class RequestOutcome(Generic[T]):
    """Result of one logical request: data, or errors, never both."""

    data: T | None = None
    errors: list[ErrorDescriptor] = field(default_factory=list)
    error_kind: ErrorKind | None = None
    from_cache: bool = False
    attempts: int = 0

    @property
    def ok(self) -> bool:
        return not self.errors and self.data is not None

    @property
    def first_error(self) -> str | None:
        return self.errors[0].message if self.errors else None

    @classmethod
    def failure(
        cls,
        message: str,
        kind: ErrorKind,
        attempts: int = 0,
        code: str | None = None,
    ) -> "RequestOutcome[Any]":
        return cls(
            errors=[ErrorDescriptor(message=message, code=code)],
            error_kind=kind,
            attempts=attempts,
        )


def _as_timedelta(value: timedelta | float | int) -> timedelta:
    if isinstance(value, timedelta):
        return value
    return timedelta(seconds=value)


def _retry_after(header: str | None) -> float | None:
    try:
        return float(header) if header else None
    except ValueError:
        return None


def _is_throttled(error: dict[str, Any]) -> bool:
    code = (error.get("extensions") or {}).get("code", "")
    message = error.get("message") or ""
    return code == "THROTTLED" or "Throttled" in message


class GraphQLClient:
    """
    Storefront GraphQL client with caching and retry/backoff.

    A client built from settings without a usable store domain or token runs
    "mocked": it never touches the network and every call returns a failed
    outcome of kind ``CONFIG``.

    Usage:
        async with GraphQLClient() as client:
            outcome = await client.request(
                PRODUCTS_QUERY,
                variables={"query": "tag:skincare"},
                cache_ttl=timedelta(minutes=5),
            )
            if outcome.ok:
                nodes = outcome.data["products"]["nodes"]

        # Mutations are never cached
        await client.request(CART_CREATE_MUTATION, cache_ttl=0)
    """

    SERVICE_ID = "shopify_storefront"

    def __init__(
        self,
        settings: Settings | None = None,
        cache: CacheManager | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        sleep: Sleep = asyncio.sleep,
        backoff_base: float = 1.0,
        debug: bool = False,
    ):
        self._settings = settings or global_settings
        self._default_cache_ttl = timedelta(seconds=self._settings.product_cache_ttl)
        self._default_max_retries = self._settings.max_retries
        self._timeout = self._settings.request_timeout
        self._transport = transport
        self._sleep = sleep
        self._backoff_base = backoff_base
        self._debug = debug

        self._cache = cache or CacheManager(
            prefix="gql_",
            max_size=self._settings.cache_max_size,
            debug=debug,
        )

        # HTTP client (lazy initialization)
        self._http_client: httpx.AsyncClient | None = None

        if self.is_mocked:
            logger.warning(
                "Missing Shopify configuration (SHOPIFY_STORE_DOMAIN / "
                "SHOPIFY_STOREFRONT_ACCESS_TOKEN); storefront client is mocked"
            )

    @property
    def is_mocked(self) -> bool:
        return not self._settings.is_configured

    @property
    def cache(self) -> CacheManager:
        return self._cache

    async def _get_http_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                timeout=httpx.Timeout(self._timeout),
                transport=self._transport,
                headers={
                    "X-Shopify-Storefront-Access-Token": (
                        self._settings.shopify_storefront_token
                    ),
                    "Content-Type": "application/json",
                    "Accept": "application/json",
                },
            )
        return self._http_client

    async def request(
        self,
        operation: str,
        variables: dict[str, Any] | None = None,
        cache_ttl: timedelta | float | None = None,
        max_retries: int | None = None,
    ) -> RequestOutcome[dict[str, Any]]:
        """
        Resolve a GraphQL operation from cache or the network.

        Args:
            operation: GraphQL query or mutation text
            variables: Operation variables
            cache_ttl: How long a cached response stays usable; 0 disables
                caching (required for mutations). Seconds or timedelta.
            max_retries: Additional attempts after the first one

        Returns:
            RequestOutcome with the response ``data`` or normalized errors.
            Exhausting the retry budget never raises.
        """
        variables = variables or {}
        ttl = _as_timedelta(
            self._default_cache_ttl if cache_ttl is None else cache_ttl
        )
        retries = self._default_max_retries if max_retries is None else max_retries

        cache_key = self._cache.generate_key(operation, variables)
        cached = await self._cache.get(cache_key, ttl)
        if cached is not None:
            if self._debug:
                logger.debug(f"[GraphQLClient] Cache hit: {operation.strip()[:40]}...")
            return RequestOutcome(data=cached, from_cache=True)

        attempt = 0
        while True:
            try:
                data = await self._execute_request(operation, variables)
            except RemoteGraphQLError as e:
                logger.warning(f"[GraphQLClient] Remote errors: {e.errors}")
                return RequestOutcome(
                    errors=[
                        ErrorDescriptor(
                            message=friendly_message(err.get("message")),
                            code=(err.get("extensions") or {}).get("code"),
                        )
                        for err in e.errors
                    ],
                    error_kind=e.kind,
                    attempts=attempt + 1,
                )
            except ServiceError as e:
                kind = classify_error(e)
                if kind not in RETRYABLE_KINDS:
                    logger.error(f"[GraphQLClient] Request failed ({kind.value}): {e}")
                    return RequestOutcome.failure(
                        friendly_message(str(e)), kind, attempts=attempt + 1
                    )

                attempt += 1
                if attempt > retries:
                    logger.error(
                        f"[GraphQLClient] Request failed after {attempt} attempts: {e}"
                    )
                    return RequestOutcome.failure(
                        friendly_message(str(e)), kind, attempts=attempt
                    )

                if kind is ErrorKind.RATE_LIMIT:
                    delay = self._backoff_base * 2**attempt
                    logger.warning(
                        f"[GraphQLClient] Throttled. Retrying in {delay}s "
                        f"(retry {attempt}/{retries})"
                    )
                    await self._sleep(delay)
                else:
                    logger.warning(
                        f"[GraphQLClient] {e}. Retrying (retry {attempt}/{retries})"
                    )
                continue

            await self._cache.set(cache_key, data, ttl)
            return RequestOutcome(data=data, attempts=attempt + 1)

    async def _execute_request(
        self, operation: str, variables: dict[str, Any]
    ) -> dict[str, Any]:
        """Execute one POST and return the ``data`` member of the response."""
        if self.is_mocked:
            raise ConfigurationError(
                "Storefront client could not be initialized (check .env)",
                service_id=self.SERVICE_ID,
            )

        client = await self._get_http_client()

        try:
            response = await client.post(
                self._settings.graphql_endpoint,
                json={"query": operation, "variables": variables},
            )
            if response.status_code == 429:
                raise RateLimitError(
                    self.SERVICE_ID, _retry_after(response.headers.get("Retry-After"))
                )
            response.raise_for_status()
            body = response.json()

        except httpx.TimeoutException as e:
            raise RequestTimeoutError(self.SERVICE_ID, self._timeout) from e

        except httpx.HTTPStatusError as e:
            raise ServiceError(
                f"HTTP {e.response.status_code}: {e.response.text[:200]}",
                service_id=self.SERVICE_ID,
            ) from e

        except httpx.RequestError as e:
            raise ServiceError(
                str(e) or "Network request failed", service_id=self.SERVICE_ID
            ) from e

        except ValueError as e:
            raise ServiceError(
                f"Invalid JSON response: {e}", service_id=self.SERVICE_ID
            ) from e

        if not isinstance(body, dict):
            raise ServiceError("Malformed GraphQL response", service_id=self.SERVICE_ID)

        errors = body.get("errors")
        if errors:
            if any(_is_throttled(err) for err in errors):
                raise RateLimitError(self.SERVICE_ID)
            raise RemoteGraphQLError(errors, service_id=self.SERVICE_ID)

        data = body.get("data")
        if not isinstance(data, dict):
            raise ServiceError(
                "GraphQL response missing 'data'", service_id=self.SERVICE_ID
            )
        return data

    async def close(self) -> None:
        """Close the HTTP client and release pooled connections."""
        if self._http_client:
            await self._http_client.aclose()
            self._http_client = None
        logger.debug("GraphQLClient closed")

    async def __aenter__(self) -> "GraphQLClient":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close()

    def get_health_status(self) -> dict[str, Any]:
        """Cache statistics and configuration state."""
        return {
            "service_id": self.SERVICE_ID,
            "mocked": self.is_mocked,
            "cache": self._cache.get_stats().to_dict(),
        }

    async def clear_cache(self) -> int:
        """Drop every cached response."""
        return await self._cache.clear()
