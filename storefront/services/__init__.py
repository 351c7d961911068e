"""
Service layer infrastructure - resilience patterns for Storefront API calls.

Provides:
- CacheManager: In-memory response cache with TTL and injectable clock
- GraphQLClient: Request client combining cache, retry/backoff and error normalization
- ErrorKind / classify_error: Closed error taxonomy with one recovery per kind
"""

from storefront.services.errors import (
    ServiceError,
    ConfigurationError,
    RateLimitError,
    RemoteGraphQLError,
    RequestTimeoutError,
    ErrorKind,
    classify_error,
    friendly_message,
)
from storefront.services.cache import CacheManager, CacheEntry, CacheStats
from storefront.services.client import (
    GraphQLClient,
    RequestOutcome,
    ErrorDescriptor,
)

__all__ = [
    # Errors
    "ServiceError",
    "ConfigurationError",
    "RateLimitError",
    "RemoteGraphQLError",
    "RequestTimeoutError",
    "ErrorKind",
    "classify_error",
    "friendly_message",
    # Cache
    "CacheManager",
    "CacheEntry",
    "CacheStats",
    # Client
    "GraphQLClient",
    "RequestOutcome",
    "ErrorDescriptor",
]
