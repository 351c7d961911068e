"""
Service layer exceptions and error classification.

Every failure seen by the request client or the facade maps to one
``ErrorKind``; each kind has exactly one recovery action.
"""

from enum import Enum

import httpx

from storefront.exceptions import (
    AuthenticationError,
    CartError,
    RecordValidationError,
)


class ErrorKind(str, Enum):
    """Closed set of error kinds."""

    RATE_LIMIT = "rate_limit"  # backoff, then retry
    TRANSIENT = "transient"  # retry immediately
    VALIDATION = "validation"  # drop record / fall back
    BUSINESS = "business"  # raise to caller, never retried
    CONFIG = "config"  # fail the call, never retried


RETRYABLE_KINDS = frozenset({ErrorKind.RATE_LIMIT, ErrorKind.TRANSIENT})


class ServiceError(Exception):
    """Base exception for service layer errors."""

    kind: ErrorKind = ErrorKind.TRANSIENT

    def __init__(self, message: str, service_id: str | None = None):
        self.service_id = service_id
        super().__init__(message)


class ConfigurationError(ServiceError):
    """Store domain or access token missing; the client runs mocked."""

    kind = ErrorKind.CONFIG


class RequestTimeoutError(ServiceError):
    """Request timed out."""

    def __init__(self, service_id: str, timeout: float):
        self.timeout = timeout
        super().__init__(
            f"Request to service '{service_id}' timed out after {timeout}s",
            service_id=service_id,
        )


class RateLimitError(ServiceError):
    """Rate limit exceeded (HTTP 429 or a THROTTLED GraphQL error)."""

    kind = ErrorKind.RATE_LIMIT

    def __init__(self, service_id: str, retry_after: float | None = None):
        self.retry_after = retry_after
        msg = f"Throttled: rate limit exceeded for service '{service_id}'"
        if retry_after:
            msg += f", retry after {retry_after}s"
        super().__init__(msg, service_id=service_id)


class RemoteGraphQLError(ServiceError):
    """The endpoint answered with a non-empty ``errors`` array."""

    kind = ErrorKind.BUSINESS

    def __init__(self, errors: list[dict], service_id: str | None = None):
        self.errors = errors
        first = errors[0].get("message") if errors else None
        super().__init__(first or "Unknown GraphQL error", service_id=service_id)


# Raw error substrings mapped to messages safe for display
FRIENDLY_ERRORS: dict[str, str] = {
    "Throttled": "We are experiencing high traffic. Please wait a moment.",
    "Internal Server Error": "Something went wrong on our end. We are fixing it.",
    "Network request failed": "Please check your internet connection.",
    "timed out": "The store is taking too long to respond. Please try again.",
}


def friendly_message(raw: str | None) -> str:
    """Map a raw error message to a user-facing one; unknown text passes through."""
    if not raw:
        return "Unknown Error"
    for needle, friendly in FRIENDLY_ERRORS.items():
        if needle in raw:
            return friendly
    return raw


def classify_error(error: BaseException) -> ErrorKind:
    """Return the ``ErrorKind`` for an exception raised below the facade."""
    if isinstance(error, ServiceError):
        return error.kind
    if isinstance(error, httpx.HTTPStatusError):
        if error.response.status_code == 429:
            return ErrorKind.RATE_LIMIT
        return ErrorKind.TRANSIENT
    if isinstance(error, httpx.HTTPError):
        return ErrorKind.TRANSIENT
    if isinstance(error, RecordValidationError):
        return ErrorKind.VALIDATION
    if isinstance(error, (CartError, AuthenticationError)):
        return ErrorKind.BUSINESS
    return ErrorKind.TRANSIENT
