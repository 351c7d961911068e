"""
Storefront state slots shared across sessions.

One untyped string value per key; last writer wins, no versioning.
"""

from typing import Protocol

CART_ID_KEY = "cart_id"
CHECKOUT_URL_KEY = "checkout_url"
CUSTOMER_TOKEN_KEY = "customer_token"


class StateStore(Protocol):
    async def get(self, key: str) -> str | None: ...

    async def set(self, key: str, value: str) -> None: ...

    async def delete(self, key: str) -> None: ...


class MemoryStateStore:
    """Process-lifetime state store."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._values: dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> str | None:
        return self._values.get(key)

    async def set(self, key: str, value: str) -> None:
        self._values[key] = value

    async def delete(self, key: str) -> None:
        self._values.pop(key, None)

    def snapshot(self) -> dict[str, str]:
        return dict(self._values)
