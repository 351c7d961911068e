"""
Shared pytest fixtures: a scripted Storefront endpoint, a controllable clock
and a recording sleep function.
"""

import json
from datetime import datetime, timedelta
from typing import Any

import httpx
import pytest

from storefront.catalog import CartService, ProductCatalog
from storefront.datastore import MemoryStateStore
from storefront.services import CacheManager, GraphQLClient
from storefront.settings import Settings
from tests.payloads import SHOP


class FakeStorefront:
    """
    Scripted GraphQL endpoint for ``httpx.MockTransport``.

    Responses are routed by a marker found in the operation text (usually
    ``"OperationName("``). Queued responses are served in order; the last one
    repeats. A queued exception is raised instead of answering.
    """

    def __init__(self):
        self.routes: dict[str, list[Any]] = {}
        self.requests: list[dict[str, Any]] = []

    def on(self, marker: str, *responses: Any) -> "FakeStorefront":
        self.routes.setdefault(marker, []).extend(responses)
        return self

    def calls(self, marker: str | None = None) -> list[dict[str, Any]]:
        return [
            body for body in self.requests if marker is None or marker in body["query"]
        ]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        self.requests.append(body)

        for marker, responses in self.routes.items():
            if marker in body["query"]:
                item = responses.pop(0) if len(responses) > 1 else responses[0]
                break
        else:
            raise AssertionError(f"Unexpected operation: {body['query'][:120]}")

        if isinstance(item, Exception):
            raise item
        if isinstance(item, httpx.Response):
            return item
        return httpx.Response(200, json=item)


class FakeClock:
    def __init__(self, start: datetime = datetime(2026, 1, 1, 12, 0, 0)):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


class SleepRecorder:
    def __init__(self):
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


@pytest.fixture
def settings() -> Settings:
    return Settings.model_validate(
        {
            "SHOPIFY_STORE_DOMAIN": SHOP,
            "SHOPIFY_STOREFRONT_ACCESS_TOKEN": "public-token",
        }
    )


@pytest.fixture
def storefront() -> FakeStorefront:
    return FakeStorefront()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def sleeper() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture
async def client(settings, storefront, clock, sleeper):
    async with GraphQLClient(
        settings=settings,
        cache=CacheManager(clock=clock),
        transport=httpx.MockTransport(storefront),
        sleep=sleeper,
    ) as client:
        yield client


@pytest.fixture
def state() -> MemoryStateStore:
    return MemoryStateStore()


@pytest.fixture
def catalog(client, settings) -> ProductCatalog:
    return ProductCatalog(client, settings)


@pytest.fixture
def carts(client, catalog, state) -> CartService:
    return CartService(client, catalog, state)
