"""
Tests for persisted storefront state.
"""

import pytest

from storefront.datastore import CART_ID_KEY, MemoryStateStore, SqlStateStore


@pytest.fixture
async def sql_store(tmp_path):
    async with SqlStateStore(f"sqlite+aiosqlite:///{tmp_path}/state.db") as store:
        yield store


class TestSqlStateStore:
    async def test_roundtrip_and_overwrite(self, sql_store):
        assert await sql_store.get(CART_ID_KEY) is None

        await sql_store.set(CART_ID_KEY, "gid://shopify/Cart/1")
        await sql_store.set(CART_ID_KEY, "gid://shopify/Cart/2")

        assert await sql_store.get(CART_ID_KEY) == "gid://shopify/Cart/2"

    async def test_delete(self, sql_store):
        await sql_store.set(CART_ID_KEY, "gid://shopify/Cart/1")
        await sql_store.delete(CART_ID_KEY)
        await sql_store.delete(CART_ID_KEY)

        assert await sql_store.get(CART_ID_KEY) is None

    async def test_values_survive_reopen(self, tmp_path):
        url = f"sqlite+aiosqlite:///{tmp_path}/state.db"
        async with SqlStateStore(url) as store:
            await store.set(CART_ID_KEY, "gid://shopify/Cart/1")

        async with SqlStateStore(url) as store:
            assert await store.get(CART_ID_KEY) == "gid://shopify/Cart/1"

    async def test_requires_init(self, tmp_path):
        store = SqlStateStore(f"sqlite+aiosqlite:///{tmp_path}/state.db")

        with pytest.raises(RuntimeError):
            await store.get(CART_ID_KEY)


class TestMemoryStateStore:
    async def test_roundtrip(self):
        store = MemoryStateStore({"checkout_url": "https://shop.example.com/c"})

        await store.set(CART_ID_KEY, "gid://shopify/Cart/1")
        await store.delete("checkout_url")
        await store.delete("never-set")

        assert store.snapshot() == {CART_ID_KEY: "gid://shopify/Cart/1"}
