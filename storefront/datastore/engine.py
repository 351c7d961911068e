"""
Database engine configuration for persisted storefront state.
Uses the SQLAlchemy async engine (SQLite via aiosqlite by default).
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from loguru import logger
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from storefront.datastore.models import Base
from storefront.datastore.repositories import StateRepository
from storefront.settings import global_settings


class SqlStateStore:
    """
    ``StateStore`` backed by a SQL database.

    Usage:
        store = SqlStateStore("sqlite+aiosqlite:///./storefront.db")
        await store.init()
        await store.set("cart_id", cart_id)
        ...
        await store.close()
    """

    def __init__(self, database_url: str | None = None, echo: bool = False):
        self.database_url = database_url or global_settings.state_database_url
        self._echo = echo
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None

    async def init(self) -> None:
        """Create the engine, session factory and tables"""
        if self._engine is not None:
            return

        self._engine = create_async_engine(self.database_url, echo=self._echo)
        self._session_factory = async_sessionmaker(
            bind=self._engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.debug(f"State store initialized at {self.database_url}")

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Transactional session; commits on success, rolls back on error"""
        if self._session_factory is None:
            raise RuntimeError("State store not initialized. Call init() first.")

        async with self._session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def get(self, key: str) -> str | None:
        async with self.session() as session:
            return await StateRepository(session).get(key)

    async def set(self, key: str, value: str) -> None:
        async with self.session() as session:
            await StateRepository(session).set(key, value)

    async def delete(self, key: str) -> None:
        async with self.session() as session:
            await StateRepository(session).delete(key)

    async def close(self) -> None:
        """Dispose of the engine and its connections"""
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
            self._session_factory = None

    async def __aenter__(self) -> "SqlStateStore":
        await self.init()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
