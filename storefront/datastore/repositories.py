"""
Repository layer - data access for persisted storefront state.
"""

from datetime import datetime

from loguru import logger
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.datastore.models import StateEntryDB


class StateRepository:
    """Key/value state Repository"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, key: str) -> str | None:
        """Return the stored value, or None when the slot is empty"""
        result = await self.session.execute(
            select(StateEntryDB.value).where(StateEntryDB.key == key)
        )
        return result.scalar_one_or_none()

    async def set(self, key: str, value: str) -> None:
        """Overwrite the slot"""
        entry = await self.session.get(StateEntryDB, key)
        if entry is None:
            self.session.add(StateEntryDB(key=key, value=value))
        else:
            entry.value = value
            entry.updated_at = datetime.now()
        await self.session.flush()

    async def delete(self, key: str) -> bool:
        """Clear the slot; returns whether anything was stored"""
        result = await self.session.execute(
            delete(StateEntryDB).where(StateEntryDB.key == key)
        )
        await self.session.flush()
        deleted = result.rowcount or 0
        if deleted:
            logger.debug(f"Cleared state slot '{key}'")
        return deleted > 0
