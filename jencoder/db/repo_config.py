"""Key-value operations on the persisted-configuration store."""

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from jencoder.db.models_config import ConfigEntryEntity


async def get_value(session: AsyncSession, key: str) -> Any | None:
    """Return the JSON value stored under ``key``, or ``None``."""
    entity = await session.get(ConfigEntryEntity, key)
    if entity is None:
        return None
    return entity.value


async def put_value(session: AsyncSession, key: str, value: Any) -> ConfigEntryEntity:
    """Insert or replace the value stored under ``key``."""
    entity = await session.get(ConfigEntryEntity, key)
    if entity is None:
        entity = ConfigEntryEntity(key=key, value=value)
        session.add(entity)
    else:
        entity.value = value
    await session.flush()
    return entity


async def delete_value(session: AsyncSession, key: str) -> bool:
    """Remove ``key``; return whether it existed."""
    entity = await session.get(ConfigEntryEntity, key)
    if entity is None:
        return False
    await session.delete(entity)
    await session.flush()
    return True
