"""Key-value store adapters: JSON documents under namespaced string keys."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Protocol

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from dropset.core.exceptions import StorageFailure
from dropset.models.kv_entry import KeyValueEntry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StorageKeys:
    workouts: str
    active_workout: str


def storage_keys(namespace: str = "dropset_pro") -> StorageKeys:
    return StorageKeys(
        workouts=f"@{namespace}:workouts",
        active_workout=f"@{namespace}:active_workout",
    )


class KeyValueStore(Protocol):
    """Async store contract used by the session manager. Failures raise StorageFailure."""

    async def get(self, key: str) -> Any | None: ...

    async def set(self, key: str, value: Any) -> None: ...

    async def remove(self, key: str) -> None: ...


def _encode(key: str, value: Any) -> str:
    try:
        return json.dumps(value)
    except (TypeError, ValueError) as e:
        logger.warning("Could not serialize value for %s: %s", key, e)
        raise StorageFailure("set", key, str(e)) from e


def _decode(key: str, raw: str | None) -> Any | None:
    if raw is None:
        return None
    try:
        return json.loads(raw)
    except ValueError as e:
        logger.warning("Stored value for %s is not valid JSON: %s", key, e)
        raise StorageFailure("get", key, str(e)) from e


class InMemoryStore:
    """Process-local store; values still round-trip through JSON like the durable one."""

    def __init__(self) -> None:
        self._data: dict[str, str] = {}

    async def get(self, key: str) -> Any | None:
        return _decode(key, self._data.get(key))

    async def set(self, key: str, value: Any) -> None:
        self._data[key] = _encode(key, value)

    async def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._data)


class SqlKeyValueStore:
    """Durable store over the kv_entries table (SQLite via aiosqlite by default)."""

    def __init__(self, session_maker: async_sessionmaker[AsyncSession]) -> None:
        self._session_maker = session_maker

    async def get(self, key: str) -> Any | None:
        try:
            async with self._session_maker() as session:
                result = await session.execute(
                    select(KeyValueEntry.value).where(KeyValueEntry.key == key)
                )
                raw = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.warning("GET %s failed: %s", key, e)
            raise StorageFailure("get", key, str(e)) from e
        return _decode(key, raw)

    async def set(self, key: str, value: Any) -> None:
        raw = _encode(key, value)
        try:
            async with self._session_maker() as session:
                await session.merge(KeyValueEntry(key=key, value=raw))
                await session.commit()
        except SQLAlchemyError as e:
            logger.warning("SET %s failed: %s", key, e)
            raise StorageFailure("set", key, str(e)) from e

    async def remove(self, key: str) -> None:
        try:
            async with self._session_maker() as session:
                entry = await session.get(KeyValueEntry, key)
                if entry is not None:
                    await session.delete(entry)
                    await session.commit()
        except SQLAlchemyError as e:
            logger.warning("REMOVE %s failed: %s", key, e)
            raise StorageFailure("remove", key, str(e)) from e
