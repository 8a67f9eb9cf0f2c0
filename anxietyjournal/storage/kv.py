"""
Asynchronous key-value persistence.

String keys, string values, one row per key in SQLite.
"""

import logging
from typing import Optional, Protocol

from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError

from anxietyjournal.core.config import Config
from anxietyjournal.core.db import get_engine, get_sessionmaker, init_db, session_scope
from anxietyjournal.core.models import KeyValue
from anxietyjournal.storage.errors import StoreReadError, StoreWriteError

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    """Interface for the async key-value layer behind the entry store."""

    async def initialize(self) -> None:
        ...

    async def get_item(self, key: str) -> Optional[str]:
        """Return the value for key, or None if absent."""
        ...

    async def set_item(self, key: str, value: str) -> None:
        """Insert or overwrite the value for key."""
        ...

    async def remove_item(self, key: str) -> None:
        """Remove key. Removing an absent key is not an error."""
        ...

    async def close(self) -> None:
        ...


class SQLiteKeyValueStore:
    """
    SQLite-backed key-value store.

    Implements KeyValueStore. Backend failures surface as
    StoreReadError / StoreWriteError chained to the original exception.
    """

    def __init__(self, config: Config):
        self.config = config
        self._engine = None
        self._sessions = None

    async def initialize(self) -> None:
        """Create engine and schema. Safe to call more than once."""
        if self._engine is not None:
            return

        engine = None
        try:
            engine = get_engine(self.config)
            await init_db(engine)
        except (SQLAlchemyError, OSError) as e:
            if engine is not None:
                await engine.dispose()
            logger.error(f"Failed to initialize database {self.config.database_path}: {e}")
            raise StoreWriteError(f"Cannot initialize storage: {e}") from e

        self._engine = engine
        self._sessions = get_sessionmaker(engine)
        logger.debug(f"Key-value store ready at {self.config.database_path}")

    async def get_item(self, key: str) -> Optional[str]:
        await self.initialize()
        try:
            async with session_scope(self._sessions) as session:
                row = await session.get(KeyValue, key)
                return row.value if row is not None else None
        except SQLAlchemyError as e:
            raise StoreReadError(f"Cannot read key {key}: {e}") from e

    async def set_item(self, key: str, value: str) -> None:
        await self.initialize()
        try:
            async with session_scope(self._sessions) as session:
                await session.merge(KeyValue(key=key, value=value))
        except SQLAlchemyError as e:
            raise StoreWriteError(f"Cannot write key {key}: {e}") from e

    async def remove_item(self, key: str) -> None:
        await self.initialize()
        try:
            async with session_scope(self._sessions) as session:
                await session.execute(delete(KeyValue).where(KeyValue.key == key))
        except SQLAlchemyError as e:
            raise StoreWriteError(f"Cannot remove key {key}: {e}") from e

    async def close(self) -> None:
        """Dispose of the engine and its connections."""
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
            self._sessions = None
