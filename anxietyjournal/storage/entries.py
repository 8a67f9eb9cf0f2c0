"""
Entry store.

Owns the anxiety entry collection. The whole collection is serialized as
one JSON value under a fixed key and every operation is a full
read-modify-write of that value.

Stored layout (version 1):
    {"version": 1, "entries": [{"id", "level", "category", "notes", "timestamp"}, ...]}

A bare JSON array of entries (the legacy layout) is still accepted on read.
"""

import asyncio
import inspect
import json
import logging
from typing import Awaitable, Callable, Iterable, List, Optional, Union

from anxietyjournal.core.config import Config
from anxietyjournal.core.models import AnxietyEntry, NewEntry
from anxietyjournal.core.utils import now_ms
from anxietyjournal.storage.errors import (
    CorruptStoreError,
    DuplicateEntryIdError,
    StoreError,
)
from anxietyjournal.storage.kv import KeyValueStore, SQLiteKeyValueStore

logger = logging.getLogger(__name__)

FORMAT_VERSION = 1

ChangeListener = Callable[[], Union[None, Awaitable[None]]]


def serialize_entries(entries: Iterable[AnxietyEntry], legacy: bool = False) -> str:
    """Serialize a collection for storage."""
    records = [entry.to_dict() for entry in entries]
    if legacy:
        return json.dumps(records)
    return json.dumps({"version": FORMAT_VERSION, "entries": records})


def deserialize_entries(raw: str) -> List[AnxietyEntry]:
    """
    Parse a stored collection.

    Raises:
        CorruptStoreError: if the value is not valid JSON, has an unknown
            version, or contains malformed or duplicate entries
    """
    try:
        data = json.loads(raw)
    except ValueError as e:
        raise CorruptStoreError(f"Stored entries are not valid JSON: {e}") from e

    if isinstance(data, list):
        records = data
    elif isinstance(data, dict):
        version = data.get("version")
        if version != FORMAT_VERSION:
            raise CorruptStoreError(f"Unsupported entries format version: {version!r}")
        records = data.get("entries")
        if not isinstance(records, list):
            raise CorruptStoreError("Stored envelope has no entries list")
    else:
        raise CorruptStoreError(f"Unexpected stored value type: {type(data).__name__}")

    entries = []
    seen_ids = set()
    for index, record in enumerate(records):
        try:
            entry = AnxietyEntry.from_dict(record)
        except ValueError as e:
            raise CorruptStoreError(f"Malformed entry at position {index}: {e}") from e

        if entry.id in seen_ids:
            raise CorruptStoreError(f"Duplicate entry id in storage: {entry.id}")
        seen_ids.add(entry.id)
        entries.append(entry)

    return entries


def _check_level(level) -> None:
    # Range is not checked, only what the stored form can read back
    if isinstance(level, bool) or not isinstance(level, (int, float)):
        raise TypeError(f"Entry level must be a number, got {level!r}")


def sort_by_timestamp(
    entries: Iterable[AnxietyEntry], newest_first: bool = True
) -> List[AnxietyEntry]:
    """Return entries ordered by timestamp. The input is not modified."""
    return sorted(entries, key=lambda entry: entry.timestamp, reverse=newest_first)


class EntryStore:
    """
    Durable create / list / delete / clear access to the entry collection.

    Mutations are serialized through a single lock per store, so concurrent
    save/delete calls in one process never lose each other's changes.
    Writers in other processes are still last-writer-wins.

    Usage:
        async with EntryStore(config) as store:
            entry = await store.save(NewEntry(level=4, category="Work"))
            entries = await store.list_all()
    """

    def __init__(
        self,
        config: Config,
        kv: Optional[KeyValueStore] = None,
        clock: Callable[[], int] = now_ms,
    ):
        self.config = config
        self.key = config.storage_key
        self.kv = kv if kv is not None else SQLiteKeyValueStore(config)
        self.clock = clock
        self._write_lock = asyncio.Lock()
        self._listeners: List[ChangeListener] = []

    async def __aenter__(self) -> "EntryStore":
        await self.open()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def open(self) -> None:
        """Prepare the backing storage."""
        await self.kv.initialize()

    async def close(self) -> None:
        await self.kv.close()

    # Reads

    async def load(self) -> List[AnxietyEntry]:
        """
        Strict read of the collection in stored order.

        Raises:
            StoreReadError: if the backend read fails
            CorruptStoreError: if the stored value cannot be parsed
        """
        raw = await self.kv.get_item(self.key)
        if raw is None:
            return []
        return deserialize_entries(raw)

    async def list_all(self) -> List[AnxietyEntry]:
        """
        All entries in stored order (newest first as written).

        Fails closed: read or parse failures are logged and an empty
        list is returned. Use load() to tell failure apart from no entries.
        """
        try:
            return await self.load()
        except Exception as e:
            logger.error(f"Error getting anxiety entries: {e}")
            return []

    # Mutations

    async def save(self, new_entry: NewEntry) -> AnxietyEntry:
        """
        Create an entry, prepend it to the collection and persist.

        The id is the creation time in milliseconds.

        Raises:
            DuplicateEntryIdError: if an entry was already created in the
                same millisecond
            TypeError: if the level is not a number
            StoreError: on any read, parse or write failure
        """
        _check_level(new_entry.level)

        async with self._write_lock:
            try:
                entries = await self.load()

                timestamp = self.clock()
                entry = AnxietyEntry(
                    id=str(timestamp),
                    level=new_entry.level,
                    category=new_entry.category,
                    notes=new_entry.notes,
                    timestamp=timestamp,
                )

                if any(existing.id == entry.id for existing in entries):
                    raise DuplicateEntryIdError(entry.id)

                await self._write([entry, *entries])
            except StoreError as e:
                logger.error(f"Error saving anxiety entry: {e}")
                raise

        logger.info(f"Saved entry {entry.id}: level={entry.level} category={entry.category!r}")
        await self._notify()
        return entry

    async def delete_by_id(self, entry_id: str) -> None:
        """
        Remove the entry with the given id and persist.

        A missing id is not an error; the collection is rewritten unchanged.
        """
        async with self._write_lock:
            try:
                entries = await self.load()
                remaining = [entry for entry in entries if entry.id != entry_id]
                await self._write(remaining)
            except StoreError as e:
                logger.error(f"Error deleting anxiety entry {entry_id}: {e}")
                raise

        if len(remaining) < len(entries):
            logger.info(f"Deleted entry {entry_id}")
        else:
            logger.info(f"Entry {entry_id} not found, nothing deleted")
        await self._notify()

    async def clear_all(self) -> None:
        """Remove the persisted collection entirely."""
        async with self._write_lock:
            try:
                await self.kv.remove_item(self.key)
            except StoreError as e:
                logger.error(f"Error clearing anxiety entries: {e}")
                raise

        logger.info("Cleared all entries")
        await self._notify()

    async def _write(self, entries: List[AnxietyEntry]) -> None:
        payload = serialize_entries(entries, legacy=self.config.legacy_format)
        await self.kv.set_item(self.key, payload)

    # Change notification

    def subscribe(self, listener: ChangeListener) -> Callable[[], None]:
        """
        Register a callback run after every successful mutation.

        Returns a function that removes the callback.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                result = listener()
                if inspect.isawaitable(result):
                    await result
            except Exception:
                logger.exception(f"Entry change listener {listener!r} failed")

