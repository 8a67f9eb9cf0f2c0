"""
Storage module for AnxietyJournal.

Handles the entry collection and the key-value layer it is persisted in.
"""

from anxietyjournal.storage.entries import EntryStore, sort_by_timestamp
from anxietyjournal.storage.errors import (
    CorruptStoreError,
    DuplicateEntryIdError,
    StoreError,
    StoreReadError,
    StoreWriteError,
)
from anxietyjournal.storage.kv import KeyValueStore, SQLiteKeyValueStore

__all__ = [
    "EntryStore",
    "sort_by_timestamp",
    "KeyValueStore",
    "SQLiteKeyValueStore",
    "StoreError",
    "StoreReadError",
    "StoreWriteError",
    "CorruptStoreError",
    "DuplicateEntryIdError",
]
