"""
Storage errors.
"""


class StoreError(Exception):
    """Base class for entry storage failures."""


class StoreReadError(StoreError):
    """The persisted value could not be read."""


class StoreWriteError(StoreError):
    """The persisted value could not be written or removed."""


class CorruptStoreError(StoreError):
    """The persisted value was read but could not be parsed."""


class DuplicateEntryIdError(StoreError):
    """A freshly generated entry id already exists in the collection."""

    def __init__(self, entry_id: str):
        self.entry_id = entry_id
        super().__init__(
            f"Entry id {entry_id} already exists "
            f"(two entries created in the same millisecond)"
        )
