"""
In-Memory Blob Storage

Dict-backed implementation of BlobStorageInterface. Used by tests and by
callers that do not want anything written to disk.
"""

from typing import Optional

from property_planner.services.storage.interface import (
    BlobStorageInterface,
    StorageUnavailableError,
    StorageWriteError,
)


class InMemoryBlobStorage(BlobStorageInterface):
    """
    Stores blobs in a plain dict.

    `writes` records every value passed to set_item, in order, so callers
    can assert how often and what was written. Setting `fail_reads` or
    `fail_writes` simulates a broken backend.
    """

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._items: dict[str, str] = dict(initial or {})
        self.writes: list[tuple[str, str]] = []
        self.fail_reads = False
        self.fail_writes = False

    async def get_item(self, key: str) -> Optional[str]:
        if self.fail_reads:
            raise StorageUnavailableError(f"Cannot read '{key}'")
        return self._items.get(key)

    async def set_item(self, key: str, value: str) -> None:
        if self.fail_writes:
            raise StorageWriteError(f"Cannot write '{key}'")
        self._items[key] = value
        self.writes.append((key, value))

    async def remove_item(self, key: str) -> None:
        if self.fail_writes:
            raise StorageWriteError(f"Cannot remove '{key}'")
        self._items.pop(key, None)

    def peek(self, key: str) -> Optional[str]:
        """Synchronous read for assertions."""
        return self._items.get(key)
