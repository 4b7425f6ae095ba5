"""
Abstract Blob Storage Interface

DESIGN DECISION: Persistence talks to an async key/value store of strings.
This allows us to:
1. Use an in-memory store for tests
2. Use a file-backed store for the desktop/CLI application
3. Plug in any platform storage later without touching the gateway

The interface is intentionally tiny - one document lives under one key.
"""

from abc import ABC, abstractmethod
from typing import Optional


class BlobStorageInterface(ABC):
    """
    Abstract interface for durable string storage.

    Implementations raise StorageError subclasses for backend failures and
    never for a missing key.
    """

    @abstractmethod
    async def get_item(self, key: str) -> Optional[str]:
        """
        Read the blob stored under `key`.

        Returns:
            The stored text, or None if nothing is stored

        Raises:
            StorageUnavailableError: If the backend cannot be read
        """
        pass

    @abstractmethod
    async def set_item(self, key: str, value: str) -> None:
        """
        Store `value` under `key`, replacing any previous blob.

        Raises:
            StorageWriteError: If the write fails
        """
        pass

    @abstractmethod
    async def remove_item(self, key: str) -> None:
        """
        Delete the blob under `key`. Removing a missing key is not an error.

        Raises:
            StorageWriteError: If the delete fails
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class StorageUnavailableError(StorageError):
    """Storage backend could not be reached or read."""
    pass


class StorageWriteError(StorageError):
    """A write or delete did not complete."""
    pass
