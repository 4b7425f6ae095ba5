"""Blob storage backends."""

from property_planner.services.storage.file_store import FileBlobStorage
from property_planner.services.storage.interface import (
    BlobStorageInterface,
    StorageError,
    StorageUnavailableError,
    StorageWriteError,
)
from property_planner.services.storage.memory import InMemoryBlobStorage

__all__ = [
    "BlobStorageInterface",
    "FileBlobStorage",
    "InMemoryBlobStorage",
    "StorageError",
    "StorageUnavailableError",
    "StorageWriteError",
]
