"""
File-Backed Blob Storage

Implementation of BlobStorageInterface storing each key as one file in a
data directory.

DESIGN DECISION: Writes are atomic, reads are retried.
- set_item writes a temporary file and then os.replace()s it over the
  target, so a crash mid-write leaves the previous document intact.
- Reads retry transient OSErrors with exponential backoff (tenacity).
  Writes are not retried; the next state change produces a new write.
- Blocking file I/O runs in a worker thread (asyncio.to_thread) so the
  event loop driving the store never blocks on disk.
"""

import asyncio
import os
import re
from pathlib import Path
from typing import Optional, Union

from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from property_planner.config import get_settings
from property_planner.observability import get_logger
from property_planner.services.storage.interface import (
    BlobStorageInterface,
    StorageUnavailableError,
    StorageWriteError,
)

logger = get_logger(__name__)

_UNSAFE_KEY_CHARS = re.compile(r"[^A-Za-z0-9_.\-]")


class FileBlobStorage(BlobStorageInterface):
    """
    Stores each key as `<data_dir>/<key>.json`.

    Args:
        data_dir: Directory for blobs. Defaults to PersistenceSettings.data_dir.
        read_attempts: Attempts for transient read failures.
        retry_wait_max: Upper bound of the backoff between read attempts, seconds.
    """

    def __init__(
        self,
        data_dir: Optional[Union[str, Path]] = None,
        read_attempts: Optional[int] = None,
        retry_wait_max: float = 2.0,
    ):
        settings = get_settings().persistence
        self._data_dir = Path(data_dir if data_dir is not None else settings.data_dir)
        self._read_attempts = read_attempts or settings.read_attempts
        self._retry_wait_max = retry_wait_max

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    def path_for(self, key: str) -> Path:
        """File path holding `key`. Unsafe characters become underscores."""
        return self._data_dir / f"{_UNSAFE_KEY_CHARS.sub('_', key)}.json"

    # -------------------------
    # BlobStorageInterface
    # -------------------------

    async def get_item(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self._read_attempts),
                wait=wait_exponential(multiplier=0.1, max=self._retry_wait_max),
                retry=retry_if_exception_type(OSError),
                reraise=True,
            ):
                with attempt:
                    return await asyncio.to_thread(self._read, path)
        except OSError as e:
            logger.error("blob_read_failed", key=key, path=str(path), error=str(e))
            raise StorageUnavailableError(f"Failed to read '{key}': {e}") from e

    async def set_item(self, key: str, value: str) -> None:
        path = self.path_for(key)
        try:
            await asyncio.to_thread(self._write_atomic, path, value)
        except OSError as e:
            logger.error("blob_write_failed", key=key, path=str(path), error=str(e))
            raise StorageWriteError(f"Failed to write '{key}': {e}") from e
        logger.debug("blob_written", key=key, size=len(value))

    async def remove_item(self, key: str) -> None:
        path = self.path_for(key)
        try:
            await asyncio.to_thread(self._remove, path)
        except OSError as e:
            logger.error("blob_remove_failed", key=key, path=str(path), error=str(e))
            raise StorageWriteError(f"Failed to remove '{key}': {e}") from e

    # -------------------------
    # Blocking helpers (run in a worker thread)
    # -------------------------

    @staticmethod
    def _read(path: Path) -> Optional[str]:
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None

    @staticmethod
    def _write_atomic(path: Path, value: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = path.with_name(f"{path.name}.tmp")
        with open(tmp_path, "w", encoding="utf-8") as f:
            f.write(value)
        os.replace(tmp_path, path)

    @staticmethod
    def _remove(path: Path) -> None:
        try:
            path.unlink()
        except FileNotFoundError:
            pass
