"""
Disk cache backend.

Stores each entry as one file named by the SHA-256 digest of its key.
"""

import asyncio
import hashlib
import os
import tempfile
from pathlib import Path

from loguru import logger

from .base import CacheService

ENTRY_SUFFIX = ".bin"


class DiskCacheService(CacheService):
    """Persists image bytes in a directory, one file per key."""

    def __init__(self, cache_dir: Path | str):
        """
        Initialize the disk cache.

        Args:
            cache_dir: Directory to store cached bytes in
        """
        self.cache_dir = Path(cache_dir)

        # Ensure cache directory exists
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        logger.debug("DiskCacheService initialized: dir={}", self.cache_dir)

    def _hash_key(self, key: str) -> str:
        """Generate a file-system safe name from a cache key."""
        return hashlib.sha256(key.encode()).hexdigest()

    def path_for(self, key: str) -> Path:
        """Return the file that holds (or would hold) the entry for ``key``."""
        return self.cache_dir / f"{self._hash_key(key)}{ENTRY_SUFFIX}"

    async def load(self, key: str) -> bytes | None:
        return await asyncio.to_thread(self._read, self.path_for(key))

    async def save(self, key: str, data: bytes) -> None:
        path = self.path_for(key)
        await asyncio.to_thread(self._write, path, data)
        logger.debug("Saved {} bytes to {}", len(data), path)

    def _read(self, path: Path) -> bytes | None:
        try:
            return path.read_bytes()
        except FileNotFoundError:
            return None

    def _write(self, path: Path, data: bytes) -> None:
        # Readers only ever see a complete file.
        fd, tmp_name = tempfile.mkstemp(dir=self.cache_dir, suffix=".tmp")
        try:
            with os.fdopen(fd, "wb") as handle:
                handle.write(data)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def count(self) -> int:
        """Return the number of cached entries."""
        return sum(1 for _ in self.cache_dir.glob(f"*{ENTRY_SUFFIX}"))

    def clear(self) -> int:
        """
        Delete every cached entry.

        Returns:
            Number of entries removed
        """
        removed = 0
        for path in self.cache_dir.glob(f"*{ENTRY_SUFFIX}"):
            path.unlink(missing_ok=True)
            removed += 1
        logger.info("Cleared {} cached images from {}", removed, self.cache_dir)
        return removed
