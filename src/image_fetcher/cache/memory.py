"""In-process cache backend."""

from loguru import logger

from .base import CacheService


class MemoryCacheService(CacheService):
    """Keeps image bytes in a dict for the lifetime of the process."""

    def __init__(self) -> None:
        self._entries: dict[str, bytes] = {}

    async def load(self, key: str) -> bytes | None:
        return self._entries.get(key)

    async def save(self, key: str, data: bytes) -> None:
        self._entries[key] = data
        logger.debug("Cached {} bytes in memory for {}", len(data), key[:60])

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries
