"""
Abstract base class for cache storage backends.

Enables swapping between an in-memory dict, a disk directory, or a remote
key-value store without touching the fetch coordinator.
"""

from abc import ABC, abstractmethod


class CacheService(ABC):
    """Abstract async key/value store for raw image bytes.

    Instances are shared between many coordinators and must tolerate
    concurrent use.
    """

    @abstractmethod
    async def load(self, key: str) -> bytes | None:
        """
        Load the bytes stored under a key.

        Args:
            key: Canonical string form of the image URL

        Returns:
            Stored bytes, or None on a cache miss
        """
        pass

    @abstractmethod
    async def save(self, key: str, data: bytes) -> None:
        """
        Store bytes under a key, replacing any previous value.

        Args:
            key: Canonical string form of the image URL
            data: Raw, undecoded image bytes
        """
        pass
