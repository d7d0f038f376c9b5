"""
Cache storage package.

Provides a factory function to create the configured cache backend.
"""

from pathlib import Path

from .base import CacheService
from .disk import DiskCacheService
from .memory import MemoryCacheService


def create_cache_service(
    cache_type: str = "disk",
    cache_dir: str | Path = "./data/image-cache",
) -> CacheService:
    """
    Factory function to create a cache backend.

    Args:
        cache_type: Type of cache ("disk" or "memory")
        cache_dir: Directory for the disk backend (ignored for "memory")

    Returns:
        Configured CacheService instance

    Raises:
        ValueError: If cache_type is not recognized
    """
    if cache_type == "disk":
        return DiskCacheService(cache_dir=cache_dir)
    elif cache_type == "memory":
        return MemoryCacheService()
    else:
        raise ValueError(f"Unknown cache type: {cache_type}")


__all__ = [
    "CacheService",
    "DiskCacheService",
    "MemoryCacheService",
    "create_cache_service",
]
