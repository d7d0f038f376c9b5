"""
Process-wide collaborators.

The cache and network services are stateless from a coordinator's point of
view, so every ImageService in the process shares one of each. They are
created lazily from settings on first use.
"""

from loguru import logger

from .cache import CacheService, create_cache_service
from .config import settings
from .network import NetworkService, create_network_service
from .service import ImageService

_network_service: NetworkService | None = None
_cache_service: CacheService | None = None


def get_network_service() -> NetworkService:
    """Get or create the shared network transport."""
    global _network_service
    if _network_service is None:
        logger.debug("Initializing network service: timeout={}s", settings.fetch_timeout)
        _network_service = create_network_service(
            provider_type="httpx",
            timeout=settings.fetch_timeout,
            user_agent=settings.user_agent,
        )
    return _network_service


def get_cache_service() -> CacheService:
    """Get or create the shared cache backend."""
    global _cache_service
    if _cache_service is None:
        logger.debug("Initializing cache service: {} at {}", settings.cache_type, settings.cache_dir)
        _cache_service = create_cache_service(
            cache_type=settings.cache_type,
            cache_dir=settings.cache_path,
        )
    return _cache_service


def default_image_service() -> ImageService:
    """Create a new coordinator wired to the shared collaborators."""
    return ImageService(
        network_service=get_network_service(),
        cache_service=get_cache_service(),
    )


def reset() -> None:
    """Forget the shared collaborators so the next call rebuilds them."""
    global _network_service, _cache_service
    _network_service = None
    _cache_service = None
