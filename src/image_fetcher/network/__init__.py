"""Network transport package.

Provides a factory function to create the configured network transport.
"""

from .base import FetchCompletion, FetchTask, NetworkService, Resource
from .httpx_client import HttpxNetworkService
from .task import AsyncFetchTask, TaskState


def create_network_service(
    provider_type: str = "httpx",
    timeout: float = 30.0,
    user_agent: str = "image-fetcher/0.1.0",
) -> NetworkService:
    """Create a network transport instance.

    Args:
        provider_type: Type of transport (currently only "httpx")
        timeout: HTTP request timeout in seconds
        user_agent: User-Agent header value

    Returns:
        Configured NetworkService instance

    Raises:
        ValueError: If provider_type is not recognized

    """
    if provider_type == "httpx":
        return HttpxNetworkService(timeout=timeout, user_agent=user_agent)
    else:
        raise ValueError(f"Unknown network provider: {provider_type}")


__all__ = [
    "AsyncFetchTask",
    "FetchCompletion",
    "FetchTask",
    "HttpxNetworkService",
    "NetworkService",
    "Resource",
    "TaskState",
    "create_network_service",
]
