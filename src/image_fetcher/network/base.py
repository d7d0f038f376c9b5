"""
Abstract base classes for the network transport.

Enables swapping httpx for another client, or for an in-process fake in tests.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable

from pydantic import BaseModel, ConfigDict, Field

FetchCompletion = Callable[[bytes | None], None]


class Resource(BaseModel):
    """A fetch request descriptor wrapping a URL."""

    model_config = ConfigDict(frozen=True)

    url: str = Field(description="Absolute URL of the remote image")


class FetchTask(ABC):
    """Cancellable handle to one in-flight network operation."""

    @abstractmethod
    def resume(self) -> None:
        """Start the operation. Calling it again has no effect."""
        pass

    @abstractmethod
    def cancel(self) -> None:
        """
        Cancel the operation.

        Safe to call at any time, including after completion or a previous
        cancel. Once called, the completion callback never fires.
        """
        pass

    @property
    @abstractmethod
    def cancelled(self) -> bool:
        """Return whether cancel() has taken effect."""
        pass

    @property
    @abstractmethod
    def done(self) -> bool:
        """Return whether the completion callback has already run."""
        pass


class NetworkService(ABC):
    """Abstract interface for downloading raw resource bytes."""

    @abstractmethod
    def fetch(self, resource: Resource, on_complete: FetchCompletion) -> FetchTask:
        """
        Create a task that downloads a resource.

        The task is returned unstarted; call resume() on it. When it
        finishes, on_complete receives the body bytes, or None on failure.

        Args:
            resource: What to download
            on_complete: Called once with the downloaded bytes or None

        Returns:
            Cancellable handle for the download
        """
        pass
