"""Pytest fixtures and configuration for image-fetcher tests.

This module provides shared fixtures: temporary directories, sample image
bytes, controllable fakes for the network and cache ports, and a sink that
captures loguru records.
"""

import asyncio
import tempfile
from collections.abc import Awaitable, Callable, Generator
from io import BytesIO
from pathlib import Path

import pytest
from loguru import logger
from PIL import Image

from image_fetcher.cache import CacheService, MemoryCacheService
from image_fetcher.network import FetchCompletion, FetchTask, NetworkService, Resource
from image_fetcher.service import ImageService


# --- Fake Ports ---


class FakeFetchTask(FetchTask):
    """A FetchTask whose completion is driven by the test."""

    def __init__(self, resource: Resource, on_complete: FetchCompletion):
        self.resource = resource
        self._on_complete = on_complete
        self.resumed = False
        self.cancel_calls = 0
        self._cancelled = False
        self._done = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def done(self) -> bool:
        return self._done

    def resume(self) -> None:
        self.resumed = True

    def cancel(self) -> None:
        self.cancel_calls += 1
        if not self._done:
            self._cancelled = True

    def complete(self, data: bytes | None) -> None:
        """Finish the download, unless it was cancelled."""
        if self._cancelled or self._done:
            return
        self._done = True
        self._on_complete(data)

    def complete_ignoring_cancel(self, data: bytes | None) -> None:
        """Simulate a transport that fires its callback despite cancellation."""
        self._done = True
        self._on_complete(data)


class FakeNetworkService(NetworkService):
    """Records every fetch and hands back FakeFetchTasks."""

    def __init__(self) -> None:
        self.tasks: list[FakeFetchTask] = []

    def fetch(self, resource: Resource, on_complete: FetchCompletion) -> FetchTask:
        task = FakeFetchTask(resource, on_complete)
        self.tasks.append(task)
        return task

    @property
    def last_task(self) -> FakeFetchTask:
        return self.tasks[-1]


class RecordingCache(MemoryCacheService):
    """Memory cache that records save calls."""

    def __init__(self) -> None:
        super().__init__()
        self.loads: list[str] = []
        self.saves: list[tuple[str, bytes]] = []

    async def load(self, key: str) -> bytes | None:
        self.loads.append(key)
        return await super().load(key)

    async def save(self, key: str, data: bytes) -> None:
        self.saves.append((key, data))
        await super().save(key, data)


class BrokenCache(CacheService):
    """Cache whose every operation fails."""

    async def load(self, key: str) -> bytes | None:
        raise OSError("cache unavailable")

    async def save(self, key: str, data: bytes) -> None:
        raise OSError("cache unavailable")


class ImageSink:
    """Completion callback that records delivered images."""

    def __init__(self) -> None:
        self.images: list[Image.Image] = []

    def __call__(self, image: Image.Image) -> None:
        self.images.append(image)


# --- Temporary Directory Fixtures ---


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmp:
        yield Path(tmp)


@pytest.fixture
def temp_cache_dir(temp_dir: Path) -> Path:
    """Create a temporary directory for the disk cache."""
    cache_dir = temp_dir / "image-cache"
    cache_dir.mkdir()
    return cache_dir


# --- Sample Data Fixtures ---


@pytest.fixture
def sample_image_bytes() -> bytes:
    """Create sample PNG bytes for testing."""
    img = Image.new("RGB", (100, 100), color="red")
    buffer = BytesIO()
    img.save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def other_image_bytes() -> bytes:
    """Create a second, distinguishable PNG."""
    img = Image.new("RGB", (40, 20), color="blue")
    buffer = BytesIO()
    img.save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def corrupt_bytes() -> bytes:
    """Bytes that look like a PNG header but are not an image."""
    return b"\x89PNG\r\n\x1a\nthis is not really an image"


# --- Port Fixtures ---


@pytest.fixture
def broken_cache() -> BrokenCache:
    """Create a cache whose every operation fails."""
    return BrokenCache()


@pytest.fixture
def fake_network() -> FakeNetworkService:
    """Create a controllable network port."""
    return FakeNetworkService()


@pytest.fixture
def recording_cache() -> RecordingCache:
    """Create a memory cache that records calls."""
    return RecordingCache()


@pytest.fixture
def sink() -> ImageSink:
    """Create a completion callback that records images."""
    return ImageSink()


@pytest.fixture
def image_service(fake_network: FakeNetworkService, recording_cache: RecordingCache) -> ImageService:
    """Create a coordinator wired to the fake ports."""
    return ImageService(network_service=fake_network, cache_service=recording_cache)


# --- Logging Fixtures ---


@pytest.fixture
def log_messages() -> Generator[list[str], None, None]:
    """Capture formatted loguru records at WARNING and above."""
    messages: list[str] = []
    handler_id = logger.add(messages.append, level="WARNING", format="{level} {message}")
    yield messages
    logger.remove(handler_id)


# --- Scheduling Fixtures ---


@pytest.fixture
def settle() -> Callable[[], Awaitable[None]]:
    """Return a coroutine function that lets scheduled callbacks and tasks run."""

    async def run(rounds: int = 5) -> None:
        for _ in range(rounds):
            await asyncio.sleep(0)

    return run
