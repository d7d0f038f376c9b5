"""
Image fetch coordinator.

Resolves a URL to a decoded image: the cache is consulted first, the network
second, and freshly downloaded bytes are written back to the cache. Each
ImageService honors only its most recent request.
"""

import asyncio
from collections.abc import Callable
from functools import partial

from loguru import logger
from PIL import Image as PILImage

from .cache import CacheService
from .decoding import decode_image
from .network import FetchTask, NetworkService, Resource

Decoder = Callable[[bytes], PILImage.Image]
Dispatcher = Callable[[Callable[[], None]], object]
ImageCompletion = Callable[[PILImage.Image], None]
FailureHandler = Callable[[str], None]


def cache_key(url: object) -> str:
    """Return the canonical string form of a URL used to index the cache."""
    return str(url)


class ImageService:
    """Check the local cache and fetch remote images.

    One instance belongs to one consumer (a display slot, a widget, a CLI
    run). Calling fetch() again cancels the previous network download and
    guarantees that nothing from the earlier request is delivered afterwards.

    Failures are never raised to the caller. The completion callback runs at
    most once per fetch, and only when an image is available; on failure it
    is not called at all and a warning is logged instead. Callers that need
    to know a fetch has ended without an image can pass ``on_failure``.
    """

    def __init__(
        self,
        network_service: NetworkService,
        cache_service: CacheService,
        decoder: Decoder = decode_image,
        dispatcher: Dispatcher | None = None,
    ):
        """
        Initialize the coordinator.

        Args:
            network_service: Transport used on cache misses
            cache_service: Key/value store for raw image bytes
            decoder: Turns bytes into an image, raising on failure
            dispatcher: Runs delivery callbacks on the consumer's execution
                context. Defaults to ``call_soon`` on the loop that issued the
                fetch.
        """
        self.network_service = network_service
        self.cache_service = cache_service
        self.decoder = decoder
        self.dispatcher = dispatcher
        self._task: FetchTask | None = None
        self._generation = 0
        self._pending_saves: set[asyncio.Task[None]] = set()

    @property
    def current_task(self) -> FetchTask | None:
        """Return the live network task, if any."""
        return self._task

    def cancel(self) -> None:
        """Cancel the running download and drop any undelivered result."""
        if self._task is not None:
            self._task.cancel()
            self._task = None
        self._generation += 1

    def fetch(
        self,
        url: str,
        completion: ImageCompletion,
        on_failure: FailureHandler | None = None,
    ) -> asyncio.Task[None]:
        """
        Fetch an image, from the cache if possible.

        Must be called from a running event loop. Cancellation of the
        previous request happens before this method returns.

        Args:
            url: Absolute image URL; not validated here
            completion: Receives the decoded image
            on_failure: Receives the URL when the download or its decoding
                fails. Never called for superseded requests.

        Returns:
            The task running the cache lookup. Awaiting it does not wait for
            a network download.
        """
        loop = asyncio.get_running_loop()
        self.cancel()
        generation = self._generation
        dispatch = self.dispatcher or loop.call_soon
        return loop.create_task(
            self._lookup(url, completion, on_failure, generation, dispatch)
        )

    async def flush(self) -> None:
        """Wait for outstanding cache writes to finish.

        Write failures are swallowed here as well; they never affect delivery.
        """
        if self._pending_saves:
            await asyncio.gather(*self._pending_saves, return_exceptions=True)

    def _is_current(self, generation: int) -> bool:
        return generation == self._generation

    async def _lookup(
        self,
        url: str,
        completion: ImageCompletion,
        on_failure: FailureHandler | None,
        generation: int,
        dispatch: Dispatcher,
    ) -> None:
        key = cache_key(url)
        image = await self._load_cached(key)

        if not self._is_current(generation):
            logger.debug("Dropping superseded request for {}", url)
            return

        if image is not None:
            logger.debug("Cache hit: {}", url)
            self._deliver(image, completion, generation, dispatch)
            return

        resource = Resource(url=key)

        def on_complete(data: bytes | None) -> None:
            self._handle_download(key, data, completion, on_failure, generation, dispatch)

        self._task = self.network_service.fetch(resource, on_complete)
        self._task.resume()

    async def _load_cached(self, key: str) -> PILImage.Image | None:
        try:
            data = await self.cache_service.load(key)
        except Exception as e:
            logger.warning("Cache lookup failed for {}: {}", key[:60], e)
            return None

        if data is None:
            return None

        try:
            return self.decoder(data)
        except Exception as e:
            logger.debug("Cached bytes for {} are not decodable: {}", key[:60], e)
            return None

    def _handle_download(
        self,
        key: str,
        data: bytes | None,
        completion: ImageCompletion,
        on_failure: FailureHandler | None,
        generation: int,
        dispatch: Dispatcher,
    ) -> None:
        if not self._is_current(generation):
            return
        self._task = None

        image = None
        if data is not None:
            try:
                image = self.decoder(data)
            except Exception as e:
                logger.debug("Downloaded bytes are not decodable: {}", e)

        if image is None:
            logger.warning("Error loading image at {}", key)
            if on_failure is not None:
                self._dispatch_current(partial(on_failure, key), generation, dispatch)
            return

        self._save(key, data)
        self._deliver(image, completion, generation, dispatch)

    def _save(self, key: str, data: bytes) -> None:
        task = asyncio.get_running_loop().create_task(self.cache_service.save(key, data))
        self._pending_saves.add(task)
        task.add_done_callback(self._save_finished)

    def _save_finished(self, task: asyncio.Task[None]) -> None:
        self._pending_saves.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.debug("Cache write failed: {}", error)

    def _deliver(
        self,
        image: PILImage.Image,
        completion: ImageCompletion,
        generation: int,
        dispatch: Dispatcher,
    ) -> None:
        self._dispatch_current(partial(completion, image), generation, dispatch)

    def _dispatch_current(
        self,
        callback: Callable[[], None],
        generation: int,
        dispatch: Dispatcher,
    ) -> None:
        def run() -> None:
            if self._is_current(generation):
                callback()

        dispatch(run)
