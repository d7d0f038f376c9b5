"""asyncio-backed FetchTask implementation."""

import asyncio
from collections.abc import Awaitable, Callable
from enum import Enum

from loguru import logger

from .base import FetchCompletion, FetchTask


class TaskState(str, Enum):
    """Lifecycle of a fetch task."""

    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class AsyncFetchTask(FetchTask):
    """Runs a download coroutine on the running event loop.

    The download may raise; any exception is logged and reported to the
    completion callback as None.
    """

    def __init__(
        self,
        download: Callable[[], Awaitable[bytes]],
        on_complete: FetchCompletion,
        label: str = "",
    ):
        self._download = download
        self._on_complete = on_complete
        self._label = label
        self._state = TaskState.PENDING
        self._task: asyncio.Task[None] | None = None

    @property
    def state(self) -> TaskState:
        return self._state

    @property
    def cancelled(self) -> bool:
        return self._state is TaskState.CANCELLED

    @property
    def done(self) -> bool:
        return self._state is TaskState.COMPLETED

    def resume(self) -> None:
        if self._state is not TaskState.PENDING:
            return
        self._state = TaskState.RUNNING
        self._task = asyncio.get_running_loop().create_task(self._run())

    def cancel(self) -> None:
        if self._state in (TaskState.COMPLETED, TaskState.CANCELLED):
            return
        self._state = TaskState.CANCELLED
        if self._task is not None:
            self._task.cancel()
        logger.debug("Cancelled fetch task {}", self._label)

    async def _run(self) -> None:
        data: bytes | None
        try:
            data = await self._download()
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.debug("Download failed for {}: {}", self._label, e)
            data = None

        if self._state is TaskState.CANCELLED:
            return
        self._state = TaskState.COMPLETED
        self._on_complete(data)
