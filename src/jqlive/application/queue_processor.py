"""
Latest-wins async request processor with a single background worker.

Unlike a FIFO queue, a new submission replaces any request still waiting to
run: only the most recent request matters when every keystroke produces a
new query. At most one request is in flight and at most one is pending.
"""

import asyncio
from typing import Awaitable, Callable, Generic, TypeVar

from jqlive.logger import get_logger

logger = get_logger("queue_processor")

T = TypeVar("T")


class LatestRequestProcessor(Generic[T]):
    """
    Async processor that keeps one worker task and one pending slot.

    Example:
        ```python
        async def evaluate(request: QueryRequest) -> None:
            ...

        processor = LatestRequestProcessor[QueryRequest](
            processor=evaluate,
            name="QueryPipeline",
            debounce=0.05,
        )
        await processor.start()
        processor.submit(request)
        ```

    Lifecycle:
        1. Create instance with processor function
        2. Call `start()` to begin background worker
        3. Call `submit(item)` for each new request
        4. Call `stop()` to gracefully shutdown

    Error Handling:
        - Processor exceptions are logged but don't stop the worker
        - Graceful cancellation on stop()
    """

    def __init__(
        self,
        processor: Callable[[T], None] | Callable[[T], Awaitable[None]],
        *,
        name: str = "LatestRequest",
        debounce: float = 0.0,
    ):
        """
        Initialize the processor.

        Args:
            processor: Function or coroutine handling one request.
                      Exceptions are logged but don't stop processing.
            name: Human-readable name for logging
            debounce: Seconds to wait after a wakeup so bursts of submissions
                      collapse into the last one
        """
        self._processor = processor
        self._name = name
        self._debounce = max(debounce, 0.0)
        self._pending: T | None = None
        self._has_pending = False
        self._busy = False
        self._wakeup = asyncio.Event()
        self._idle = asyncio.Event()
        self._idle.set()
        self._worker_task: asyncio.Task | None = None
        self._running = False
        self._is_async_processor = asyncio.iscoroutinefunction(processor)

        logger.debug(
            f"Created {self._name} (processor_type={'async' if self._is_async_processor else 'sync'}, "
            f"debounce={self._debounce:.3f}s)"
        )

    async def start(self) -> None:
        """Start the background worker task."""
        if self._running:
            logger.warning(f"{self._name} already running")
            return

        self._running = True
        self._worker_task = asyncio.create_task(self._worker())
        logger.info(f"{self._name} started")

    async def stop(self) -> None:
        """
        Stop the background worker task and wait for cleanup.

        A pending request is dropped. After stop(), the processor can be
        restarted with start().
        """
        if not self._running:
            return

        self._running = False
        logger.info(f"Stopping {self._name}...")

        if self._worker_task and not self._worker_task.done():
            self._worker_task.cancel()
            try:
                await self._worker_task
            except asyncio.CancelledError:
                logger.info(f"{self._name} worker cancelled successfully")

        self._pending = None
        self._has_pending = False
        self._busy = False
        self._idle.set()
        logger.info(f"{self._name} stopped")

    def submit(self, item: T) -> None:
        """
        Make ``item`` the next request to process, replacing any pending one.

        Raises:
            RuntimeError: If the processor is not running. Call start() first.
        """
        if not self._running:
            raise RuntimeError(f"{self._name} is not running. Call start() first.")

        if self._has_pending:
            logger.debug(f"{self._name}: Replacing pending request")
        self._pending = item
        self._has_pending = True
        self._idle.clear()
        self._wakeup.set()

    @property
    def is_running(self) -> bool:
        """Check if the processor is currently running."""
        return self._running

    @property
    def has_pending(self) -> bool:
        """Whether a request is waiting to be processed."""
        return self._has_pending

    @property
    def is_busy(self) -> bool:
        """Whether a request is being processed right now."""
        return self._busy

    def _take_pending(self) -> T | None:
        item = self._pending
        self._pending = None
        self._has_pending = False
        return item

    async def _worker(self) -> None:
        """Wait for submissions and process the latest one at a time."""
        logger.info(f"{self._name} worker started")

        while self._running:
            try:
                await self._wakeup.wait()
                self._wakeup.clear()

                if self._debounce:
                    await asyncio.sleep(self._debounce)

                if not self._has_pending:
                    self._idle.set()
                    continue

                item = self._take_pending()
                self._busy = True
                try:
                    if self._is_async_processor:
                        await self._processor(item)  # type: ignore[misc,arg-type]
                    else:
                        self._processor(item)  # type: ignore[arg-type]
                except asyncio.CancelledError:
                    raise
                except Exception as e:
                    logger.error(f"Error in {self._name} processor: {e}")
                finally:
                    self._busy = False

                if self._has_pending:
                    self._wakeup.set()
                else:
                    self._idle.set()

            except asyncio.CancelledError:
                logger.info(f"{self._name} worker task cancelled")
                break

        logger.info(f"{self._name} worker stopped")

    async def wait_until_idle(self, timeout: float | None = None) -> bool:
        """
        Wait until no request is pending or running.

        Args:
            timeout: Maximum time to wait in seconds. None = wait forever.

        Returns:
            True if the processor became idle, False if timeout occurred
        """
        try:
            await asyncio.wait_for(self._idle.wait(), timeout=timeout)
            return True
        except asyncio.TimeoutError:
            logger.warning(f"{self._name}: Timeout waiting for processor to become idle")
            return False
