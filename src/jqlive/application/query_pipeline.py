"""
Background evaluation of queries with staleness resolution.

Every content change submits a request with a monotonically increasing id.
The jq process runs as an asyncio subprocess and its output is parsed in a
worker thread, so the event loop that handles keystrokes never blocks. A
finished evaluation is applied only if no newer request has been issued;
otherwise it is dropped on arrival. jq processes are never preempted.
"""

import asyncio
from dataclasses import dataclass

from jqlive.application.config import AppConfig
from jqlive.application.document_cache import DocumentCache
from jqlive.application.preprocess import ResultSnapshot, process_output
from jqlive.application.queue_processor import LatestRequestProcessor
from jqlive.domain.errors import JqNotFoundError, QueryEvaluationError
from jqlive.domain.events import EventBus, QueryDiscarded, QueryFailed, QueryResultPublished
from jqlive.domain.protocols import QueryExecutor
from jqlive.domain.types import Diagnostic
from jqlive.logger import get_logger
from jqlive.utils import shorten

logger = get_logger("query_pipeline")


@dataclass(frozen=True, slots=True)
class QueryRequest:
    """One evaluation request."""

    request_id: int
    query: str


class QueryPipeline:
    """
    Evaluates queries off the event loop and publishes results to the cache.

    Outcomes are reported on the event bus:
    - QueryResultPublished: the cache now holds this request's result
    - QueryFailed: jq reported a diagnostic; the cache is untouched
    - QueryDiscarded: the result arrived after a newer request was issued
    """

    def __init__(
        self,
        executor: QueryExecutor,
        cache: DocumentCache,
        event_bus: EventBus,
        config: AppConfig | None = None,
    ):
        self._executor = executor
        self._cache = cache
        self._event_bus = event_bus
        self._config = config or AppConfig()
        self._latest_request_id = cache.snapshot.request_id
        self._processor = LatestRequestProcessor[QueryRequest](
            processor=self.process,
            name="QueryPipeline",
            debounce=self._config.debounce_seconds,
        )

    @property
    def latest_request_id(self) -> int:
        return self._latest_request_id

    @property
    def is_running(self) -> bool:
        return self._processor.is_running

    async def start(self) -> None:
        await self._processor.start()

    async def stop(self) -> None:
        await self._processor.stop()

    async def wait_until_idle(self, timeout: float | None = None) -> bool:
        return await self._processor.wait_until_idle(timeout)

    def issue(self, query: str) -> QueryRequest:
        """Create the newest request, superseding every earlier one."""
        self._latest_request_id += 1
        return QueryRequest(request_id=self._latest_request_id, query=query)

    def submit(self, query: str) -> int:
        """
        Request evaluation of ``query`` in the background.

        Returns:
            The id of the new request
        """
        request = self.issue(query)
        logger.debug(f"Submitting request #{request.request_id}: {shorten(query)!r}")
        self._processor.submit(request)
        return request.request_id

    def is_superseded(self, request: QueryRequest) -> bool:
        return request.request_id != self._latest_request_id

    async def process(self, request: QueryRequest) -> ResultSnapshot | None:
        """
        Evaluate one request and apply its outcome.

        Returns:
            The published snapshot, or None if the request failed or was discarded
        """
        try:
            output = await self._executor.execute(request.query, self._cache.document_text)
        except QueryEvaluationError as e:
            self._fail(request, e.diagnostic)
            return None
        except JqNotFoundError as e:
            logger.error(f"Evaluator missing: {e}")
            self._fail(request, Diagnostic(str(e)))
            return None

        if self.is_superseded(request):
            self._discard(request)
            return None

        snapshot = await asyncio.to_thread(
            process_output,
            request.request_id,
            request.query,
            output,
            self._config.array_sample_size,
        )

        if self.is_superseded(request) or not self._cache.publish(snapshot):
            self._discard(request)
            return None

        logger.info(
            f"Result #{request.request_id} published: {snapshot.result_type.value}, "
            f"{snapshot.value_count} value(s), {snapshot.line_count} line(s)"
        )
        self._event_bus.publish(
            QueryResultPublished(
                request_id=request.request_id,
                query=request.query,
                result_type=snapshot.result_type,
            )
        )
        return snapshot

    def _fail(self, request: QueryRequest, diagnostic: Diagnostic) -> None:
        if self.is_superseded(request):
            self._discard(request)
            return
        logger.info(f"Query #{request.request_id} failed: {diagnostic}")
        self._event_bus.publish(
            QueryFailed(request_id=request.request_id, query=request.query, diagnostic=diagnostic)
        )

    def _discard(self, request: QueryRequest) -> None:
        logger.debug(
            f"Discarding stale request #{request.request_id} (latest is #{self._latest_request_id})"
        )
        self._event_bus.publish(
            QueryDiscarded(
                request_id=request.request_id,
                query=request.query,
                latest_request_id=self._latest_request_id,
            )
        )
