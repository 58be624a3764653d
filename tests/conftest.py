"""Shared fixtures and stubs for jqlive tests."""

import asyncio
import json
from typing import Any, Callable, Optional

import pytest

from jqlive.application.document_cache import DocumentCache
from jqlive.application.preprocess import process_output
from jqlive.domain.errors import QueryEvaluationError
from jqlive.domain.types import Diagnostic


class StubExecutor:
    """Scripted QueryExecutor for deterministic pipeline tests."""

    def __init__(
        self,
        outputs: Optional[dict[str, str]] = None,
        errors: Optional[dict[str, Diagnostic]] = None,
        delays: Optional[dict[str, float]] = None,
    ):
        """Initialize with canned behaviour.

        Args:
            outputs: Output text per query (default: echo the document)
            errors: Diagnostic raised per query
            delays: Seconds to wait before answering, per query
        """
        self.outputs = outputs or {}
        self.errors = errors or {}
        self.delays = delays or {}
        self.calls: list[str] = []

    async def execute(self, query: str, document: str) -> str:
        self.calls.append(query)
        delay = self.delays.get(query, 0)
        if delay:
            await asyncio.sleep(delay)
        if query in self.errors:
            raise QueryEvaluationError(self.errors[query])
        return self.outputs.get(query, document)


@pytest.fixture
def stub_executor() -> Callable[..., StubExecutor]:
    """Factory for StubExecutor instances."""
    return StubExecutor


@pytest.fixture
def make_cache() -> Callable[[Any], DocumentCache]:
    """Factory building a DocumentCache from a Python value."""

    def _make(document: Any) -> DocumentCache:
        return DocumentCache(json.dumps(document))

    return _make


@pytest.fixture
def publish_result() -> Callable[..., None]:
    """Publish a result to a cache as if a query had just succeeded.

    ``values`` are serialized one per line, so several values form a stream.
    """

    def _publish(cache: DocumentCache, query: str, *values: Any) -> None:
        output = "\n".join(json.dumps(value) for value in values)
        request_id = cache.snapshot.request_id + 1
        assert cache.publish(process_output(request_id, query, output))

    return _publish
