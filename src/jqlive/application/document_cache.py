"""Session-wide cache of the input document and the latest query result.

``original`` is parsed once and never replaced. The latest result lives in
an immutable ``ResultSnapshot`` whose reference is swapped atomically, so a
reader always sees a value together with its own rendered text and metrics.
"""

from __future__ import annotations

import json
import threading
from typing import Any

from jqlive.application.preprocess import ResultSnapshot, process_output
from jqlive.domain.errors import InvalidDocumentError
from jqlive.logger import get_logger

logger = get_logger("document_cache")

INITIAL_REQUEST_ID = 0


def collect_field_names(root: Any) -> frozenset[str]:
    """Every object key reachable from ``root``. Iterative, so deep documents are fine."""
    names: set[str] = set()
    stack = [root]
    while stack:
        value = stack.pop()
        if isinstance(value, dict):
            names.update(value.keys())
            stack.extend(value.values())
        elif isinstance(value, list):
            stack.extend(value)
    return frozenset(names)


class DocumentCache:
    """
    Holds the parsed input document and the most recent successful result.

    Example:
        ```python
        cache = DocumentCache('{"user": {"name": "Ada"}}')
        cache.original["user"]["name"]      # "Ada"
        cache.snapshot.request_id          # 0, the identity result
        cache.publish(process_output(1, ".user", '{"name": "Ada"}'))
        ```

    Thread safety:
        ``publish`` may be called from any thread; it compares and swaps the
        snapshot reference under a lock. Readers take the reference without
        locking and never observe a partially updated result.
    """

    def __init__(self, document_text: str, sample_size: int = 10):
        """
        Parse the document and publish it as the initial (identity) result.

        Args:
            document_text: Raw JSON text of the input document
            sample_size: Streamed values kept for scan-ahead navigation

        Raises:
            InvalidDocumentError: If the text is not a single valid JSON value
        """
        try:
            self._original = json.loads(document_text)
        except json.JSONDecodeError as e:
            raise InvalidDocumentError(f"Input is not valid JSON: {e}") from e

        self._document_text = document_text
        self._all_field_names = collect_field_names(self._original)
        self._lock = threading.Lock()
        self._snapshot = process_output(
            INITIAL_REQUEST_ID,
            ".",
            json.dumps(self._original, indent=2, ensure_ascii=False),
            sample_size,
        )
        logger.info(
            f"Document loaded ({len(document_text)} chars, "
            f"{len(self._all_field_names)} distinct field names)"
        )

    @property
    def original(self) -> Any:
        return self._original

    @property
    def document_text(self) -> str:
        return self._document_text

    @property
    def all_field_names(self) -> frozenset[str]:
        return self._all_field_names

    @property
    def snapshot(self) -> ResultSnapshot:
        """The latest published result (initially the document itself)."""
        return self._snapshot

    @property
    def last_result(self) -> Any:
        return self._snapshot.value

    def publish(self, snapshot: ResultSnapshot) -> bool:
        """
        Replace the published result unless a newer one already landed.

        Args:
            snapshot: Result of a successful evaluation

        Returns:
            True if the snapshot was published, False if it was stale
        """
        with self._lock:
            current = self._snapshot
            if snapshot.request_id <= current.request_id:
                logger.debug(
                    f"Discarding stale result #{snapshot.request_id} "
                    f"(published #{current.request_id})"
                )
                return False
            self._snapshot = snapshot
        logger.debug(f"Published result #{snapshot.request_id} ({snapshot.result_type.value})")
        return True
