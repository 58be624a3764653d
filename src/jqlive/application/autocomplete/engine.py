"""Suggestion engine facade used by the completion widget."""

from __future__ import annotations

from dataclasses import dataclass, field

from jqlive.application.autocomplete.assembler import SuggestionAssembler
from jqlive.application.autocomplete.builtins import JqBuiltin
from jqlive.application.autocomplete.classifier import classify
from jqlive.application.autocomplete.function_help import find_function_help
from jqlive.application.config import AppConfig
from jqlive.application.document_cache import DocumentCache
from jqlive.domain.types import Certainty, EntryContext, Suggestion, SuggestionContext
from jqlive.logger import get_logger
from jqlive.utils import shorten

logger = get_logger("autocomplete.engine")


@dataclass(frozen=True, slots=True)
class SuggestionResult:
    """Suggestions for one keystroke plus the context they were built for."""

    context: SuggestionContext
    partial: str
    suggestions: tuple[Suggestion, ...] = field(default_factory=tuple)
    certainty: Certainty = Certainty.NON_DETERMINISTIC
    entry_context: EntryContext = EntryContext.NONE

    def __len__(self) -> int:
        return len(self.suggestions)


class SuggestionEngine:
    """
    Computes completions for a query and cursor position.

    Runs synchronously on the UI thread: no I/O, no subprocesses. It only
    reads the document cache, whose latest snapshot may change between calls.

    Example:
        ```python
        engine = SuggestionEngine(DocumentCache('{"user": {"name": "Ada"}}'))
        result = engine.get_suggestions(".user.")
        [s.text for s in result.suggestions]  # ["name"]
        ```
    """

    def __init__(self, cache: DocumentCache, config: AppConfig | None = None):
        self._cache = cache
        self._config = config or AppConfig()
        self._assembler = SuggestionAssembler(self._config.max_suggestions)

    @property
    def cache(self) -> DocumentCache:
        return self._cache

    def get_suggestions(self, query: str, cursor: int | None = None) -> SuggestionResult:
        """
        Suggestions for the token being typed at ``cursor``.

        Args:
            query: Full query text
            cursor: Cursor offset; defaults to the end of the query

        Returns:
            The ranked, truncated suggestions and the classification context
        """
        if cursor is None:
            cursor = len(query)
        cursor = max(0, min(cursor, len(query)))

        classification = classify(query, cursor, self._cache, self._config.scan_ahead_size)
        suggestions = self._assembler.assemble(
            classification,
            self._cache.all_field_names,
            query,
            cursor,
        )
        logger.debug(
            f"{len(suggestions)} suggestion(s) for {shorten(query)!r}@{cursor} "
            f"({classification.context.value}, partial={classification.partial!r})"
        )
        return SuggestionResult(
            context=classification.context,
            partial=classification.partial,
            suggestions=tuple(suggestions),
            certainty=classification.certainty,
            entry_context=classification.entry_context,
        )

    def function_help(self, query: str, cursor: int | None = None) -> JqBuiltin | None:
        """Signature and description of the function at ``cursor``, if any."""
        if cursor is None:
            cursor = len(query)
        return find_function_help(query, cursor)
