"""
Utilities for applying selected suggestions to the query text.
"""

from __future__ import annotations

from dataclasses import dataclass

from jqlive.domain.types import Suggestion, SuggestionKind
from jqlive.logger import get_logger

logger = get_logger("completion.applier")

# Characters after which a dot starts a new path rather than continuing one
_PATH_STARTERS = frozenset("|;,([{: \t\r\n")


@dataclass(slots=True)
class ApplyResult:
    """Result of applying a completion value."""

    text: str
    cursor: int


class CompletionApplier:
    """Replaces the partial token before the cursor with a suggestion."""

    def apply(self, suggestion: Suggestion, text: str, cursor: int, partial: str) -> ApplyResult:
        """
        Insert ``suggestion`` at ``cursor``.

        Args:
            suggestion: The chosen suggestion
            text: Current query text
            cursor: Cursor offset
            partial: Token being typed, as reported by the suggestion engine

        Returns:
            New text and cursor. Functions taking arguments get an opening
            parenthesis; a ``[...]`` pattern typed after ``path.`` absorbs
            the dot (``.items.`` + ``[]`` gives ``.items[]``).
        """
        cursor = max(0, min(cursor, len(text)))
        start = cursor
        if partial and text[:cursor].endswith(partial):
            start = cursor - len(partial)

        insert = suggestion.text
        if suggestion.needs_parens:
            insert += "("

        if suggestion.kind is SuggestionKind.PATTERN and insert.startswith("[") and self._continues_path(text, start):
            start -= 1

        new_text = text[:start] + insert + text[cursor:]
        new_cursor = start + len(insert)
        logger.debug(f"Applied {suggestion.text!r}: {text!r} -> {new_text!r} (cursor {new_cursor})")
        return ApplyResult(text=new_text, cursor=new_cursor)

    @staticmethod
    def _continues_path(text: str, start: int) -> bool:
        """Whether the dot before ``start`` follows a path term (``.items.``, not a bare ``.``)."""
        if start < 1 or text[start - 1] != ".":
            return False
        return start >= 2 and text[start - 2] not in _PATH_STARTERS
