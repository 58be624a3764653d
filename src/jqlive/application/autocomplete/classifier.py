"""Decides what is being typed at the cursor and where in the data it points.

The classifier is a heuristic, not an evaluator. After a pipe it navigates
the most recent successful result instead of the document, which can be
wrong for complex intermediate stages; in that case certainty is lowered and
the assembler falls back to every known field name.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

from jqlive.application.autocomplete.brace_tracker import BraceTracker, is_word_char
from jqlive.application.autocomplete.builtins import (
    EXPRESSION_KEYWORDS,
    SHAPE_ERASING_FUNCTIONS,
)
from jqlive.application.autocomplete.entry_context import detect_entry_context
from jqlive.application.autocomplete.navigator import MISSING, navigate, navigate_multi
from jqlive.application.autocomplete.path_parser import extract_path_context, parse_path
from jqlive.application.autocomplete.scan_state import string_mask
from jqlive.application.document_cache import DocumentCache
from jqlive.domain.types import (
    ArrayIterator,
    BraceKind,
    Certainty,
    EntryContext,
    ParsedPath,
    ResultType,
    SuggestionContext,
)
from jqlive.logger import get_logger

logger = get_logger("autocomplete.classifier")

_TOKEN_DELIMITERS = frozenset("|;()[]{},: \t\r\n")
_WORD = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")

SOURCE_ORIGINAL = "original"
SOURCE_LAST_RESULT = "last_result"


@dataclass(frozen=True, slots=True)
class Classification:
    """Everything the assembler needs to build suggestions for one keystroke."""

    context: SuggestionContext
    partial: str
    entry_context: EntryContext = EntryContext.NONE
    certainty: Certainty = Certainty.NON_DETERMINISTIC
    targets: tuple[Any, ...] = field(default_factory=tuple)
    source: str | None = None
    implicit_iteration: bool = False
    path: ParsedPath | None = None
    # Array elements inspected for ``[].field`` suggestions
    sample_size: int = 1


def analyze_context(before_cursor: str, tracker: BraceTracker | None = None) -> tuple[SuggestionContext, str]:
    """
    Determine the kind of token being typed and its partial text.

    Returns:
        ``(context, partial)``. For fields the partial excludes the dot; for
        variables it includes the ``$``.
    """
    if tracker is None or tracker.text != before_cursor:
        tracker = BraceTracker(before_cursor)

    frame = tracker.innermost
    if frame is not None and frame.kind is BraceKind.OBJECT_BUILDER and not tracker.is_object_value_position():
        return SuggestionContext.NONE, ""

    if string_mask(before_cursor + " ")[-1]:
        return SuggestionContext.NONE, ""

    start = len(before_cursor)
    while start > 0 and before_cursor[start - 1] not in _TOKEN_DELIMITERS:
        start -= 1
    token = before_cursor[start:]

    if token[:1].isdigit():
        return SuggestionContext.NONE, ""

    if token.startswith("$") and "." not in token:
        return SuggestionContext.VARIABLE, token

    if "." in token:
        dot = token.rfind(".")
        return SuggestionContext.FIELD, token[dot + 1 :]

    preceding = _skip_whitespace_back(before_cursor, start)
    if preceding > 0 and before_cursor[preceding - 1] == ".":
        return SuggestionContext.FIELD, token

    if preceding < start and preceding > 0 and _ends_complete_term(before_cursor[:preceding]):
        return SuggestionContext.OPERATOR, token

    return SuggestionContext.FUNCTION, token


def _skip_whitespace_back(text: str, pos: int) -> int:
    while pos > 0 and text[pos - 1].isspace():
        pos -= 1
    return pos


def _ends_complete_term(text: str) -> bool:
    """Whether ``text`` ends with something an infix operator could follow."""
    last = text[-1]
    if last in ')]}"?':
        return True
    if last == ".":
        return True
    if not is_word_char(last):
        return False
    start = len(text)
    while start > 0 and (is_word_char(text[start - 1]) or text[start - 1] == "$"):
        start -= 1
    return text[start:] not in EXPRESSION_KEYWORDS


def contains_pipe(text: str) -> bool:
    mask = string_mask(text)
    return any(ch == "|" and not mask[i] for i, ch in enumerate(text))


def contains_shape_erasing_function(text: str) -> bool:
    mask = string_mask(text)
    for match in _WORD.finditer(text):
        if mask[match.start()]:
            continue
        if match.start() > 0 and (is_word_char(text[match.start() - 1]) or text[match.start() - 1] in "$@."):
            continue
        if match.group() in SHAPE_ERASING_FUNCTIONS:
            return True
    return False


def classify(query: str, cursor: int, cache: DocumentCache, scan_ahead_size: int = 1) -> Classification:
    """
    Classify the cursor position of ``query``.

    For field contexts this also navigates the cached data: entry contexts
    short-circuit navigation, element-context functions add an implicit
    ``[]``, and the source is the latest result when a pipe precedes the
    current sub-expression.

    Args:
        query: Full query text
        cursor: Cursor offset
        cache: Document cache holding the document and latest result
        scan_ahead_size: Elements inspected per array iteration (1 = first only)
    """
    cursor = max(0, min(cursor, len(query)))
    before_cursor = query[:cursor]
    tracker = BraceTracker(before_cursor)
    context, partial = analyze_context(before_cursor, tracker)

    if context is not SuggestionContext.FIELD:
        return Classification(context=context, partial=partial)

    entry_context = detect_entry_context(query, cursor, tracker)
    if entry_context is EntryContext.DIRECT:
        return Classification(
            context=context,
            partial=partial,
            entry_context=entry_context,
            certainty=Certainty.DETERMINISTIC,
        )
    if entry_context is EntryContext.OPAQUE_VALUE:
        return Classification(context=context, partial=partial, entry_context=entry_context)

    path_context = extract_path_context(before_cursor, tracker)
    if path_context is None:
        return Classification(context=SuggestionContext.NONE, partial="")

    path = parse_path(path_context.text)
    snapshot = cache.snapshot
    if contains_pipe(path_context.prefix):
        source = SOURCE_LAST_RESULT
        roots = snapshot.navigation_roots(scan_ahead_size)
        streamed = snapshot.result_type is ResultType.DESTRUCTURED_OBJECTS
    else:
        source = SOURCE_ORIGINAL
        roots = [cache.original]
        streamed = False

    implicit_iteration = tracker.is_innermost_element_context() and not streamed
    segments = path.segments
    if implicit_iteration:
        segments = (ArrayIterator(),) + segments

    targets: tuple[Any, ...] = ()
    if path.anchored:
        if scan_ahead_size > 1:
            targets = tuple(navigate_multi(roots, segments, scan_ahead_size))
        else:
            target = navigate(roots[0], segments)
            if target is not MISSING:
                targets = (target,)

    shape_erased = contains_shape_erasing_function(path_context.prefix)
    if targets and not shape_erased:
        certainty = Certainty.DETERMINISTIC
    else:
        certainty = Certainty.NON_DETERMINISTIC

    logger.debug(
        f"Classified {before_cursor!r}: source={source} path={path_context.text!r} "
        f"implicit_iteration={implicit_iteration} shape_erased={shape_erased} "
        f"targets={len(targets)} certainty={certainty.value}"
    )
    return Classification(
        context=context,
        partial=partial,
        entry_context=entry_context,
        certainty=certainty,
        targets=targets,
        source=source,
        implicit_iteration=implicit_iteration,
        path=path,
        sample_size=max(scan_ahead_size, 1),
    )
