"""Detection of ``{key, value}`` entry contexts.

Inside ``with_entries(...)``, or after ``to_entries`` once its array is
iterated (``.[]`` or a per-element function), the input is an entry object
whose only fields are ``key`` and ``value``. Once ``.value`` is piped onward
the shape is whatever the document holds under arbitrary keys, which cannot
be navigated statically.
"""

from __future__ import annotations

import re

from jqlive.application.autocomplete.brace_tracker import BraceTracker, is_word_char
from jqlive.application.autocomplete.builtins import is_element_context
from jqlive.application.autocomplete.scan_state import string_mask
from jqlive.domain.types import BraceKind, EntryContext
from jqlive.logger import get_logger

logger = get_logger("autocomplete.entry_context")

_TO_ENTRIES = re.compile(r"\bto_entries\b")
_ITERATE = re.compile(r"\[\s*\]")
_VALUE_ACCESS = re.compile(r"\.value(?![A-Za-z0-9_])")


def detect_entry_context(query: str, cursor: int, tracker: BraceTracker | None = None) -> EntryContext:
    """
    Classify the cursor position with respect to entry-producing constructs.

    Args:
        query: Full query text
        cursor: Cursor offset into ``query``
        tracker: Tracker already built over ``query[:cursor]``

    Returns:
        DIRECT when the cursor works on the entry object itself,
        OPAQUE_VALUE when ``.value`` has been piped or iterated further,
        NONE otherwise (including ``.value.`` navigation)
    """
    text = query[:cursor]
    if tracker is None or tracker.text != text:
        tracker = BraceTracker(text)
    mask = string_mask(text)

    start = max(
        _with_entries_start(tracker) + _to_entries_start(text, mask, tracker),
        default=None,
    )
    if start is None:
        return EntryContext.NONE

    context = _classify_entry_body(text, mask, start, tracker)
    logger.debug(f"Entry context for {text!r}: {context.value} (body starts at {start})")
    return context


def _with_entries_start(tracker: BraceTracker) -> list[int]:
    starts = [
        frame.pos + 1
        for frame in tracker.frames
        if frame.kind is BraceKind.GROUPING and frame.function_name == "with_entries"
    ]
    return starts[-1:]


def _to_entries_start(text: str, mask: list[bool], tracker: BraceTracker) -> list[int]:
    """Body start of the nearest ``to_entries`` whose entries are being iterated."""
    open_positions = {frame.pos for frame in tracker.frames}
    starts = []
    for match in _TO_ENTRIES.finditer(text):
        if mask[match.start()] or not _enclosing_frames_open(text, mask, match.start(), open_positions):
            continue
        body = _entries_body_start(text, mask, match.end(), tracker)
        if body is not None:
            starts.append(body)
    return starts[-1:]


def _enclosing_frames_open(text: str, mask: list[bool], pos: int, open_positions: set[int]) -> bool:
    """Whether every bracket enclosing ``pos`` is still open at the end of ``text``."""
    stack: list[int] = []
    for i in range(pos):
        if mask[i]:
            continue
        if text[i] in "([{":
            stack.append(i)
        elif text[i] in ")]}" and stack:
            stack.pop()
    return all(opened in open_positions for opened in stack)


def _entries_body_start(text: str, mask: list[bool], after: int, tracker: BraceTracker) -> int | None:
    candidates = [
        frame.pos + 1
        for frame in tracker.frames
        if frame.pos >= after
        and frame.kind is BraceKind.GROUPING
        and is_element_context(frame.function_name)
    ]
    for match in _ITERATE.finditer(text, after):
        if not mask[match.start()]:
            candidates.append(match.end())
            break
    return min(candidates) if candidates else None


def _classify_entry_body(text: str, mask: list[bool], start: int, tracker: BraceTracker) -> EntryContext:
    for match in _VALUE_ACCESS.finditer(text, start):
        if mask[match.start()]:
            continue
        if any(
            frame.pos > match.end()
            and frame.kind is BraceKind.GROUPING
            and is_element_context(frame.function_name)
            for frame in tracker.frames
        ):
            return EntryContext.OPAQUE_VALUE
        following = _next_significant(text, match.end())
        if following == "|":
            return EntryContext.OPAQUE_VALUE
        if following in (".", "["):
            return EntryContext.NONE
    return EntryContext.DIRECT


def _next_significant(text: str, pos: int) -> str | None:
    i = pos
    while i < len(text) and (text[i].isspace() or text[i] == "?"):
        i += 1
    return text[i] if i < len(text) else None
