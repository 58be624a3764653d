"""Path extraction and parsing for the expression under the cursor.

``extract_path_context`` decides where the sub-expression containing the
cursor starts, and which trailing term of it is a navigable path.
``parse_path`` turns that term into segments plus the identifier still
being typed. Neither function ever raises on incomplete input: anything it
cannot understand simply ends the path early.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass

from jqlive.application.autocomplete.brace_tracker import BraceTracker, is_word_char
from jqlive.application.autocomplete.scan_state import (
    ScanState,
    string_mask,
    top_level_positions,
)
from jqlive.domain.types import (
    ArrayIndex,
    ArrayIterator,
    BraceKind,
    Field,
    OptionalField,
    ParsedPath,
    PathSegment,
)

SUB_EXPRESSION_SEPARATORS = "|;,"
# Characters that end a path term when they appear at the term's depth
TERM_SEPARATORS = frozenset(" \t\r\n=<>!+-*/%")

_SIMPLE_IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_]*\Z")
_SLICE = re.compile(r"-?\d*\s*:\s*-?\d*\Z")


@dataclass(frozen=True, slots=True)
class PathContext:
    """Location of the path term that ends at the cursor.

    Attributes:
        prefix: Query text before the sub-expression boundary
        boundary: Offset where the current sub-expression starts
        term_start: Offset where the trailing path term starts
        text: The path term itself (``query[term_start:cursor]``)
    """

    prefix: str
    boundary: int
    term_start: int
    text: str


def is_simple_identifier(name: str) -> bool:
    """Whether ``name`` can follow a dot without quoting."""
    return bool(_SIMPLE_IDENTIFIER.match(name))


def extract_path_context(before_cursor: str, tracker: BraceTracker | None = None) -> PathContext | None:
    """
    Locate the path being typed at the end of ``before_cursor``.

    The sub-expression starts after the last top-level ``|``/``;``/``,``, or
    inside the innermost open bracket (after its last separator). Inside an
    object builder only the value half after the last colon is a path; key
    position yields None.

    Args:
        before_cursor: Query text up to the cursor
        tracker: Tracker already built over ``before_cursor``

    Returns:
        The path context, or None when no path can be typed at the cursor
    """
    if tracker is None or tracker.text != before_cursor:
        tracker = BraceTracker(before_cursor)

    frame = tracker.innermost
    if frame is None:
        start = 0
    elif frame.kind is BraceKind.OBJECT_BUILDER:
        colon = tracker.last_object_colon()
        if colon is None:
            return None
        start = colon + 1
    else:
        start = frame.pos + 1

    separators = top_level_positions(before_cursor, SUB_EXPRESSION_SEPARATORS, start)
    if separators:
        start = separators[-1] + 1

    term_start = _trailing_term_start(before_cursor, start)
    return PathContext(
        prefix=before_cursor[:start],
        boundary=start,
        term_start=term_start,
        text=before_cursor[term_start:],
    )


def _trailing_term_start(text: str, start: int) -> int:
    """Offset just past the last term separator at depth 0 after ``start``."""
    depth = 0
    term_start = start
    mask = string_mask(text)
    for i in range(start, len(text)):
        if mask[i]:
            continue
        ch = text[i]
        if ch in "([{":
            depth += 1
        elif ch in ")]}":
            if depth:
                depth -= 1
        elif depth == 0 and ch in TERM_SEPARATORS:
            term_start = i + 1
    return term_start


def parse_path(text: str) -> ParsedPath:
    """
    Parse a path term such as ``.users[0].na`` into segments and a partial.

    Recognised: ``.name``, ``.name?``, ``."quoted"``, ``.["literal"]``,
    ``[]``, ``[n]``, ``[-n]``, slices and closed function calls (both keep
    the shape of their input). A trailing identifier is the partial; a
    trailing separator leaves the partial empty. ``..`` and a leading
    ``$var`` make the path unanchored.
    """
    segments: list[PathSegment] = []
    partial = ""
    anchored = True
    i = 0
    n = len(text)

    while i < n and text[i].isspace():
        i += 1
    if i < n and text[i] == "$":
        anchored = False
        i += 1
        while i < n and is_word_char(text[i]):
            i += 1

    while i < n:
        ch = text[i]
        if ch == ".":
            if i + 1 < n and text[i + 1] == ".":
                anchored = False
                i += 2
                continue
            i += 1
            if i < n and text[i] == '"':
                end = _string_end(text, i)
                if end is None:
                    partial = text[i + 1 :]
                    break
                try:
                    name = json.loads(text[i : end + 1])
                except json.JSONDecodeError:
                    break
                i = end + 1
                segments.append(_field(name, text, i))
                if i < n and text[i] == "?":
                    i += 1
                continue
            start = i
            while i < n and is_word_char(text[i]):
                i += 1
            name = text[start:i]
            if i == n:
                partial = name
                break
            if name:
                segments.append(_field(name, text, i))
                if text[i] == "?":
                    i += 1
        elif ch == "[":
            end = _matching_close(text, i)
            if end is None:
                break
            segment = _bracket_segment(text[i + 1 : end].strip())
            i = end + 1
            optional = i < n and text[i] == "?"
            if optional:
                i += 1
            if segment is False:
                anchored = False
                break
            if segment is not None:
                if optional and isinstance(segment, Field):
                    segment = OptionalField(segment.name)
                segments.append(segment)
        elif ch == "(":
            end = _matching_close(text, i)
            if end is None:
                break
            i = end + 1
            if i < n and text[i] == "?":
                i += 1
        elif is_word_char(ch):
            start = i
            while i < n and is_word_char(text[i]):
                i += 1
            if i == n:
                partial = text[start:i]
                break
        elif ch == "?" or ch.isspace():
            i += 1
        else:
            break

    return ParsedPath(segments=tuple(segments), partial=partial, anchored=anchored)


def _field(name: str, text: str, after: int) -> PathSegment:
    if after < len(text) and text[after] == "?":
        return OptionalField(name)
    return Field(name)


def _bracket_segment(inner: str) -> PathSegment | None | bool:
    """Segment for the contents of ``[...]``.

    None for shape-preserving slices, False for expressions that cannot be
    followed statically.
    """
    if not inner:
        return ArrayIterator()
    if inner.startswith('"'):
        try:
            name = json.loads(inner)
        except json.JSONDecodeError:
            return False
        return Field(name) if isinstance(name, str) else False
    try:
        return ArrayIndex(int(inner))
    except ValueError:
        pass
    if _SLICE.match(inner):
        return None
    return False


def _string_end(text: str, quote: int) -> int | None:
    state = ScanState.NORMAL.advance(text[quote])
    for i in range(quote + 1, len(text)):
        state = state.advance(text[i])
        if not state.in_string:
            return i
    return None


def _matching_close(text: str, open_pos: int) -> int | None:
    depth = 0
    mask = string_mask(text)
    for i in range(open_pos, len(text)):
        if mask[i]:
            continue
        if text[i] in "([{":
            depth += 1
        elif text[i] in ")]}":
            depth -= 1
            if depth == 0:
                return i
    return None


def render_path(segments: tuple[PathSegment, ...] | list[PathSegment]) -> str:
    """Render segments back to jq syntax, e.g. ``.users[0].name``."""
    parts: list[str] = []
    for segment in segments:
        if isinstance(segment, (Field, OptionalField)):
            name = segment.name if is_simple_identifier(segment.name) else json.dumps(segment.name)
            parts.append(f".{name}")
            if isinstance(segment, OptionalField):
                parts.append("?")
        elif isinstance(segment, ArrayIterator):
            parts.append("[]" if parts else ".[]")
        elif isinstance(segment, ArrayIndex):
            parts.append(f"[{segment.index}]" if parts else f".[{segment.index}]")
    return "".join(parts) or "."
