"""String-aware character scanning shared by the query analyzers."""

from enum import Enum
from typing import Iterator


class ScanState(Enum):
    """Lexical state while scanning jq text left to right."""

    NORMAL = "normal"
    IN_STRING = "in_string"
    IN_STRING_ESCAPE = "in_string_escape"

    def advance(self, ch: str) -> "ScanState":
        if self is ScanState.NORMAL:
            return ScanState.IN_STRING if ch == '"' else ScanState.NORMAL
        if self is ScanState.IN_STRING:
            if ch == "\\":
                return ScanState.IN_STRING_ESCAPE
            if ch == '"':
                return ScanState.NORMAL
            return ScanState.IN_STRING
        return ScanState.IN_STRING

    @property
    def in_string(self) -> bool:
        return self is not ScanState.NORMAL


def code_chars(text: str) -> Iterator[tuple[int, str]]:
    """Yield ``(index, char)`` for characters outside string literals.

    Quote characters themselves are not yielded.
    """
    state = ScanState.NORMAL
    for i, ch in enumerate(text):
        was_in_string = state.in_string
        state = state.advance(ch)
        if not was_in_string and not state.in_string:
            yield i, ch


def string_mask(text: str) -> list[bool]:
    """Per-character flags, True where the character belongs to a string literal."""
    mask = []
    state = ScanState.NORMAL
    for ch in text:
        was_in_string = state.in_string
        state = state.advance(ch)
        mask.append(was_in_string or state.in_string)
    return mask


def top_level_positions(text: str, chars: str, start: int = 0) -> list[int]:
    """Offsets of ``chars`` that sit at bracket depth 0 relative to ``start``.

    Occurrences inside string literals or inside brackets opened after
    ``start`` are skipped. ``start`` must not fall inside a string literal.
    """
    depth = 0
    positions = []
    for i, ch in code_chars(text[start:]):
        if ch in "([{":
            depth += 1
        elif ch in ")]}":
            if depth:
                depth -= 1
        elif depth == 0 and ch in chars:
            positions.append(start + i)
    return positions
