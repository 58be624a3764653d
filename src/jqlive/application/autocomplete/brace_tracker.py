"""Tracks unclosed brackets between the start of a query and the cursor."""

from __future__ import annotations

from jqlive.application.autocomplete.builtins import (
    EXPRESSION_KEYWORDS,
    is_element_context,
)
from jqlive.application.autocomplete.scan_state import code_chars, top_level_positions
from jqlive.domain.types import BraceKind, Frame

_CLOSERS = {")": "(", "]": "[", "}": "{"}
_OPENER_KIND = {"(": BraceKind.GROUPING, "{": BraceKind.OBJECT_BUILDER}


def is_word_char(ch: str) -> bool:
    return ch.isalnum() or ch == "_"


def word_before(text: str, pos: int) -> str:
    """Identifier ending right before ``pos``, skipping whitespace."""
    end = pos
    while end > 0 and text[end - 1].isspace():
        end -= 1
    start = end
    while start > 0 and is_word_char(text[start - 1]):
        start -= 1
    return text[start:end]


class BraceTracker:
    """Stack of brackets still open at the end of the scanned text.

    The tracker is rebuilt from scratch for every keystroke over the text
    before the cursor. Closing brackets that do not match the innermost open
    bracket are ignored, as are brackets inside string literals.
    """

    def __init__(self, text: str = "") -> None:
        self._text = ""
        self._frames: list[tuple[str, Frame]] = []
        self.rebuild(text)

    def rebuild(self, text: str) -> None:
        self._text = text
        self._frames = []
        for pos, ch in code_chars(text):
            if ch in "([{":
                self._frames.append((ch, self._open_frame(pos, ch)))
            elif ch in _CLOSERS:
                if self._frames and self._frames[-1][0] == _CLOSERS[ch]:
                    self._frames.pop()

    def _open_frame(self, pos: int, ch: str) -> Frame:
        if ch == "(":
            name = word_before(self._text, pos)
            return Frame(pos, BraceKind.GROUPING, name or None)
        if ch == "[":
            kind = BraceKind.ARRAY_BUILDER if self._starts_array_builder(pos) else BraceKind.INDEX
            return Frame(pos, kind)
        return Frame(pos, _OPENER_KIND[ch])

    def _starts_array_builder(self, pos: int) -> bool:
        """A ``[`` builds an array unless it directly follows a term it could index."""
        i = pos
        while i > 0 and self._text[i - 1].isspace():
            i -= 1
        if i == 0:
            return True
        prev = self._text[i - 1]
        if is_word_char(prev):
            return word_before(self._text, i) in EXPRESSION_KEYWORDS
        return prev not in '.])}?"'

    @property
    def text(self) -> str:
        return self._text

    @property
    def frames(self) -> tuple[Frame, ...]:
        return tuple(frame for _, frame in self._frames)

    @property
    def innermost(self) -> Frame | None:
        return self._frames[-1][1] if self._frames else None

    def innermost_function(self) -> str | None:
        frame = self.innermost
        if frame is None or frame.kind is not BraceKind.GROUPING:
            return None
        return frame.function_name

    def is_innermost_element_context(self) -> bool:
        """Whether the innermost frame is the argument of a per-element function."""
        return is_element_context(self.innermost_function())

    def is_object_value_position(self) -> bool:
        """Whether the end of the text is in the value half of the innermost object."""
        frame = self.innermost
        if frame is None or frame.kind is not BraceKind.OBJECT_BUILDER:
            return False
        return self.last_object_colon() is not None

    def last_object_colon(self) -> int | None:
        """Offset of the colon opening the current value in the innermost object.

        None when the text ends in key position (no colon after the last comma).
        """
        frame = self.innermost
        if frame is None or frame.kind is not BraceKind.OBJECT_BUILDER:
            return None
        separators = top_level_positions(self._text, ":,", frame.pos + 1)
        if not separators or self._text[separators[-1]] != ":":
            return None
        return separators[-1]
