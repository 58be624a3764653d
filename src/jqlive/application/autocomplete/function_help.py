"""Help for the jq function the cursor is on or inside of."""

from __future__ import annotations

from jqlive.application.autocomplete.brace_tracker import BraceTracker, is_word_char
from jqlive.application.autocomplete.builtins import BUILTINS_BY_NAME, JqBuiltin
from jqlive.application.autocomplete.scan_state import string_mask


def _word_at(text: str, cursor: int) -> tuple[int, str]:
    start = cursor
    while start > 0 and is_word_char(text[start - 1]):
        start -= 1
    end = cursor
    while end < len(text) and is_word_char(text[end]):
        end += 1
    return start, text[start:end]


def find_function_help(query: str, cursor: int) -> JqBuiltin | None:
    """
    The built-in whose help applies at ``cursor``.

    A function name under the cursor wins; otherwise the function whose
    argument list the cursor sits in, e.g. ``select`` for ``map(select(.a``.
    Field names (``.keys``), variables and text inside strings are ignored.
    """
    cursor = max(0, min(cursor, len(query)))
    mask = string_mask(query)

    start, word = _word_at(query, cursor)
    if word and not mask[start] and (start == 0 or query[start - 1] not in ".$@"):
        builtin = BUILTINS_BY_NAME.get(word)
        if builtin is not None:
            return builtin

    if string_mask(query[:cursor] + " ")[-1]:
        return None
    name = BraceTracker(query[:cursor]).innermost_function()
    if name is None:
        return None
    return BUILTINS_BY_NAME.get(name)
