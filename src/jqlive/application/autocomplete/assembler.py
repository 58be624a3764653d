"""Builds the ranked suggestion list for a classification."""

from __future__ import annotations

import re
from typing import Any, Iterable

from jqlive.application.autocomplete.builtins import (
    INFIX_OPERATORS,
    PREFIX_KEYWORDS,
    JqBuiltin,
    filter_functions,
    filter_operators,
)
from jqlive.application.autocomplete.classifier import Classification
from jqlive.application.autocomplete.path_parser import is_simple_identifier
from jqlive.application.autocomplete.scan_state import string_mask
from jqlive.domain.types import (
    Certainty,
    EntryContext,
    FieldType,
    Suggestion,
    SuggestionContext,
    SuggestionKind,
)

DEFAULT_MAX_SUGGESTIONS = 10
BUILTIN_VARIABLES = ("$ENV", "$__loc__")

_AS_BINDING = re.compile(r"\bas\b")
_DEF_PARAMS = re.compile(r"\bdef\s+[A-Za-z_][A-Za-z0-9_]*\s*\(([^)]*)\)")
_VARIABLE = re.compile(r"\$[A-Za-z_][A-Za-z0-9_]*")

_KEYWORD_NAMES = frozenset(builtin.name for builtin in PREFIX_KEYWORDS + INFIX_OPERATORS)

ENTRY_SUGGESTIONS = (
    Suggestion("key", SuggestionKind.FIELD, description="entry key"),
    Suggestion("value", SuggestionKind.FIELD, description="entry value (opaque)"),
)


def format_field_name(name: str) -> str:
    """Field name as typed after a dot; names that are not identifiers get quoted."""
    if is_simple_identifier(name):
        return name
    return '"' + name.replace("\\", "\\\\").replace('"', '\\"') + '"'


def field_suggestions(targets: Iterable[Any], sample_size: int = 1) -> list[Suggestion]:
    """Suggestions derived from the shape of the navigated values.

    Object keys become fields; arrays offer ``[]`` plus ``[].field`` for the
    fields of their first ``sample_size`` object elements. Scalars have
    nothing to offer.
    """
    fields: dict[str, FieldType] = {}
    element_fields: dict[str, FieldType] = {}
    has_array = False
    for target in targets:
        if isinstance(target, dict):
            for name, value in target.items():
                fields.setdefault(name, FieldType.of(value))
        elif isinstance(target, list):
            has_array = True
            for element in target[: max(sample_size, 1)]:
                if isinstance(element, dict):
                    for name, value in element.items():
                        element_fields.setdefault(name, FieldType.of(value))

    suggestions = [
        Suggestion(format_field_name(name), SuggestionKind.FIELD, field_type=field_type)
        for name, field_type in fields.items()
    ]
    if has_array:
        suggestions.append(Suggestion("[]", SuggestionKind.PATTERN, description="iterate elements"))
        suggestions.extend(
            Suggestion(f"[].{format_field_name(name)}", SuggestionKind.PATTERN, field_type=field_type)
            for name, field_type in element_fields.items()
        )
    return suggestions


def fallback_suggestions(all_field_names: Iterable[str]) -> list[Suggestion]:
    return [Suggestion(format_field_name(name), SuggestionKind.FIELD) for name in all_field_names]


def _builtin_suggestion(builtin: JqBuiltin) -> Suggestion:
    kind = SuggestionKind.OPERATOR if builtin.name in _KEYWORD_NAMES else SuggestionKind.FUNCTION
    return Suggestion(
        builtin.name,
        kind,
        description=builtin.signature,
        needs_parens=builtin.needs_parens,
    )


def bound_variables(query: str, cursor: int) -> list[str]:
    """
    Variable names bound anywhere in ``query``.

    Covers ``... as $x``, destructuring patterns (``as [$a, {b: $c}]``) and
    ``def f($x)`` parameters. The variable token under the cursor is left
    out so that a name is not suggested to itself while being typed.
    """
    mask = string_mask(query)
    names: set[str] = set()

    def add(match: re.Match, offset: int = 0) -> None:
        start = match.start() + offset
        end = match.end() + offset
        if mask[start] or start < cursor <= end:
            return
        names.add(match.group())

    for binding in _AS_BINDING.finditer(query):
        if mask[binding.start()]:
            continue
        pattern_end = _binding_pattern_end(query, mask, binding.end())
        for variable in _VARIABLE.finditer(query, binding.end(), pattern_end):
            add(variable)

    for definition in _DEF_PARAMS.finditer(query):
        if mask[definition.start()]:
            continue
        for variable in _VARIABLE.finditer(definition.group(1)):
            add(variable, definition.start(1))

    return sorted(names)


def _binding_pattern_end(query: str, mask: list[bool], start: int) -> int:
    """End of the pattern after ``as``: the next ``|`` or ``(`` outside brackets."""
    depth = 0
    for i in range(start, len(query)):
        if mask[i]:
            continue
        ch = query[i]
        if ch in "[{":
            depth += 1
        elif ch in "]}":
            depth -= 1
        elif depth <= 0 and ch in "|(":
            return i
    return len(query)


class SuggestionAssembler:
    """Turns a classification into at most ``max_suggestions`` ranked suggestions."""

    def __init__(self, max_suggestions: int = DEFAULT_MAX_SUGGESTIONS) -> None:
        self.max_suggestions = max_suggestions

    def assemble(
        self,
        classification: Classification,
        all_field_names: Iterable[str],
        query: str = "",
        cursor: int = 0,
    ) -> list[Suggestion]:
        context = classification.context
        partial = classification.partial

        if context is SuggestionContext.FIELD:
            candidates = self._field_candidates(classification, all_field_names)
        elif context is SuggestionContext.FUNCTION:
            candidates = [_builtin_suggestion(builtin) for builtin in filter_functions(partial)]
        elif context is SuggestionContext.OPERATOR:
            candidates = [_builtin_suggestion(builtin) for builtin in filter_operators(partial)]
        elif context is SuggestionContext.VARIABLE:
            names = bound_variables(query, cursor) + list(BUILTIN_VARIABLES)
            candidates = [Suggestion(name, SuggestionKind.VARIABLE) for name in names]
        else:
            candidates = []

        return self._rank(candidates, partial)

    def _field_candidates(
        self,
        classification: Classification,
        all_field_names: Iterable[str],
    ) -> list[Suggestion]:
        if classification.entry_context is EntryContext.DIRECT:
            return list(ENTRY_SUGGESTIONS)
        if classification.certainty is Certainty.DETERMINISTIC and classification.targets:
            return field_suggestions(classification.targets, classification.sample_size)
        return fallback_suggestions(all_field_names)

    def _rank(self, candidates: list[Suggestion], partial: str) -> list[Suggestion]:
        seen: set[str] = set()
        ranked = []
        for suggestion in candidates:
            if partial and not suggestion.text.startswith(partial):
                continue
            if suggestion.text in seen:
                continue
            seen.add(suggestion.text)
            ranked.append(suggestion)
        ranked.sort(key=lambda s: (s.kind.rank, s.text))
        return ranked[: max(self.max_suggestions, 0)]
