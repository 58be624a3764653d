"""Shared domain types."""

from jqlive.domain.types.context import BraceKind, Certainty, EntryContext, Frame
from jqlive.domain.types.paths import (
    ArrayIndex,
    ArrayIterator,
    Field,
    OptionalField,
    ParsedPath,
    PathSegment,
)
from jqlive.domain.types.results import Diagnostic, ResultType
from jqlive.domain.types.suggestions import (
    FieldType,
    Suggestion,
    SuggestionContext,
    SuggestionKind,
)

__all__ = [
    "ArrayIndex",
    "ArrayIterator",
    "BraceKind",
    "Certainty",
    "Diagnostic",
    "EntryContext",
    "Field",
    "FieldType",
    "Frame",
    "OptionalField",
    "ParsedPath",
    "PathSegment",
    "ResultType",
    "Suggestion",
    "SuggestionContext",
    "SuggestionKind",
]
