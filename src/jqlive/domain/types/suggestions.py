"""Suggestion-related domain types."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

__all__ = ["SuggestionKind", "SuggestionContext", "FieldType", "Suggestion"]


class SuggestionKind(Enum):
    """Closed set of suggestion kinds, in display order."""

    FIELD = "field"
    PATTERN = "pattern"
    FUNCTION = "function"
    OPERATOR = "operator"
    VARIABLE = "variable"

    @property
    def rank(self) -> int:
        return _KIND_ORDER.index(self)


_KIND_ORDER = list(SuggestionKind)


class SuggestionContext(Enum):
    """Kind of token being typed at the cursor."""

    FIELD = "field"
    FUNCTION = "function"
    OPERATOR = "operator"
    VARIABLE = "variable"
    NONE = "none"


@dataclass(frozen=True, slots=True)
class FieldType:
    """JSON type of a suggested field, e.g. ``string`` or ``array[object]``."""

    name: str
    element: FieldType | None = None

    @classmethod
    def of(cls, value: Any) -> FieldType:
        if value is None:
            return cls("null")
        if isinstance(value, bool):
            return cls("boolean")
        if isinstance(value, (int, float)):
            return cls("number")
        if isinstance(value, str):
            return cls("string")
        if isinstance(value, dict):
            return cls("object")
        if isinstance(value, list):
            return cls("array", cls.of(value[0]) if value else None)
        return cls("unknown")

    def __str__(self) -> str:
        if self.element is not None:
            return f"{self.name}[{self.element}]"
        return self.name


@dataclass(frozen=True, slots=True)
class Suggestion:
    """A single completion candidate. Rebuilt on every keystroke."""

    text: str
    kind: SuggestionKind
    field_type: FieldType | None = None
    description: str | None = None
    needs_parens: bool = False

    @property
    def detail(self) -> str:
        """Short annotation shown next to the suggestion."""
        if self.field_type is not None:
            return str(self.field_type)
        return self.description or ""
