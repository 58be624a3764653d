"""Path segment types produced by the path parser."""

from dataclasses import dataclass, field
from typing import Union

__all__ = [
    "Field",
    "OptionalField",
    "ArrayIterator",
    "ArrayIndex",
    "PathSegment",
    "ParsedPath",
]


@dataclass(frozen=True, slots=True)
class Field:
    """``.name`` access."""

    name: str


@dataclass(frozen=True, slots=True)
class OptionalField:
    """``.name?`` access."""

    name: str


@dataclass(frozen=True, slots=True)
class ArrayIterator:
    """Unindexed ``[]`` iteration."""


@dataclass(frozen=True, slots=True)
class ArrayIndex:
    """``[n]`` access; negative indices count from the end."""

    index: int


PathSegment = Union[Field, OptionalField, ArrayIterator, ArrayIndex]


@dataclass(frozen=True, slots=True)
class ParsedPath:
    """Segments typed so far plus the identifier still being typed.

    ``anchored`` is False when the expression does not start from the input
    value (``$var.x``, ``..``); such paths cannot be navigated.
    """

    segments: tuple[PathSegment, ...] = field(default_factory=tuple)
    partial: str = ""
    anchored: bool = True
