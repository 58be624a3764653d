"""Types describing where the cursor sits inside a query."""

from dataclasses import dataclass
from enum import Enum

__all__ = ["BraceKind", "Frame", "EntryContext", "Certainty"]


class BraceKind(Enum):
    """Kind of an unclosed bracket in the query text."""

    GROUPING = "grouping"
    ARRAY_BUILDER = "array_builder"
    OBJECT_BUILDER = "object_builder"
    INDEX = "index"


@dataclass(frozen=True, slots=True)
class Frame:
    """An open bracket at the cursor.

    ``pos`` is the offset of the opening character. ``function_name`` is the
    identifier directly preceding a ``(``, if any.
    """

    pos: int
    kind: BraceKind
    function_name: str | None = None


class EntryContext(Enum):
    """Whether the cursor is inside a ``{key, value}`` producing construct."""

    NONE = "none"
    DIRECT = "direct"
    OPAQUE_VALUE = "opaque_value"


class Certainty(Enum):
    """Whether tree navigation can be trusted to produce field names."""

    DETERMINISTIC = "deterministic"
    NON_DETERMINISTIC = "non_deterministic"
