"""Result-related domain types."""

from dataclasses import dataclass
from enum import Enum

__all__ = ["ResultType", "Diagnostic"]


class ResultType(Enum):
    """Shape of the first value produced by a query.

    ``DESTRUCTURED_OBJECTS`` marks output that is a stream of several values
    whose first one is an object (e.g. the output of ``.[]`` over an array of
    objects). It changes how completions navigate the cached result.
    """

    OBJECT = "object"
    ARRAY = "array"
    ARRAY_OF_OBJECTS = "array_of_objects"
    DESTRUCTURED_OBJECTS = "destructured_objects"
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NULL = "null"


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """A human-readable evaluation error with an optional location."""

    message: str
    line: int | None = None
    column: int | None = None

    def __str__(self) -> str:
        if self.line is None:
            return self.message
        if self.column is None:
            return f"{self.message} (line {self.line})"
        return f"{self.message} (line {self.line}, column {self.column})"
