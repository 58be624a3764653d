"""Walks parsed path segments over JSON values.

JSON ``null`` is Python ``None``, so a missing location is reported with the
``MISSING`` sentinel instead.
"""

from __future__ import annotations

from typing import Any, Iterable, Sequence

from jqlive.domain.types import ArrayIndex, ArrayIterator, Field, OptionalField, PathSegment

ARRAY_SAMPLE_SIZE = 10
MAX_NAVIGATED_VALUES = 100


class _Missing:
    """Marker for a path that does not exist in the navigated value."""

    _instance: _Missing | None = None

    def __new__(cls) -> _Missing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()


def _step(value: Any, segment: PathSegment) -> Any:
    if isinstance(segment, (Field, OptionalField)):
        if isinstance(value, dict) and segment.name in value:
            return value[segment.name]
        return MISSING
    if isinstance(segment, ArrayIterator):
        if isinstance(value, list) and value:
            return value[0]
        return MISSING
    if isinstance(segment, ArrayIndex):
        if not isinstance(value, list):
            return MISSING
        index = segment.index if segment.index >= 0 else len(value) + segment.index
        if 0 <= index < len(value):
            return value[index]
        return MISSING
    return MISSING


def navigate(root: Any, segments: Sequence[PathSegment]) -> Any:
    """
    Follow ``segments`` from ``root``.

    ``ArrayIterator`` follows the first element only, keeping the cost
    proportional to the path length.

    Returns:
        The value at the path, or MISSING on the first type mismatch,
        missing key or out-of-range index
    """
    current = root
    for segment in segments:
        current = _step(current, segment)
        if current is MISSING:
            return MISSING
    return current


def navigate_multi(
    roots: Iterable[Any],
    segments: Sequence[PathSegment],
    sample_size: int = ARRAY_SAMPLE_SIZE,
) -> list[Any]:
    """
    Follow ``segments`` from several roots, fanning out at array iterators.

    Each ``ArrayIterator`` contributes at most ``sample_size`` elements per
    array, and at most MAX_NAVIGATED_VALUES values are carried between steps,
    so the cost is bounded regardless of array sizes.

    Returns:
        Every value reached; empty when the path exists nowhere
    """
    sample_size = max(sample_size, 1)
    current = []
    for root in roots:
        current.append(root)
        if len(current) >= MAX_NAVIGATED_VALUES:
            break

    for segment in segments:
        reached: list[Any] = []
        for value in current:
            if isinstance(segment, ArrayIterator):
                if isinstance(value, list):
                    reached.extend(value[:sample_size])
            else:
                result = _step(value, segment)
                if result is not MISSING:
                    reached.append(result)
            if len(reached) >= MAX_NAVIGATED_VALUES:
                break
        current = reached[:MAX_NAVIGATED_VALUES]
        if not current:
            break
    return current
