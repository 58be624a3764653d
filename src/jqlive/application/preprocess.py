"""Turns raw jq output into an immutable, render-ready result snapshot.

Everything the UI needs (parsed value, shape, rendered text, line metrics)
is computed exactly once here, off the event loop, so that rendering and
completion only ever read precomputed data.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from typing import Any

from rich.cells import cell_len
from rich.text import Text

from jqlive.domain.types import ResultType

_ANSI_ESCAPE = re.compile(r"\x1b\[[0-9;]*[A-Za-z]")
_DECODER = json.JSONDecoder()

DEFAULT_SAMPLE_SIZE = 10


@dataclass(frozen=True, slots=True)
class ParsedOutput:
    """Values decoded from jq output.

    Attributes:
        value: The first value (None also for empty output)
        sample: Up to N leading values, used when scanning ahead over a stream
        count: Number of values decoded
    """

    value: Any
    sample: tuple[Any, ...]
    count: int


@dataclass(frozen=True, slots=True)
class ResultSnapshot:
    """One successful evaluation, published to the cache as a single unit."""

    request_id: int
    query: str
    output: str
    plain: str
    value: Any
    result_type: ResultType
    stream_sample: tuple[Any, ...]
    value_count: int
    rendered: Text = field(compare=False)
    line_count: int
    max_width: int
    line_widths: tuple[int, ...]

    @property
    def is_stream(self) -> bool:
        return self.value_count > 1

    def navigation_roots(self, sample_size: int = 1) -> list[Any]:
        """Values suggestions navigate from when completing after a pipe."""
        if self.is_stream:
            return list(self.stream_sample[: max(sample_size, 1)])
        return [self.value]


def strip_ansi_codes(text: str) -> str:
    """Remove ANSI escape sequences (jq ``--color-output``)."""
    return _ANSI_ESCAPE.sub("", text)


def compute_line_metrics(text: str) -> tuple[int, int, tuple[int, ...]]:
    """
    Line count, maximum display width and per-line widths in a single pass.

    Widths are terminal cells, so wide characters count double. Only ``\\n``
    ends a line: jq emits U+2028 and similar separators raw inside strings.

    Returns:
        ``(line_count, max_width, line_widths)``; empty text yields ``(0, 0, ())``
    """
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    widths = []
    max_width = 0
    for line in lines:
        width = cell_len(line)
        widths.append(width)
        if width > max_width:
            max_width = width
    return len(widths), max_width, tuple(widths)


def parse_output(text: str, sample_size: int = DEFAULT_SAMPLE_SIZE) -> ParsedOutput:
    """
    Decode jq output, which is zero or more whitespace-separated JSON values.

    A single ``json.loads`` covers the usual one-value case; otherwise the
    text is decoded value by value. Decoding stops at the first malformed
    value, keeping whatever was decoded before it.
    """
    try:
        value = json.loads(text)
        return ParsedOutput(value=value, sample=(value,), count=1)
    except json.JSONDecodeError:
        pass

    sample: list[Any] = []
    count = 0
    pos = 0
    length = len(text)
    while True:
        while pos < length and text[pos].isspace():
            pos += 1
        if pos >= length:
            break
        try:
            value, pos = _DECODER.raw_decode(text, pos)
        except json.JSONDecodeError:
            break
        if len(sample) < max(sample_size, 1):
            sample.append(value)
        count += 1

    return ParsedOutput(value=sample[0] if sample else None, sample=tuple(sample), count=count)


def classify_result(parsed: ParsedOutput) -> ResultType:
    """Shape of the first value; a stream whose first value is an object is destructured."""
    value = parsed.value
    if parsed.count > 1 and isinstance(value, dict):
        return ResultType.DESTRUCTURED_OBJECTS
    if isinstance(value, dict):
        return ResultType.OBJECT
    if isinstance(value, list):
        if value and isinstance(value[0], dict):
            return ResultType.ARRAY_OF_OBJECTS
        return ResultType.ARRAY
    if isinstance(value, bool):
        return ResultType.BOOLEAN
    if isinstance(value, (int, float)):
        return ResultType.NUMBER
    if isinstance(value, str):
        return ResultType.STRING
    return ResultType.NULL


def process_output(
    request_id: int,
    query: str,
    output: str,
    sample_size: int = DEFAULT_SAMPLE_SIZE,
) -> ResultSnapshot:
    """Build the snapshot for one successful evaluation. Blocking; run it off the event loop."""
    plain = strip_ansi_codes(output)
    parsed = parse_output(plain, sample_size)
    line_count, max_width, line_widths = compute_line_metrics(plain)
    return ResultSnapshot(
        request_id=request_id,
        query=query,
        output=output,
        plain=plain,
        value=parsed.value,
        result_type=classify_result(parsed),
        stream_sample=parsed.sample,
        value_count=parsed.count,
        rendered=Text.from_ansi(output),
        line_count=line_count,
        max_width=max_width,
        line_widths=line_widths,
    )
