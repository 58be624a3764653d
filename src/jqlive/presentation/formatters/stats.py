"""
Formatting helpers for result statistics and evaluation errors.
"""

from __future__ import annotations

from typing import Any

from rich.markup import escape
from rich.text import Text

from jqlive.application.autocomplete.builtins import JqBuiltin
from jqlive.application.preprocess import ResultSnapshot
from jqlive.domain.types import Diagnostic

ELEMENT_TYPES_CHECKED = 10


def _type_name(value: Any) -> str:
    if isinstance(value, dict):
        return "objects"
    if isinstance(value, list):
        return "arrays"
    if isinstance(value, str):
        return "strings"
    if isinstance(value, bool):
        return "booleans"
    if isinstance(value, (int, float)):
        return "numbers"
    return "nulls"


def describe_array_elements(items: list[Any]) -> str:
    """Element type of an array judged from its first few elements ("mixed" if they differ)."""
    names = {_type_name(item) for item in items[:ELEMENT_TYPES_CHECKED]}
    if len(names) == 1:
        return names.pop()
    return "mixed"


def format_result_stats(snapshot: ResultSnapshot) -> str:
    """
    One-word summary of a result, e.g. ``Array [3 objects]`` or ``Stream [5]``.

    Derived from the already-parsed snapshot.
    """
    if snapshot.value_count > 1:
        return f"Stream [{snapshot.value_count}]"

    value = snapshot.value
    if isinstance(value, list):
        if not value:
            return "Array [0]"
        return f"Array [{len(value)} {describe_array_elements(value)}]"
    if isinstance(value, dict):
        return "Object"
    if isinstance(value, str):
        return "String"
    if isinstance(value, bool):
        return "Boolean"
    if isinstance(value, (int, float)):
        return "Number"
    return "null"


def format_stats_line(snapshot: ResultSnapshot, stale: bool = False) -> Text:
    """Stats bar content: result summary plus line metrics, dimmed when stale."""
    line = Text()
    line.append(format_result_stats(snapshot), style="bold cyan")
    line.append(f"  {snapshot.line_count} lines", style="dim")
    line.append(f"  width {snapshot.max_width}", style="dim")
    if stale:
        line.stylize("dim")
        line.append("  (showing last successful result)", style="dim italic")
    return line


def format_diagnostic_markup(diagnostic: Diagnostic) -> str:
    """Return the Rich markup for an evaluation error."""
    return f"[bold red]Error:[/] [red]{escape(str(diagnostic))}[/]"


def format_function_help(builtin: JqBuiltin) -> Text:
    """Help line for a jq function: signature followed by its description."""
    line = Text()
    line.append(builtin.signature, style="bold magenta")
    line.append(f"  {builtin.description}", style="dim")
    return line
