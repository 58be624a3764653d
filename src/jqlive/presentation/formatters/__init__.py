"""Formatting helpers for the results and status displays."""

from jqlive.presentation.formatters.stats import (
    describe_array_elements,
    format_diagnostic_markup,
    format_function_help,
    format_result_stats,
    format_stats_line,
)

__all__ = [
    "describe_array_elements",
    "format_diagnostic_markup",
    "format_function_help",
    "format_result_stats",
    "format_stats_line",
]
