"""
StatusBar - result statistics or the latest evaluation error.
"""

from textual.widgets import Static

from jqlive.application.preprocess import ResultSnapshot
from jqlive.domain.types import Diagnostic
from jqlive.presentation.formatters import format_diagnostic_markup, format_stats_line


class StatusBar(Static):
    """One-line status below the results panel."""

    def show_stats(self, snapshot: ResultSnapshot) -> None:
        self.remove_class("-error")
        self.update(format_stats_line(snapshot))

    def show_error(self, diagnostic: Diagnostic) -> None:
        self.add_class("-error")
        self.update(format_diagnostic_markup(diagnostic))
