"""Textual widgets for the jqlive TUI."""

from jqlive.presentation.widgets.autocomplete import JqAutoComplete
from jqlive.presentation.widgets.function_help import FunctionHelp
from jqlive.presentation.widgets.query_input import QueryInput
from jqlive.presentation.widgets.results_panel import ResultsPanel
from jqlive.presentation.widgets.status_bar import StatusBar

__all__ = ["FunctionHelp", "JqAutoComplete", "QueryInput", "ResultsPanel", "StatusBar"]
