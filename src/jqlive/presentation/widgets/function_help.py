"""
FunctionHelp - signature and description of the jq function being edited.
"""

from textual.widgets import Static

from jqlive.application.autocomplete.builtins import JqBuiltin
from jqlive.presentation.formatters import format_function_help


class FunctionHelp(Static):
    """One-line help shown above the query while the cursor is on a function."""

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.builtin: JqBuiltin | None = None
        self.display = False

    def show_help(self, builtin: JqBuiltin | None) -> None:
        """Show help for ``builtin``; None hides the line."""
        if builtin == self.builtin:
            return
        self.builtin = builtin
        self.display = builtin is not None
        if builtin is not None:
            self.update(format_function_help(builtin))
