"""
QueryInput - single-line editor for the jq filter.
"""

from textual.widgets import Input

from jqlive.logger import get_logger

logger = get_logger("query_input")


class QueryInput(Input):
    """
    Input field holding the jq query.

    The JqAutoComplete overlay targets this widget; the app listens to its
    Changed messages to evaluate the query.
    """

    BORDER_TITLE = "Query"

    def __init__(self, value: str = "", **kwargs):
        super().__init__(
            value=value,
            placeholder="jq filter, e.g. .items[] | select(.active)",
            **kwargs,
        )
        self.border_title = self.BORDER_TITLE
