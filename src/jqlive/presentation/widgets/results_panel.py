"""
ResultsPanel - scrollable view of the latest successful query result.
"""

from textual.widgets import RichLog

from jqlive.application.preprocess import ResultSnapshot


class ResultsPanel(RichLog):
    """
    Displays the pre-rendered text of a result snapshot.

    When the latest query failed, the previous result stays on screen,
    dimmed, until a new result is published.
    """

    BORDER_TITLE = "Result"

    def __init__(self, **kwargs):
        super().__init__(markup=False, highlight=False, auto_scroll=False, wrap=False, **kwargs)
        self.border_title = self.BORDER_TITLE
        self._request_id: int | None = None

    @property
    def request_id(self) -> int | None:
        """Id of the snapshot currently displayed."""
        return self._request_id

    def show_snapshot(self, snapshot: ResultSnapshot) -> None:
        self.set_stale(False)
        if snapshot.request_id == self._request_id:
            return
        self._request_id = snapshot.request_id
        self.clear()
        self.write(snapshot.rendered, expand=True)
        self.scroll_home(animate=False)

    def set_stale(self, stale: bool) -> None:
        self.set_class(stale, "-stale")
