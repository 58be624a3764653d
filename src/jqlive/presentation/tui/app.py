"""
JqLiveApp - Main Textual application.
"""

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container
from textual.widgets import Footer, Header, Input

from jqlive.application.autocomplete import SuggestionEngine
from jqlive.application.document_cache import DocumentCache
from jqlive.application.query_pipeline import QueryPipeline
from jqlive.domain.events import EventBus, QueryFailed, QueryResultPublished
from jqlive.logger import get_logger
from jqlive.presentation.widgets import FunctionHelp, JqAutoComplete, QueryInput, ResultsPanel, StatusBar

logger = get_logger("jqlive_tui")


class JqLiveApp(App[str]):
    """
    The main jqlive TUI application.

    Layout:
    ┌─────────────────────────────────────────┐
    │               Header                    │
    ├─────────────────────────────────────────┤
    │          Results Panel                  │
    │          (scrollable)                   │
    ├─────────────────────────────────────────┤
    │  Status (stats or error)                │
    │  Function help (when on a function)     │
    ├─────────────────────────────────────────┤
    │          Query Input                    │
    ├─────────────────────────────────────────┤
    │               Footer                    │
    └─────────────────────────────────────────┘

    Pressing Enter exits and returns the current query.
    """

    TITLE = "jqlive"
    SUB_TITLE = "Interactive jq"

    CSS_PATH = "styles.tcss"

    BINDINGS = [
        Binding("ctrl+q", "quit", "Quit", priority=True),
        Binding("ctrl+c", "quit", "Quit", priority=True, show=False),
        Binding("ctrl+l", "clear_query", "Clear Query"),
    ]

    def __init__(
        self,
        cache: DocumentCache,
        pipeline: QueryPipeline,
        engine: SuggestionEngine,
        event_bus: EventBus,
        initial_query: str = "",
    ):
        """
        Initialize the application.

        Args:
            cache: Document cache shared with the pipeline and the engine
            pipeline: Background query pipeline (started on mount)
            engine: Suggestion engine used by the completion overlay
            event_bus: Bus the pipeline publishes its outcomes on
            initial_query: Query placed in the input at startup
        """
        super().__init__()
        self.cache = cache
        self.pipeline = pipeline
        self.engine = engine
        self.event_bus = event_bus
        self._initial_query = initial_query

        self.event_bus.subscribe(QueryResultPublished, self._on_result_published)
        self.event_bus.subscribe(QueryFailed, self._on_query_failed)

    def compose(self) -> ComposeResult:
        """Create the UI layout."""
        yield Header()

        with Container(id="app-container"):
            yield ResultsPanel(id="results")
            yield StatusBar(id="status")
            yield FunctionHelp(id="help")
            yield QueryInput(value=self._initial_query, id="query")

        yield Footer()

    async def on_mount(self) -> None:
        """Called when the app is mounted."""
        logger.info("jqlive TUI mounted and ready")
        self._show_published()
        await self.pipeline.start()

        query_input = self._get_input()
        query_input.focus()
        self.watch(query_input, "cursor_position", self._on_cursor_moved, init=False)
        self._update_function_help()
        if self._initial_query:
            self.pipeline.submit(self._initial_query)

        self.call_after_refresh(self._mount_autocomplete)

    def _mount_autocomplete(self) -> None:
        self.mount(JqAutoComplete(self._get_input(), self.engine))

    async def on_unmount(self) -> None:
        await self.pipeline.stop()

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id != "query":
            return
        self.pipeline.submit(event.value)
        self._update_function_help()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id != "query":
            return
        logger.info(f"Query accepted: {event.value!r}")
        self.exit(event.value)

    def action_clear_query(self) -> None:
        self._get_input().value = ""

    def _on_result_published(self, event: QueryResultPublished) -> None:
        self._show_published()

    def _on_query_failed(self, event: QueryFailed) -> None:
        self._get_results().set_stale(True)
        self._get_status().show_error(event.diagnostic)

    def _on_cursor_moved(self, cursor_position: int) -> None:
        self._update_function_help()

    def _update_function_help(self) -> None:
        query_input = self._get_input()
        builtin = self.engine.function_help(query_input.value, query_input.cursor_position)
        self.query_one("#help", FunctionHelp).show_help(builtin)

    def _show_published(self) -> None:
        snapshot = self.cache.snapshot
        self._get_results().show_snapshot(snapshot)
        self._get_status().show_stats(snapshot)

    def _get_input(self) -> QueryInput:
        return self.query_one("#query", QueryInput)

    def _get_results(self) -> ResultsPanel:
        return self.query_one("#results", ResultsPanel)

    def _get_status(self) -> StatusBar:
        return self.query_one("#status", StatusBar)
