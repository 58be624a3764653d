"""Tests for the jqlive TUI wired to a scripted executor."""

import pytest

from jqlive.application.autocomplete import SuggestionEngine
from jqlive.application.config import AppConfig
from jqlive.application.query_pipeline import QueryPipeline
from jqlive.domain.events import EventBus
from jqlive.domain.types import Diagnostic
from jqlive.presentation.tui import JqLiveApp
from jqlive.presentation.widgets import FunctionHelp, QueryInput, ResultsPanel, StatusBar

DOCUMENT = {"user": {"name": "Ada", "age": 36}}


def make_app(cache, executor, initial_query: str = "") -> JqLiveApp:
    config = AppConfig(debounce_ms=0)
    event_bus = EventBus()
    pipeline = QueryPipeline(executor, cache, event_bus, config)
    engine = SuggestionEngine(cache, config)
    return JqLiveApp(cache, pipeline, engine, event_bus, initial_query=initial_query)


@pytest.mark.asyncio
async def test_app_shows_document_on_start(make_cache, stub_executor):
    """Test the identity result is displayed before any query runs."""
    cache = make_cache(DOCUMENT)
    app = make_app(cache, stub_executor())

    async with app.run_test() as pilot:
        await pilot.pause()
        assert app.query_one("#results", ResultsPanel).request_id == cache.snapshot.request_id
        assert app.pipeline.is_running


@pytest.mark.asyncio
async def test_app_evaluates_typed_query(make_cache, stub_executor):
    """Test editing the query publishes and displays its result."""
    cache = make_cache(DOCUMENT)
    executor = stub_executor(outputs={".user": '{"name": "Ada", "age": 36}\n'})
    app = make_app(cache, executor)

    async with app.run_test() as pilot:
        app.query_one("#query", QueryInput).value = ".user"
        await pilot.pause()
        assert await app.pipeline.wait_until_idle(timeout=2.0)
        await pilot.pause()

        assert cache.snapshot.query == ".user"
        assert app.query_one("#results", ResultsPanel).request_id == cache.snapshot.request_id
        assert not app.query_one("#status", StatusBar).has_class("-error")


@pytest.mark.asyncio
async def test_app_keeps_last_result_on_error(make_cache, stub_executor):
    """Test a failing query marks the result stale and shows the error."""
    cache = make_cache(DOCUMENT)
    executor = stub_executor(errors={".user |": Diagnostic("syntax error, unexpected end of file")})
    app = make_app(cache, executor)

    async with app.run_test() as pilot:
        before = cache.snapshot
        app.query_one("#query", QueryInput).value = ".user |"
        await pilot.pause()
        assert await app.pipeline.wait_until_idle(timeout=2.0)
        await pilot.pause()

        assert cache.snapshot is before
        assert app.query_one("#results", ResultsPanel).has_class("-stale")
        assert app.query_one("#status", StatusBar).has_class("-error")


@pytest.mark.asyncio
async def test_initial_query_is_evaluated(make_cache, stub_executor):
    cache = make_cache(DOCUMENT)
    executor = stub_executor(outputs={".user.name": '"Ada"\n'})
    app = make_app(cache, executor, initial_query=".user.name")

    async with app.run_test() as pilot:
        await pilot.pause()
        assert await app.pipeline.wait_until_idle(timeout=2.0)
        assert cache.last_result == "Ada"
        assert ".user.name" in executor.calls


@pytest.mark.asyncio
async def test_clear_query_binding(make_cache, stub_executor):
    cache = make_cache(DOCUMENT)
    app = make_app(cache, stub_executor(), initial_query=".user")

    async with app.run_test() as pilot:
        await pilot.press("ctrl+l")
        await pilot.pause()
        assert app.query_one("#query", QueryInput).value == ""


@pytest.mark.asyncio
async def test_function_help_follows_cursor(make_cache, stub_executor):
    """Test the help line shows the function the cursor is in."""
    app = make_app(make_cache(DOCUMENT), stub_executor())

    async with app.run_test() as pilot:
        query_input = app.query_one("#query", QueryInput)
        help_line = app.query_one("#help", FunctionHelp)
        assert not help_line.display

        query_input.value = "map(select(.name"
        query_input.cursor_position = len("map(select(")
        await pilot.pause()
        assert help_line.display
        assert help_line.builtin.name == "select"

        query_input.cursor_position = 1
        await pilot.pause()
        assert help_line.builtin.name == "map"

        query_input.value = ".user"
        query_input.cursor_position = len(".user")
        await pilot.pause()
        assert not help_line.display
