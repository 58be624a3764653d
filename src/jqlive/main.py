import os
import sys
from pathlib import Path
from typing import Optional

import typer

from jqlive.application.autocomplete import SuggestionEngine
from jqlive.application.config import AppConfig, load_config
from jqlive.application.document_cache import DocumentCache
from jqlive.application.query_pipeline import QueryPipeline
from jqlive.domain.errors import InvalidDocumentError, JqNotFoundError
from jqlive.domain.events import EventBus
from jqlive.infrastructure.jq import JqExecutor
from jqlive.logger import get_logger, setup_logger
from jqlive.presentation.tui import JqLiveApp

cli = typer.Typer(
    name="jqlive",
    help="Interactive jq with live results and context-aware completions",
    epilog="""
    Examples:
    $ jqlive data.json
    $ curl -s https://api.github.com/repos/jqlang/jq | jqlive --scan-ahead 5
    """,
    add_completion=False,
)


def read_document(file: Optional[Path]) -> str:
    """Read the input document from ``file`` or from piped stdin."""
    if file is not None:
        return file.read_text(encoding="utf-8")
    if sys.stdin.isatty():
        raise typer.BadParameter("Provide a JSON file or pipe JSON on stdin.", param_hint="FILE")
    return sys.stdin.read()


def reattach_terminal() -> None:
    """Point stdin back at the terminal after a document was piped in."""
    if sys.stdin.isatty():
        return
    tty_fd = os.open("/dev/tty", os.O_RDONLY)
    os.dup2(tty_fd, 0)
    os.close(tty_fd)
    sys.stdin = open(0, "r", closefd=False)


def apply_overrides(
    config: AppConfig,
    debug: bool,
    scan_ahead: Optional[int],
    jq_binary: Optional[str],
    timeout: Optional[float],
) -> AppConfig:
    if debug:
        config.log_level = "DEBUG"
    if scan_ahead is not None:
        config.scan_ahead = scan_ahead > 1
        config.array_sample_size = scan_ahead
    if jq_binary:
        config.jq_binary = jq_binary
    if timeout is not None:
        config.query_timeout = timeout
    return config


@cli.command()
def main(
    file: Optional[Path] = typer.Argument(
        None, exists=True, dir_okay=False, readable=True, help="JSON file (default: stdin)"
    ),
    query: str = typer.Option("", "--query", "-q", help="Initial query"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
    scan_ahead: Optional[int] = typer.Option(
        None, "--scan-ahead", min=1, help="Union completion fields over the first N array elements"
    ),
    jq_binary: Optional[str] = typer.Option(None, "--jq", help="Path to the jq executable"),
    timeout: Optional[float] = typer.Option(None, "--timeout", min=0.1, help="Seconds before a jq run is killed"),
    print_query: bool = typer.Option(False, "--print-query", help="On Enter, print the query instead of its result"),
):
    """Edit a jq query against a JSON document and see results as you type."""
    config = apply_overrides(load_config(), debug, scan_ahead, jq_binary, timeout)
    setup_logger(log_file=config.log_file, log_level=config.log_level)
    logger = get_logger("main")

    executor = JqExecutor(binary=config.jq_binary, timeout=config.query_timeout)
    try:
        executor.resolve()
    except JqNotFoundError as e:
        typer.secho(str(e), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    document_text = read_document(file)
    try:
        cache = DocumentCache(document_text, sample_size=config.array_sample_size)
    except InvalidDocumentError as e:
        typer.secho(str(e), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    logger.info(
        f"Starting jqlive (jq={config.jq_binary}, scan_ahead={config.scan_ahead_size}, "
        f"timeout={config.query_timeout}s)"
    )

    event_bus = EventBus()
    pipeline = QueryPipeline(executor, cache, event_bus, config)
    engine = SuggestionEngine(cache, config)

    reattach_terminal()
    app = JqLiveApp(cache, pipeline, engine, event_bus, initial_query=query)
    accepted = app.run()

    if accepted is None:
        logger.info("Exited without accepting a query")
        return

    if print_query:
        typer.echo(accepted)
        return

    snapshot = cache.snapshot
    if (snapshot.query.strip() or ".") != (accepted.strip() or "."):
        logger.warning(f"Accepted query {accepted!r} has no published result; printing the last one")
    typer.echo(snapshot.plain, nl=not snapshot.plain.endswith("\n"))


def run():
    """Entry point for the jqlive script."""
    cli()


if __name__ == "__main__":
    run()
