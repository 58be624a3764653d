"""jq subprocess adapter."""

from jqlive.infrastructure.jq.executor import JqExecutor, parse_diagnostic

__all__ = ["JqExecutor", "parse_diagnostic"]
