"""Protocols implemented outside the domain layer."""

from jqlive.domain.protocols.executor import QueryExecutor

__all__ = ["QueryExecutor"]
