"""Exceptions raised by jqlive."""

from jqlive.domain.types.results import Diagnostic

__all__ = [
    "JqLiveError",
    "InvalidDocumentError",
    "JqNotFoundError",
    "QueryEvaluationError",
]


class JqLiveError(Exception):
    """Base class for jqlive errors."""


class InvalidDocumentError(JqLiveError):
    """The input document is not valid JSON."""


class JqNotFoundError(JqLiveError):
    """The jq executable could not be located."""

    def __init__(self, binary: str = "jq"):
        super().__init__(
            f"'{binary}' was not found. Install jq (https://jqlang.github.io/jq/) "
            f"or point JQLIVE_JQ_BINARY at it."
        )
        self.binary = binary


class QueryEvaluationError(JqLiveError):
    """jq rejected the query or failed while evaluating it."""

    def __init__(self, diagnostic: Diagnostic):
        super().__init__(str(diagnostic))
        self.diagnostic = diagnostic
