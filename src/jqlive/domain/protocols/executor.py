"""Query executor protocol."""

from typing import Protocol

__all__ = ["QueryExecutor"]


class QueryExecutor(Protocol):
    """Protocol for evaluating a jq query against a document.

    Implementations run the evaluation without blocking the event loop.
    """

    async def execute(self, query: str, document: str) -> str:
        """Evaluate a query.

        Args:
            query: The jq filter. An empty query means the identity filter.
            document: The raw JSON document text fed to the evaluator

        Returns:
            The evaluator's standard output (may contain ANSI colour codes)

        Raises:
            QueryEvaluationError: If the evaluator reports a diagnostic or times out
            JqNotFoundError: If the evaluator executable is missing
        """
        ...
