"""Runs queries through the jq executable."""

import asyncio
import re
import shutil

from jqlive.domain.errors import JqNotFoundError, QueryEvaluationError
from jqlive.domain.types import Diagnostic
from jqlive.logger import get_logger
from jqlive.utils import shorten

logger = get_logger("jq.executor")

_LOCATION = re.compile(r"line (\d+)(?:, column (\d+))?")
_PREFIX = re.compile(r"^jq: (?:error(?: \(at [^)]*\))?: )?")


def parse_diagnostic(stderr: str) -> Diagnostic:
    """
    Turn jq's stderr into a Diagnostic.

    The message is the first non-empty line without the ``jq: error:``
    prefix; the location comes from a ``line N, column M`` fragment anywhere
    in the output.
    """
    lines = [line.strip() for line in stderr.splitlines() if line.strip()]
    if not lines:
        return Diagnostic("jq exited with an error")

    message = _PREFIX.sub("", lines[0]) or lines[0]
    location = _LOCATION.search(stderr)
    if location is None:
        return Diagnostic(message)
    column = int(location.group(2)) if location.group(2) else None
    return Diagnostic(message, line=int(location.group(1)), column=column)


class JqExecutor:
    """
    QueryExecutor backed by ``jq --color-output``.

    The document is written to jq's stdin on every run; jq's colour codes are
    kept so the results panel can render them.
    """

    def __init__(self, binary: str = "jq", timeout: float = 5.0):
        self._binary = binary
        self._timeout = timeout

    @property
    def binary(self) -> str:
        return self._binary

    def resolve(self) -> str:
        """
        Locate the jq binary.

        Raises:
            JqNotFoundError: If the binary is not on PATH
        """
        path = shutil.which(self._binary)
        if path is None:
            raise JqNotFoundError(self._binary)
        return path

    async def execute(self, query: str, document: str) -> str:
        """Run ``query`` against ``document``; see QueryExecutor.execute."""
        filter_text = query if query.strip() else "."
        try:
            process = await asyncio.create_subprocess_exec(
                self._binary,
                "--color-output",
                filter_text,
                stdin=asyncio.subprocess.PIPE,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except FileNotFoundError as e:
            raise JqNotFoundError(self._binary) from e

        try:
            stdout, stderr = await asyncio.wait_for(
                process.communicate(document.encode("utf-8")),
                timeout=self._timeout,
            )
        except asyncio.TimeoutError:
            process.kill()
            await process.wait()
            logger.warning(f"jq timed out after {self._timeout}s: {shorten(filter_text)!r}")
            raise QueryEvaluationError(Diagnostic(f"Query timed out after {self._timeout:g}s"))

        if process.returncode != 0:
            diagnostic = parse_diagnostic(stderr.decode("utf-8", errors="replace"))
            logger.debug(f"jq exited with {process.returncode}: {diagnostic}")
            raise QueryEvaluationError(diagnostic)

        return stdout.decode("utf-8", errors="replace")
