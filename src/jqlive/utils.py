"""
Utility functions for the jqlive application.
"""

import os
from pathlib import Path


def get_state_dir() -> str:
    """
    Get the directory jqlive writes its state (logs) to, creating it if needed.

    Honours ``JQLIVE_STATE_DIR``; defaults to ``~/.jqlive``.

    Returns:
        Absolute path to the state directory
    """
    state_dir = Path(os.getenv("JQLIVE_STATE_DIR", "~/.jqlive")).expanduser()
    state_dir.mkdir(parents=True, exist_ok=True)
    return str(state_dir.resolve())


def shorten(text: str, limit: int = 60) -> str:
    """
    Shorten text for log lines and status messages.

    Args:
        text: Text to shorten
        limit: Maximum number of characters to keep

    Returns:
        The text itself if short enough, otherwise a prefix ending in "..."
    """
    if len(text) <= limit:
        return text
    return text[: max(limit - 3, 0)] + "..."
