"""Configuration for the jqlive application."""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from jqlive.logger import get_logger

logger = get_logger("config")

ENV_PREFIX = "JQLIVE_"


@dataclass
class AppConfig:
    """Configuration for the suggestion engine and the query pipeline."""

    # Evaluator
    jq_binary: str = "jq"
    query_timeout: float = 5.0  # seconds before a jq run is killed

    # Pipeline
    debounce_ms: int = 50  # coalesce keystroke bursts before evaluating

    # Suggestions
    max_suggestions: int = 10
    scan_ahead: bool = False  # union fields over several array elements
    array_sample_size: int = 10  # elements/streamed values inspected when scanning ahead

    # Logging
    log_level: str = "INFO"
    log_file: Optional[str] = None

    @property
    def scan_ahead_size(self) -> int:
        """Number of elements inspected per array iteration.

        1 means first-element navigation, which is also what a disabled or
        misconfigured scan-ahead falls back to.
        """
        if not self.scan_ahead or self.array_sample_size < 2:
            return 1
        return self.array_sample_size

    @property
    def debounce_seconds(self) -> float:
        return max(self.debounce_ms, 0) / 1000


def _env(name: str) -> Optional[str]:
    value = os.getenv(f"{ENV_PREFIX}{name}")
    if value is None or not value.strip():
        return None
    return value.strip()


def _env_number(name: str, default, cast):
    raw = _env(name)
    if raw is None:
        return default
    try:
        return cast(raw)
    except ValueError:
        logger.warning(f"Ignoring invalid {ENV_PREFIX}{name}={raw!r}, using {default}")
        return default


def _env_bool(name: str, default: bool) -> bool:
    raw = _env(name)
    if raw is None:
        return default
    return raw.lower() in ("1", "true", "yes", "on")


def load_config(dotenv: bool = True) -> AppConfig:
    """
    Build an AppConfig from ``JQLIVE_*`` environment variables.

    Args:
        dotenv: Whether to load a ``.env`` file first

    Returns:
        The configuration; unset or invalid values keep their defaults
    """
    if dotenv:
        load_dotenv()

    defaults = AppConfig()
    config = AppConfig(
        jq_binary=_env("JQ_BINARY") or defaults.jq_binary,
        query_timeout=_env_number("QUERY_TIMEOUT", defaults.query_timeout, float),
        debounce_ms=_env_number("DEBOUNCE_MS", defaults.debounce_ms, int),
        max_suggestions=_env_number("MAX_SUGGESTIONS", defaults.max_suggestions, int),
        scan_ahead=_env_bool("SCAN_AHEAD", defaults.scan_ahead),
        array_sample_size=_env_number("ARRAY_SAMPLE_SIZE", defaults.array_sample_size, int),
        log_level=(_env("LOG_LEVEL") or defaults.log_level).upper(),
        log_file=_env("LOG_FILE"),
    )
    logger.debug(f"Loaded configuration: {config}")
    return config
