"""Tests for environment-driven configuration."""

import pytest

from jqlive.application.config import AppConfig, load_config

ENV_NAMES = (
    "JQLIVE_JQ_BINARY",
    "JQLIVE_QUERY_TIMEOUT",
    "JQLIVE_DEBOUNCE_MS",
    "JQLIVE_MAX_SUGGESTIONS",
    "JQLIVE_SCAN_AHEAD",
    "JQLIVE_ARRAY_SAMPLE_SIZE",
    "JQLIVE_LOG_LEVEL",
    "JQLIVE_LOG_FILE",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_NAMES:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    config = load_config(dotenv=False)
    assert config == AppConfig()
    assert config.jq_binary == "jq"
    assert config.query_timeout == 5.0
    assert config.max_suggestions == 10
    assert not config.scan_ahead


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("JQLIVE_JQ_BINARY", "/opt/bin/jq")
    monkeypatch.setenv("JQLIVE_QUERY_TIMEOUT", "2.5")
    monkeypatch.setenv("JQLIVE_DEBOUNCE_MS", "0")
    monkeypatch.setenv("JQLIVE_MAX_SUGGESTIONS", "20")
    monkeypatch.setenv("JQLIVE_SCAN_AHEAD", "true")
    monkeypatch.setenv("JQLIVE_ARRAY_SAMPLE_SIZE", "4")
    monkeypatch.setenv("JQLIVE_LOG_LEVEL", "debug")
    monkeypatch.setenv("JQLIVE_LOG_FILE", "/tmp/jqlive-test.log")

    config = load_config(dotenv=False)

    assert config.jq_binary == "/opt/bin/jq"
    assert config.query_timeout == 2.5
    assert config.debounce_ms == 0
    assert config.max_suggestions == 20
    assert config.scan_ahead
    assert config.array_sample_size == 4
    assert config.log_level == "DEBUG"
    assert config.log_file == "/tmp/jqlive-test.log"


def test_invalid_numbers_keep_defaults(monkeypatch):
    monkeypatch.setenv("JQLIVE_QUERY_TIMEOUT", "soon")
    monkeypatch.setenv("JQLIVE_MAX_SUGGESTIONS", "many")

    config = load_config(dotenv=False)

    assert config.query_timeout == 5.0
    assert config.max_suggestions == 10


def test_blank_values_are_ignored(monkeypatch):
    monkeypatch.setenv("JQLIVE_JQ_BINARY", "  ")
    assert load_config(dotenv=False).jq_binary == "jq"


@pytest.mark.parametrize(
    ("scan_ahead", "sample_size", "expected"),
    [
        (False, 10, 1),
        (True, 10, 10),
        (True, 2, 2),
        (True, 1, 1),
        (True, 0, 1),
    ],
)
def test_scan_ahead_size(scan_ahead, sample_size, expected):
    config = AppConfig(scan_ahead=scan_ahead, array_sample_size=sample_size)
    assert config.scan_ahead_size == expected


def test_debounce_seconds():
    assert AppConfig(debounce_ms=50).debounce_seconds == 0.05
    assert AppConfig(debounce_ms=-5).debounce_seconds == 0
