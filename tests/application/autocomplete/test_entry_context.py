import pytest

from jqlive.application.autocomplete.entry_context import detect_entry_context
from jqlive.domain.types import EntryContext


def detect(query: str) -> EntryContext:
    return detect_entry_context(query, len(query))


@pytest.mark.parametrize(
    "query",
    [
        "with_entries(.",
        "with_entries(.k",
        "with_entries(select(.value > 1) | .",
        "to_entries | .[].",
        "to_entries[].",
        "to_entries | map(.",
        "to_entries | map(select(.",
        ".config | to_entries | .[] | .",
    ],
)
def test_direct_entry_context(query):
    assert detect(query) is EntryContext.DIRECT


@pytest.mark.parametrize(
    "query",
    [
        "with_entries(.value | .",
        "to_entries | .[] | .value | .",
        "to_entries | map(.value | .",
        "to_entries | map(.value | map(select(.",
        "to_entries | map(.value | select(.",
    ],
)
def test_opaque_value_context(query):
    assert detect(query) is EntryContext.OPAQUE_VALUE


@pytest.mark.parametrize(
    "query",
    [
        ".",
        ".user.",
        "map(.",
        "to_entries | .",
        "with_entries(.value.",
        "with_entries(.value[0].",
        "map(to_entries) | .",
        "with_entries(.) | .",
        '"to_entries" | .[].',
        'select(.name == "with_entries(") | .',
    ],
)
def test_no_entry_context(query):
    assert detect(query) is EntryContext.NONE


def test_only_text_before_cursor_counts():
    query = "with_entries(.) | ."
    assert detect_entry_context(query, len("with_entries(.")) is EntryContext.DIRECT
    assert detect_entry_context(query, len(query)) is EntryContext.NONE
