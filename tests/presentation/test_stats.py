import pytest

from jqlive.application.autocomplete.builtins import BUILTINS_BY_NAME
from jqlive.application.preprocess import process_output
from jqlive.domain.types import Diagnostic
from jqlive.presentation.formatters import (
    describe_array_elements,
    format_diagnostic_markup,
    format_function_help,
    format_result_stats,
    format_stats_line,
)


@pytest.mark.parametrize(
    ("output", "expected"),
    [
        ('{"a": 1}', "Object"),
        ("[]", "Array [0]"),
        ('[{"a": 1}, {"a": 2}, {"a": 3}]', "Array [3 objects]"),
        ("[1, 2]", "Array [2 numbers]"),
        ('[1, "a"]', "Array [2 mixed]"),
        ('"text"', "String"),
        ("false", "Boolean"),
        ("42", "Number"),
        ("null", "null"),
        ("", "null"),
        ("1\n2\n3", "Stream [3]"),
        ('{"a": 1}\n{"a": 2}', "Stream [2]"),
    ],
)
def test_format_result_stats(output, expected):
    assert format_result_stats(process_output(1, ".", output)) == expected


def test_describe_array_elements():
    assert describe_array_elements([True, False]) == "booleans"
    assert describe_array_elements([[1], [2]]) == "arrays"
    assert describe_array_elements([None]) == "nulls"
    assert describe_array_elements(["a", 1]) == "mixed"


def test_format_stats_line():
    snapshot = process_output(1, ".", '{\n  "a": 1\n}\n')

    line = format_stats_line(snapshot)

    assert line.plain == "Object  3 lines  width 8"


def test_format_stats_line_stale():
    snapshot = process_output(1, ".", "1")

    line = format_stats_line(snapshot, stale=True)

    assert line.plain.startswith("Number  1 lines  width 1")
    assert "last successful result" in line.plain


def test_format_diagnostic_markup_escapes_message():
    markup = format_diagnostic_markup(Diagnostic("Cannot index array with [x]", line=1, column=3))

    assert markup.startswith("[bold red]Error:[/]")
    assert "\\[x]" in markup
    assert "(line 1, column 3)" in markup


def test_format_function_help_shows_signature_then_description():
    line = format_function_help(BUILTINS_BY_NAME["limit"])
    assert line.plain == "limit(n; f)  First n outputs of f"
