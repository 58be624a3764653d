import pytest

from jqlive.application.autocomplete.builtins import (
    BUILTINS_BY_NAME,
    ELEMENT_CONTEXT_FUNCTIONS,
    FUNCTIONS,
    INFIX_OPERATORS,
    PREFIX_KEYWORDS,
    filter_functions,
    filter_operators,
    is_element_context,
)


def test_function_names_are_unique():
    names = [builtin.name for builtin in FUNCTIONS]
    assert len(names) == len(set(names))


def test_parens_follow_signature():
    assert BUILTINS_BY_NAME["map"].needs_parens
    assert BUILTINS_BY_NAME["select"].needs_parens
    assert not BUILTINS_BY_NAME["keys"].needs_parens
    assert not BUILTINS_BY_NAME["length"].needs_parens


def test_table_is_read_only():
    with pytest.raises(TypeError):
        BUILTINS_BY_NAME["map"] = BUILTINS_BY_NAME["select"]  # type: ignore[index]


def test_element_context_functions_exist_in_table():
    for name in ELEMENT_CONTEXT_FUNCTIONS:
        assert name in BUILTINS_BY_NAME
    assert is_element_context("map")
    assert not is_element_context("limit")
    assert not is_element_context(None)


def test_filter_functions():
    assert filter_functions("") == []
    names = [builtin.name for builtin in filter_functions("to")]
    assert "to_entries" in names
    assert "tostring" in names
    assert all(name.startswith("to") for name in names)


def test_filter_functions_includes_prefix_keywords():
    assert "reduce" in [builtin.name for builtin in filter_functions("red")]
    assert {builtin.name for builtin in PREFIX_KEYWORDS} >= {"if", "try", "reduce"}


def test_filter_operators():
    assert filter_operators("") == []
    assert [builtin.name for builtin in filter_operators("o")] == ["or"]
    assert {builtin.name for builtin in INFIX_OPERATORS} >= {"and", "|", "//"}
