from jqlive.domain.types import Suggestion, SuggestionKind
from jqlive.presentation.completion.applier import CompletionApplier


def field(text: str) -> Suggestion:
    return Suggestion(text, SuggestionKind.FIELD)


def pattern(text: str) -> Suggestion:
    return Suggestion(text, SuggestionKind.PATTERN)


def test_apply_field_replaces_partial() -> None:
    applier = CompletionApplier()

    result = applier.apply(field("name"), ".user.na", 8, "na")

    assert result.text == ".user.name"
    assert result.cursor == len(".user.name")


def test_apply_field_after_dot() -> None:
    applier = CompletionApplier()

    result = applier.apply(field("name"), ".user.", 6, "")

    assert result.text == ".user.name"
    assert result.cursor == 10


def test_apply_keeps_text_after_cursor() -> None:
    applier = CompletionApplier()
    text = ".user.na | length"

    result = applier.apply(field("name"), text, 8, "na")

    assert result.text == ".user.name | length"
    assert result.cursor == len(".user.name")


def test_apply_function_opens_parenthesis() -> None:
    applier = CompletionApplier()
    suggestion = Suggestion("select", SuggestionKind.FUNCTION, needs_parens=True)

    result = applier.apply(suggestion, ".[] | sel", 9, "sel")

    assert result.text == ".[] | select("
    assert result.cursor == len(".[] | select(")


def test_apply_function_without_arguments() -> None:
    applier = CompletionApplier()
    suggestion = Suggestion("length", SuggestionKind.FUNCTION)

    result = applier.apply(suggestion, ".a | len", 8, "len")

    assert result.text == ".a | length"


def test_apply_pattern_absorbs_path_dot() -> None:
    applier = CompletionApplier()

    result = applier.apply(pattern("[].id"), ".items.", 7, "")

    assert result.text == ".items[].id"
    assert result.cursor == len(".items[].id")


def test_apply_pattern_after_bare_dot_keeps_dot() -> None:
    applier = CompletionApplier()

    assert applier.apply(pattern("[]"), ".", 1, "").text == ".[]"
    assert applier.apply(pattern("[]"), "map(.", 5, "").text == "map(.[]"
    assert applier.apply(pattern("[]"), ".a | .", 6, "").text == ".a | .[]"


def test_apply_variable_replaces_dollar_token() -> None:
    applier = CompletionApplier()
    suggestion = Suggestion("$item", SuggestionKind.VARIABLE)

    result = applier.apply(suggestion, ". as $item | $i", 15, "$i")

    assert result.text == ". as $item | $item"


def test_apply_quoted_field() -> None:
    applier = CompletionApplier()

    result = applier.apply(field('"first name"'), ".", 1, "")

    assert result.text == '."first name"'


def test_apply_with_stale_partial_inserts_at_cursor() -> None:
    applier = CompletionApplier()

    result = applier.apply(field("name"), ".user.", 6, "zz")

    assert result.text == ".user.name"


def test_apply_clamps_cursor() -> None:
    applier = CompletionApplier()

    result = applier.apply(field("id"), ".", 99, "")

    assert result.text == ".id"
    assert result.cursor == 3
