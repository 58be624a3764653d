from jqlive.application.autocomplete.assembler import (
    BUILTIN_VARIABLES,
    SuggestionAssembler,
    bound_variables,
    field_suggestions,
    format_field_name,
)
from jqlive.application.autocomplete.classifier import Classification
from jqlive.domain.types import (
    Certainty,
    EntryContext,
    FieldType,
    SuggestionContext,
    SuggestionKind,
)


def field_classification(*targets, partial="", certainty=Certainty.DETERMINISTIC, **kwargs):
    return Classification(
        context=SuggestionContext.FIELD,
        partial=partial,
        certainty=certainty,
        targets=targets,
        **kwargs,
    )


class TestFieldSuggestions:
    def test_object_keys_with_types(self):
        suggestions = field_suggestions([{"name": "x", "tags": [{"a": 1}], "n": None}])
        assert [(s.text, str(s.field_type)) for s in suggestions] == [
            ("name", "string"),
            ("tags", "array[object]"),
            ("n", "null"),
        ]
        assert all(s.kind is SuggestionKind.FIELD for s in suggestions)

    def test_array_target_offers_iteration_patterns(self):
        suggestions = field_suggestions([[{"id": 1, "ok": True}]])
        assert [(s.text, s.kind) for s in suggestions] == [
            ("[]", SuggestionKind.PATTERN),
            ("[].id", SuggestionKind.PATTERN),
            ("[].ok", SuggestionKind.PATTERN),
        ]
        assert suggestions[2].field_type == FieldType("boolean")

    def test_element_patterns_sample_several_elements(self):
        target = [[{"id": 1}, {"id": 2, "extra": True}, {"late": 3}]]
        assert [s.text for s in field_suggestions(target)] == ["[]", "[].id"]
        assert [s.text for s in field_suggestions(target, sample_size=2)] == ["[]", "[].id", "[].extra"]

    def test_union_over_several_targets(self):
        suggestions = field_suggestions([{"id": 1}, {"id": 2, "extra": True}])
        assert [s.text for s in suggestions] == ["id", "extra"]

    def test_scalars_offer_nothing(self):
        assert field_suggestions(["text", 3, None]) == []

    def test_names_needing_quotes(self):
        assert format_field_name("plain_name") == "plain_name"
        assert format_field_name("first name") == '"first name"'
        assert format_field_name('say "hi"') == '"say \\"hi\\""'


class TestBoundVariables:
    def test_as_binding(self):
        query = ". as $doc | $"
        assert bound_variables(query, len(query)) == ["$doc"]

    def test_destructuring_pattern(self):
        query = ". as [$first, {name: $who}] | $"
        assert bound_variables(query, len(query)) == ["$first", "$who"]

    def test_reduce_binding(self):
        query = "reduce .[] as $item (0; . + $"
        assert bound_variables(query, len(query)) == ["$item"]

    def test_def_parameters(self):
        query = "def inc($by): . + $"
        assert bound_variables(query, len(query)) == ["$by"]

    def test_token_being_typed_is_excluded(self):
        query = ". as $it"
        assert bound_variables(query, len(query)) == []

    def test_bindings_inside_strings_are_ignored(self):
        query = '"x as $no" | $'
        assert bound_variables(query, len(query)) == []


class TestSuggestionAssembler:
    def test_field_targets(self):
        assembler = SuggestionAssembler()
        suggestions = assembler.assemble(field_classification({"name": 1, "age": 2}), [])
        assert [s.text for s in suggestions] == ["age", "name"]

    def test_partial_filters_by_prefix(self):
        assembler = SuggestionAssembler()
        classification = field_classification({"name": 1, "nick": 2, "age": 3}, partial="n")
        suggestions = assembler.assemble(classification, [])
        assert [s.text for s in suggestions] == ["name", "nick"]
        assert all(s.text.startswith("n") for s in suggestions)

    def test_non_deterministic_falls_back_to_all_names(self):
        assembler = SuggestionAssembler()
        classification = field_classification(certainty=Certainty.NON_DETERMINISTIC)
        suggestions = assembler.assemble(classification, {"b", "a", "c d"})
        assert [s.text for s in suggestions] == ['"c d"', "a", "b"]

    def test_direct_entry_context(self):
        assembler = SuggestionAssembler()
        classification = field_classification(entry_context=EntryContext.DIRECT)
        suggestions = assembler.assemble(classification, {"other"})
        assert [s.text for s in suggestions] == ["key", "value"]
        assert "opaque" in suggestions[1].detail

    def test_truncates_to_maximum(self):
        assembler = SuggestionAssembler(max_suggestions=3)
        target = {f"field{i:02d}": i for i in range(20)}
        suggestions = assembler.assemble(field_classification(target), [])
        assert [s.text for s in suggestions] == ["field00", "field01", "field02"]

    def test_fields_rank_before_patterns(self):
        assembler = SuggestionAssembler()
        classification = field_classification({"a": 1}, [{"b": 2}])
        kinds = [s.kind for s in assembler.assemble(classification, [])]
        assert kinds == sorted(kinds, key=lambda kind: kind.rank)
        assert kinds[0] is SuggestionKind.FIELD

    def test_duplicates_removed(self):
        assembler = SuggestionAssembler()
        classification = field_classification({"id": 1}, {"id": 2})
        assert [s.text for s in assembler.assemble(classification, [])] == ["id"]

    def test_functions(self):
        assembler = SuggestionAssembler()
        classification = Classification(context=SuggestionContext.FUNCTION, partial="sel")
        suggestions = assembler.assemble(classification, [])
        select = next(s for s in suggestions if s.text == "select")
        assert select.kind is SuggestionKind.FUNCTION
        assert select.needs_parens
        assert select.detail == "select(f)"

    def test_prefix_keywords_are_operators(self):
        assembler = SuggestionAssembler()
        classification = Classification(context=SuggestionContext.FUNCTION, partial="if")
        by_text = {s.text: s for s in assembler.assemble(classification, [])}
        assert by_text["if"].kind is SuggestionKind.OPERATOR

    def test_empty_function_partial_offers_nothing(self):
        assembler = SuggestionAssembler()
        classification = Classification(context=SuggestionContext.FUNCTION, partial="")
        assert assembler.assemble(classification, []) == []

    def test_operators(self):
        assembler = SuggestionAssembler()
        classification = Classification(context=SuggestionContext.OPERATOR, partial="an")
        assert [s.text for s in assembler.assemble(classification, [])] == ["and"]

    def test_variables(self):
        assembler = SuggestionAssembler()
        query = ". as $item | $"
        classification = Classification(context=SuggestionContext.VARIABLE, partial="$")
        texts = [s.text for s in assembler.assemble(classification, [], query, len(query))]
        assert texts == sorted(["$item", *BUILTIN_VARIABLES])

    def test_none_context(self):
        assembler = SuggestionAssembler()
        classification = Classification(context=SuggestionContext.NONE, partial="")
        assert assembler.assemble(classification, {"a"}) == []
