"""
Context-aware autocomplete overlay for the query input.
"""

from __future__ import annotations

from textual_autocomplete import AutoComplete, DropdownItem, TargetState

from jqlive.application.autocomplete import SuggestionEngine, SuggestionResult
from jqlive.domain.types import Suggestion, SuggestionContext, SuggestionKind
from jqlive.logger import get_logger
from jqlive.presentation.completion import CompletionApplier
from jqlive.presentation.widgets.query_input import QueryInput

logger = get_logger("autocomplete")

KIND_PREFIXES = {
    SuggestionKind.FIELD: "[F] ",
    SuggestionKind.PATTERN: "[P] ",
    SuggestionKind.FUNCTION: "[ƒ] ",
    SuggestionKind.OPERATOR: "[O] ",
    SuggestionKind.VARIABLE: "[$] ",
}


def to_dropdown_item(suggestion: Suggestion) -> DropdownItem:
    return DropdownItem(main=suggestion.text, prefix=KIND_PREFIXES[suggestion.kind])


class JqAutoComplete(AutoComplete):
    """Overlay showing field, function, operator and variable completions.

    Candidates come from the SuggestionEngine already filtered, ranked and
    truncated, so the base class's fuzzy matching is bypassed.
    """

    def __init__(self, input_widget: QueryInput, engine: SuggestionEngine):
        self.input_widget = input_widget
        self._engine = engine
        self._applier = CompletionApplier()
        self._result: SuggestionResult | None = None
        self._result_key: tuple[str, int, int] | None = None
        self._by_text: dict[str, Suggestion] = {}

        super().__init__(
            target=input_widget,
            candidates=self._collect_candidates,
            prevent_default_enter=True,
        )

    def on_mount(self) -> None:
        logger.info(f"JqAutoComplete mounted (target={self.target})")

    def _compute(self, state: TargetState) -> SuggestionResult:
        key = (state.text, state.cursor_position, self._engine.cache.snapshot.request_id)
        if self._result is not None and self._result_key == key:
            return self._result
        try:
            result = self._engine.get_suggestions(state.text, state.cursor_position)
        except Exception as e:
            # Completion misses are never surfaced to the user
            logger.error(f"Suggestion engine failed for {state.text!r}: {e}")
            result = SuggestionResult(context=SuggestionContext.NONE, partial="")
        self._result = result
        self._result_key = key
        self._by_text = {suggestion.text: suggestion for suggestion in result.suggestions}
        return result

    def _collect_candidates(self, state: TargetState) -> list[DropdownItem]:
        result = self._compute(state)
        logger.debug(f"Collected {len(result)} completion candidates")
        return [to_dropdown_item(suggestion) for suggestion in result.suggestions]

    def get_search_string(self, target_state: TargetState) -> str:
        return self._compute(target_state).partial

    def get_matches(
        self,
        target_state: TargetState,
        candidates: list[DropdownItem],
        search_string: str,
    ) -> list[DropdownItem]:
        """Keep the engine's ordering and filtering."""
        return candidates

    def apply_completion(self, value: str, state: TargetState) -> None:
        suggestion = self._by_text.get(value)
        if suggestion is None:
            logger.warning(f"Selected value {value!r} is not a current suggestion")
            return
        partial = self._result.partial if self._result else ""
        result = self._applier.apply(suggestion, state.text, state.cursor_position, partial)
        self.target.value = result.text
        self.target.cursor_position = result.cursor
        logger.info(f"Applied completion; new cursor={result.cursor}")

    def should_show_dropdown(self, _search_string: str) -> bool:
        return bool(self._result and self._result.suggestions) and self.option_list.option_count > 0
