"""Context-aware completion for jq queries.

Every keystroke runs, synchronously and without I/O: the boundary tracker,
the path parser, the context classifier, tree navigation over the document
cache and finally the suggestion assembler. ``SuggestionEngine`` wires the
steps together.
"""

from jqlive.application.autocomplete.engine import SuggestionEngine, SuggestionResult

__all__ = ["SuggestionEngine", "SuggestionResult"]
