"""Completion glue between the suggestion engine and the input widget."""

from jqlive.presentation.completion.applier import ApplyResult, CompletionApplier

__all__ = ["ApplyResult", "CompletionApplier"]
