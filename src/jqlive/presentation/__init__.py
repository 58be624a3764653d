"""Presentation layer - Textual widgets, completion glue and formatters."""
