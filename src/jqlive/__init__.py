"""jqlive - interactive jq query editor with live results and completions."""

__version__ = "0.1.0"
