"""Infrastructure layer - adapters for external processes."""
