"""Textual application."""

from jqlive.presentation.tui.app import JqLiveApp

__all__ = ["JqLiveApp"]
