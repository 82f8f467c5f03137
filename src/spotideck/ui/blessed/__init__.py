"""Blessed-based full-screen playback controller."""

from .app import run_interactive_ui

__all__ = ["run_interactive_ui"]
