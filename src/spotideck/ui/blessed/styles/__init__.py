"""Styling: colors and text formatting."""
