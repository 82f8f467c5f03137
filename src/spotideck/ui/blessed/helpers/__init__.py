"""Shared rendering and terminal helpers."""
