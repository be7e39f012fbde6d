"""Presentation layer - human-friendly formatting."""

from .human_formatter import format_breakdown, format_changes_delta

__all__ = ["format_breakdown", "format_changes_delta"]
