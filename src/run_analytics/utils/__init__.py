"""Utility helpers for run-analytics."""

from .formatting import format_duration, format_pace, format_whole

__all__ = [
    "format_duration",
    "format_pace",
    "format_whole",
]
