"""Formatting helpers for displaying analysis results."""

from .time_formatter import format_duration, to_milliseconds, to_seconds
from .name_formatter import shorten_name

__all__ = ["format_duration", "to_milliseconds", "to_seconds", "shorten_name"]
