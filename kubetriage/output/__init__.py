"""Presentation of triage results."""

from kubetriage.output.text import TextRenderer, format_duration

__all__ = ["TextRenderer", "format_duration"]
