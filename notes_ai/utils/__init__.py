"""Utility helpers for the notes API."""

from notes_ai.utils.text import content_preview, highlight_text

__all__ = ["content_preview", "highlight_text"]
