"""Gemini integration for note summaries and tags."""

from notes_ai.integrations.gemini.client import GeminiClient, validate_token_limit
from notes_ai.integrations.gemini.prompts import create_summary_prompt, create_tag_prompt

__all__ = ["GeminiClient", "validate_token_limit", "create_summary_prompt", "create_tag_prompt"]
