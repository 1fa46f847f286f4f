"""Note workflows: creation, search, AI summaries and tags."""

from notes_ai.core.notes.service import NoteService, ServiceResult
from notes_ai.core.notes.tags import (
    MAX_AI_TAGS,
    MAX_MANUAL_TAGS,
    normalize_tags,
    parse_tags,
    validate_summary,
)

__all__ = [
    "NoteService",
    "ServiceResult",
    "MAX_AI_TAGS",
    "MAX_MANUAL_TAGS",
    "normalize_tags",
    "parse_tags",
    "validate_summary",
]
