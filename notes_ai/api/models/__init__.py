"""API request models."""

from notes_ai.api.models.requests import (
    GenerateRequest,
    NoteCreateRequest,
    NoteUpdateRequest,
    RegenerateRequest,
    RegenerationType,
    SortOrder,
    SummaryUpdateRequest,
    TagsUpdateRequest,
)

__all__ = [
    "GenerateRequest",
    "NoteCreateRequest",
    "NoteUpdateRequest",
    "RegenerateRequest",
    "RegenerationType",
    "SortOrder",
    "SummaryUpdateRequest",
    "TagsUpdateRequest",
]
