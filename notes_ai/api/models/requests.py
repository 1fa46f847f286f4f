"""Request models for the notes API."""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


class RegenerationType(str, Enum):
    """What a regeneration produces."""

    SUMMARY = "summary"
    TAGS = "tags"
    BOTH = "both"


class SortOrder(str, Enum):
    NEWEST = "newest"
    OLDEST = "oldest"
    TITLE = "title"


class NoteCreateRequest(BaseModel):
    """Request for POST /notes."""

    title: str = ""
    content: Optional[str] = Field(None, max_length=50000)
    generate_ai: bool = True

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str) -> str:
        """Blank titles become "Untitled" in the service."""
        return (v or "").strip()


class NoteUpdateRequest(BaseModel):
    """Request for PATCH /notes/{note_id}."""

    title: Optional[str] = None
    content: Optional[str] = Field(None, max_length=50000)
    regenerate_ai: bool = False


class RegenerateRequest(BaseModel):
    """Request for POST /notes/{note_id}/regenerate."""

    type: RegenerationType = RegenerationType.BOTH


class SummaryUpdateRequest(BaseModel):
    """Request for PUT /notes/{note_id}/summary."""

    summary: str


class TagsUpdateRequest(BaseModel):
    """Request for PUT /notes/{note_id}/tags."""

    tags: List[str]


class GenerateRequest(BaseModel):
    """Request for POST /ai/generate - summary and tags for arbitrary text."""

    text: str = Field(..., min_length=1)
