"""Database models for the notes API.

Type-safe dataclasses representing database records.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class Note:
    """Represents a record in the notes table."""

    id: str
    user_id: str
    title: str
    content: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


@dataclass
class Summary:
    """AI (or manually edited) summary of a note, in the summaries table."""

    id: str
    note_id: str
    content: str
    model: str = "gemini-2.0-flash-001"
    created_at: Optional[str] = None


@dataclass
class NoteTag:
    """Represents a record in the note_tags table."""

    id: str
    note_id: str
    tag: str


@dataclass
class AIRegeneration:
    """Regeneration history entry; type is summary, tags, or both."""

    id: str
    note_id: str
    user_id: str
    type: str
    created_at: Optional[str] = None


@dataclass
class EditHistoryEntry:
    """Manual edit of a note's summary or tags, in the edit_history table."""

    id: str
    note_id: str
    type: str
    edited_content: str
    edited_by: str
    original_content: Optional[str] = None
    is_manual_edit: bool = True
    edited_at: Optional[str] = None


@dataclass
class AIErrorLog:
    """Represents a record in the ai_error_logs table.

    error_message is always the normalized (redacted) message.
    """

    id: str
    user_id: str
    error_type: str
    error_message: str
    severity: str = "MEDIUM"
    retry_count: int = 0
    note_id: Optional[str] = None
    stack_trace: Optional[str] = None
    resolved_at: Optional[str] = None
    created_at: Optional[str] = None
