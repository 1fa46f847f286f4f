"""Database module for the notes API.

Provides Supabase client singleton and repository pattern for database operations.
"""

from notes_ai.infrastructure.database.client import SupabaseClient
from notes_ai.infrastructure.database.models import (
    AIErrorLog,
    AIRegeneration,
    EditHistoryEntry,
    Note,
    NoteTag,
    Summary,
)
from notes_ai.infrastructure.database.repositories import (
    BaseRepository,
    EditHistoryRepository,
    ErrorLogRepository,
    NoteRepository,
    RegenerationRepository,
    SummaryRepository,
    TagRepository,
)

__all__ = [
    "SupabaseClient",
    "Note",
    "Summary",
    "NoteTag",
    "AIRegeneration",
    "EditHistoryEntry",
    "AIErrorLog",
    "BaseRepository",
    "NoteRepository",
    "SummaryRepository",
    "TagRepository",
    "RegenerationRepository",
    "EditHistoryRepository",
    "ErrorLogRepository",
]
