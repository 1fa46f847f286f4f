"""Repository implementations for the notes API.

Implements Repository pattern with Dependency Inversion principle.
"""

from notes_ai.infrastructure.database.repositories.base import BaseRepository
from notes_ai.infrastructure.database.repositories.edit_history import EditHistoryRepository
from notes_ai.infrastructure.database.repositories.error_logs import ErrorLogRepository
from notes_ai.infrastructure.database.repositories.notes import NoteRepository
from notes_ai.infrastructure.database.repositories.regenerations import RegenerationRepository
from notes_ai.infrastructure.database.repositories.summaries import SummaryRepository, TagRepository

__all__ = [
    "BaseRepository",
    "NoteRepository",
    "SummaryRepository",
    "TagRepository",
    "RegenerationRepository",
    "EditHistoryRepository",
    "ErrorLogRepository",
]
