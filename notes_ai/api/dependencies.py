"""FastAPI dependencies for the notes API.

Services live on app.state so tests can swap them for fakes.
"""

from fastapi import Request

from notes_ai.core.execution import ErrorLogger
from notes_ai.core.notes import NoteService


def get_note_service(request: Request) -> NoteService:
    """Get the NoteService from app state.

    Note:
        Set via: app.state.note_service = NoteService(...)
    """
    return request.app.state.note_service


def get_error_logger(request: Request) -> ErrorLogger:
    """Get the ErrorLogger from app state (the note service's logger by default)."""
    return request.app.state.error_logger
