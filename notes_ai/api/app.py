"""FastAPI application factory for the notes API."""

from typing import Optional

from fastapi import FastAPI

from notes_ai import __version__
from notes_ai.api.middleware import request_id_middleware
from notes_ai.api.routes import ai, errors, notes, system
from notes_ai.core.execution import ErrorLogger
from notes_ai.core.notes import NoteService


def create_app(
    note_service: Optional[NoteService] = None,
    error_logger: Optional[ErrorLogger] = None,
) -> FastAPI:
    """Create and configure FastAPI app. Factory pattern for testability."""
    app = FastAPI(
        title="notes-ai",
        description=(
            "Notes API with AI summaries and tags: note CRUD and search, "
            "Gemini-generated summaries and tags with retry and error classification, "
            "daily regeneration limits, and AI error statistics."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add middleware
    app.middleware("http")(request_id_middleware)

    # Register routes
    app.include_router(system.router)
    app.include_router(notes.router)
    app.include_router(ai.router)
    app.include_router(errors.router)

    # Services for route access
    note_service = note_service or NoteService(error_logger=error_logger)
    app.state.note_service = note_service
    app.state.error_logger = error_logger or note_service.error_logger

    return app
