"""HTTP API for the notes service."""

from notes_ai.api.app import create_app

__all__ = ["create_app"]
