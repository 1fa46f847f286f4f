"""Middleware for the notes API."""

from notes_ai.api.middleware.request_id import request_id_middleware

__all__ = ["request_id_middleware"]
