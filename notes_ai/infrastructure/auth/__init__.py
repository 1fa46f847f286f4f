"""Authentication module for the notes API.

Verifies Supabase Auth JWTs; sign-in flows stay with Supabase.
"""

from notes_ai.infrastructure.auth.deps import get_current_user
from notes_ai.infrastructure.auth.jwt import verify_jwt_token

__all__ = [
    "verify_jwt_token",
    "get_current_user",
]
