"""FastAPI authentication dependencies for the notes API."""

from typing import Optional

from fastapi import Header, HTTPException

from notes_ai.infrastructure.auth.jwt import verify_jwt_token


async def get_current_user(authorization: Optional[str] = Header(None)) -> str:
    """Extract user_id from the Supabase access token in the Authorization header.

    Raises:
        HTTPException: 401 if the header is missing, malformed, or the token invalid
    """
    if not authorization:
        raise HTTPException(
            status_code=401, detail="Authentication required. Provide a Bearer token."
        )

    if not authorization.startswith("Bearer "):
        raise HTTPException(
            status_code=401,
            detail="Invalid Authorization header format. Use: Authorization: Bearer <token>",
        )

    token = authorization[len("Bearer "):]
    return verify_jwt_token(token)
