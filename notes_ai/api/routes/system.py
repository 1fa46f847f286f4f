"""System routes for the notes API."""

import asyncio
from datetime import datetime
from typing import Any, Dict

from fastapi import APIRouter

from notes_ai import __version__
from notes_ai.config import Config
from notes_ai.infrastructure.database import SupabaseClient
from notes_ai.integrations.gemini import GeminiClient

router = APIRouter(tags=["System"])

HEALTH_CHECK_TIMEOUT = 2.0


async def check_gemini_connection() -> Dict[str, Any]:
    """Ping Gemini with a minimal prompt. Returns dict with status and details."""
    client = GeminiClient()
    if not client.is_configured():
        return {"status": "unconfigured", "error": "GEMINI_API_KEY not set"}

    try:
        await asyncio.wait_for(client.complete("ping"), timeout=HEALTH_CHECK_TIMEOUT)
        return {"status": "healthy", "model": client.model_name}
    except asyncio.TimeoutError:
        return {"status": "timeout", "error": f"Request timed out after {HEALTH_CHECK_TIMEOUT:g}s"}
    except Exception as e:
        return {"status": "unavailable", "error": str(e)[:100]}


async def check_supabase_connection() -> Dict[str, Any]:
    """Read one row from the notes table. Returns dict with status and details."""
    client = SupabaseClient()
    if not client.is_configured():
        return {"status": "unconfigured", "error": "Supabase credentials not set"}

    try:
        await asyncio.wait_for(
            asyncio.to_thread(
                lambda: client.client.table("notes").select("id").limit(1).execute()
            ),
            timeout=HEALTH_CHECK_TIMEOUT,
        )
        return {"status": "healthy", "database": "connected"}
    except asyncio.TimeoutError:
        return {"status": "timeout", "error": f"Request timed out after {HEALTH_CHECK_TIMEOUT:g}s"}
    except Exception as e:
        return {"status": "unavailable", "error": str(e)[:100]}


@router.get("/health")
async def health_check():
    """Health check with Gemini/Supabase testing. Returns service status, version, and dependency health."""
    gemini_health, supabase_health = await asyncio.gather(
        check_gemini_connection(), check_supabase_connection()
    )

    all_healthy = (
        gemini_health.get("status") == "healthy" and supabase_health.get("status") == "healthy"
    )

    return {
        "status": "healthy" if all_healthy else "degraded",
        "service": "notes-ai",
        "version": __version__,
        "missing_config": Config.get_missing_config(),
        "dependencies": {"gemini": gemini_health, "supabase": supabase_health},
        "timestamp": datetime.now().isoformat() + "Z",
    }
