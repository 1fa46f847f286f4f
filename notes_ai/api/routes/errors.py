"""AI error log routes for the notes API."""

from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException, Query

from notes_ai.api.dependencies import get_error_logger
from notes_ai.core.execution import ErrorLogger
from notes_ai.infrastructure.auth import get_current_user

router = APIRouter(prefix="/ai/errors", tags=["AI Errors"])


@router.get("")
async def list_errors(
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    user_id: str = Depends(get_current_user),
    error_logger: ErrorLogger = Depends(get_error_logger),
):
    """The caller's AI error logs, newest first."""
    logs = error_logger.get_error_logs(user_id=user_id, limit=limit, offset=offset)
    return {
        "success": True,
        "data": {"logs": [asdict(log) for log in logs], "limit": limit, "offset": offset},
    }


@router.get("/stats")
async def error_stats(
    days: int = Query(30, ge=1, le=365),
    user_id: str = Depends(get_current_user),
    error_logger: ErrorLogger = Depends(get_error_logger),
):
    """Totals, last-24h count, and resolution times, plus patterns over the last week."""
    stats = error_logger.get_error_stats(user_id=user_id, days=days)
    patterns = error_logger.analyze_error_patterns(user_id=user_id, days=min(days, 7))
    return {
        "success": True,
        "data": {"stats": stats.to_dict(), "patterns": patterns.to_dict(), "days": days},
    }


@router.post("/{log_id}/resolve")
async def resolve_error(
    log_id: str,
    user_id: str = Depends(get_current_user),
    error_logger: ErrorLogger = Depends(get_error_logger),
):
    if not error_logger.mark_resolved(log_id, user_id):
        raise HTTPException(status_code=404, detail="Error log not found")
    return {"success": True, "data": {"id": log_id, "resolved": True}}
