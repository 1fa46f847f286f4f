"""Note routes for the notes API."""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from notes_ai.api.dependencies import get_note_service
from notes_ai.api.models import (
    NoteCreateRequest,
    NoteUpdateRequest,
    RegenerateRequest,
    SortOrder,
    SummaryUpdateRequest,
    TagsUpdateRequest,
)
from notes_ai.api.responses import service_response
from notes_ai.core.notes import NoteService
from notes_ai.infrastructure.auth import get_current_user

router = APIRouter(prefix="/notes", tags=["Notes"])


@router.post("")
async def create_note(
    body: NoteCreateRequest,
    user_id: str = Depends(get_current_user),
    service: NoteService = Depends(get_note_service),
):
    """Create a note.

    - **title**: Note title (blank becomes "Untitled", max 200 characters)
    - **content**: Note body (max 50,000 characters)
    - **generate_ai**: Generate summary and tags when content is present

    A failed AI generation still returns 201 with the saved note and `ai_error`.
    """
    result = await service.create_note(
        user_id, body.title, body.content, generate_ai=body.generate_ai
    )
    return service_response(result, success_status=201)


@router.get("")
async def list_notes(
    q: Optional[str] = Query(None, description="Search title and content"),
    page: int = Query(1, ge=1),
    limit: int = Query(12, ge=1, le=100),
    sort: SortOrder = Query(SortOrder.NEWEST),
    user_id: str = Depends(get_current_user),
    service: NoteService = Depends(get_note_service),
):
    """List the caller's notes, or search them when `q` is given (title matches first)."""
    if q and q.strip():
        result = service.search_notes(user_id, q, page=page, limit=limit, sort=sort.value)
    else:
        result = service.list_notes(user_id, page=page, limit=limit, sort=sort.value)
    return service_response(result)


@router.get("/{note_id}")
async def get_note(
    note_id: str,
    user_id: str = Depends(get_current_user),
    service: NoteService = Depends(get_note_service),
):
    return service_response(service.get_note(user_id, note_id))


@router.patch("/{note_id}")
async def update_note(
    note_id: str,
    body: NoteUpdateRequest,
    user_id: str = Depends(get_current_user),
    service: NoteService = Depends(get_note_service),
):
    """Update title and/or content.

    With `regenerate_ai` the summary and tags are regenerated too; this counts toward
    the daily limit, and a failed regeneration is reported next to the saved note.
    """
    result = await service.update_note(
        user_id,
        note_id,
        title=body.title,
        content=body.content,
        regenerate_ai=body.regenerate_ai,
    )
    return service_response(result)


@router.delete("/{note_id}")
async def delete_note(
    note_id: str,
    user_id: str = Depends(get_current_user),
    service: NoteService = Depends(get_note_service),
):
    return service_response(service.delete_note(user_id, note_id))


@router.post("/{note_id}/regenerate")
async def regenerate(
    note_id: str,
    body: RegenerateRequest,
    user_id: str = Depends(get_current_user),
    service: NoteService = Depends(get_note_service),
):
    """Regenerate the summary, the tags, or both.

    - **type**: summary | tags | both

    Returns 429 with Retry-After once the daily limit is used up.
    """
    result = await service.regenerate(user_id, note_id, body.type.value)
    if result.status_code == 429:
        raise HTTPException(
            status_code=429,
            detail=result.error,
            headers={"Retry-After": str(service.limiter.seconds_until_reset())},
        )
    return service_response(result)


@router.put("/{note_id}/summary")
async def update_summary(
    note_id: str,
    body: SummaryUpdateRequest,
    user_id: str = Depends(get_current_user),
    service: NoteService = Depends(get_note_service),
):
    return service_response(service.update_summary(user_id, note_id, body.summary))


@router.put("/{note_id}/tags")
async def update_tags(
    note_id: str,
    body: TagsUpdateRequest,
    user_id: str = Depends(get_current_user),
    service: NoteService = Depends(get_note_service),
):
    return service_response(service.update_tags(user_id, note_id, body.tags))
