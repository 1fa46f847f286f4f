"""AI routes for the notes API."""

from fastapi import APIRouter, Depends

from notes_ai.api.dependencies import get_note_service
from notes_ai.api.models import GenerateRequest
from notes_ai.api.responses import service_response
from notes_ai.core.notes import NoteService
from notes_ai.infrastructure.auth import get_current_user

router = APIRouter(prefix="/ai", tags=["AI"])


@router.get("/regenerations")
async def regeneration_status(
    user_id: str = Depends(get_current_user),
    service: NoteService = Depends(get_note_service),
):
    """Today's regeneration usage: current_count, limit, remaining, can_regenerate."""
    status = service.get_regeneration_count(user_id)
    data = status.to_dict()
    data["resets_in_seconds"] = service.limiter.seconds_until_reset()
    return {"success": True, "data": data}


@router.post("/generate")
async def generate(
    body: GenerateRequest,
    user_id: str = Depends(get_current_user),
    service: NoteService = Depends(get_note_service),
):
    """Summary and tags for arbitrary text. Nothing is stored and the daily limit is not used."""
    result = await service.generate_preview(user_id, body.text)
    return service_response(result)
