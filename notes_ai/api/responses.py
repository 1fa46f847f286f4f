"""Response helpers for the notes API."""

from fastapi import HTTPException
from fastapi.responses import JSONResponse

from notes_ai.core.notes import ServiceResult


def service_response(result: ServiceResult, success_status: int = 200) -> JSONResponse:
    """Translate a ServiceResult into the {"success", "data"|"error"} envelope.

    Raises:
        HTTPException: 404 when the note is missing or owned by someone else
    """
    if result.success:
        return JSONResponse(status_code=success_status, content=result.to_dict())

    if result.status_code == 404:
        raise HTTPException(status_code=404, detail=result.error)

    return JSONResponse(status_code=result.status_code, content=result.to_dict())
