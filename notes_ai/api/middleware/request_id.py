"""Request ID middleware for the notes API."""

import time
import uuid

import structlog
from fastapi import Request

from notes_ai.core.logging import logger


async def request_id_middleware(request: Request, call_next):
    """Add a unique request ID to the logging context and the response headers."""
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    start_time = time.time()

    with structlog.contextvars.bound_contextvars(request_id=request_id):
        response = await call_next(request)
        logger.info(
            "request_completed",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            processing_ms=int((time.time() - start_time) * 1000),
        )

    response.headers["X-Request-ID"] = request_id
    return response
