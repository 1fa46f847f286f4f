"""Main entry point for the notes API.

Usage:
    Development: uvicorn notes_ai.main:app --reload --port 8000
    Production: uvicorn notes_ai.main:app --host 0.0.0.0 --port 8000 --workers 4
"""

from notes_ai.api import create_app
from notes_ai.config import Config
from notes_ai.core.logging import logger

if not Config.is_configured():
    logger.warning("config_incomplete", missing=Config.get_missing_config())

app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "notes_ai.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info",
    )
