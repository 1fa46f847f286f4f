"""AI regeneration history repository for the notes API.

Backs the daily regeneration limit.
"""

from datetime import datetime

from notes_ai.core.logging import logger
from notes_ai.infrastructure.database.models import AIRegeneration
from notes_ai.infrastructure.database.repositories.base import BaseRepository


class RegenerationRepository(BaseRepository[AIRegeneration]):
    """Repository for ai_regenerations table operations."""

    def table_name(self) -> str:
        """Return table name."""
        return "ai_regenerations"

    def record(self, note_id: str, user_id: str, regeneration_type: str) -> None:
        """Record a regeneration.

        Note:
            Fails silently if the insert fails; the regeneration already happened.
        """
        try:
            if not self._client.is_configured():
                logger.warning("regeneration_record_skipped", reason="Supabase not configured")
                return

            self.table.insert(
                {"note_id": note_id, "user_id": user_id, "type": regeneration_type}
            ).execute()
            logger.info(
                "regeneration_recorded",
                note_id=note_id,
                user_id=user_id,
                type=regeneration_type,
            )

        except Exception as e:
            logger.warning("regeneration_record_failed", note_id=note_id, error=str(e))

    def count_since(self, user_id: str, since: datetime) -> int:
        """Count a user's regenerations since a timestamp.

        Raises:
            RuntimeError: If Supabase is not configured
            Exception: Any query failure propagates so the caller can deny
        """
        if not self._client.is_configured():
            raise RuntimeError("Supabase not configured")

        result = (
            self.table.select("id", count="exact")
            .eq("user_id", user_id)
            .gte("created_at", since.isoformat())
            .execute()
        )
        return result.count or 0
