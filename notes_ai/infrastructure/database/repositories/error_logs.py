"""AI error log repository for the notes API.

Stores classified AI failures for statistics and resolution tracking.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from notes_ai.core.logging import logger
from notes_ai.infrastructure.database.models import AIErrorLog
from notes_ai.infrastructure.database.repositories.base import BaseRepository


class ErrorLogRepository(BaseRepository[AIErrorLog]):
    """Repository for ai_error_logs table operations."""

    def table_name(self) -> str:
        """Return table name."""
        return "ai_error_logs"

    def insert_log(self, log: Dict[str, Any]) -> Optional[str]:
        """Insert an error log row.

        Returns:
            The new log id, or None if the insert failed
        """
        try:
            if not self._client.is_configured():
                logger.warning("error_log_skipped", reason="Supabase not configured")
                return None

            result = self.table.insert(log).execute()
            if not result.data:
                return None
            return result.data[0]["id"]

        except Exception as e:
            logger.error("error_log_insert_failed", error=str(e))
            return None

    def mark_resolved(self, log_id: str, user_id: Optional[str] = None) -> bool:
        """Set resolved_at to now; restricted to the owner when user_id is given."""
        try:
            if not self._client.is_configured():
                return False

            query = self.table.update(
                {"resolved_at": datetime.now(timezone.utc).isoformat()}
            ).eq("id", log_id)
            if user_id:
                query = query.eq("user_id", user_id)

            result = query.execute()
            return bool(result.data)

        except Exception as e:
            logger.error("error_log_resolve_failed", log_id=log_id, error=str(e))
            return False

    def list_logs(
        self, user_id: Optional[str] = None, limit: int = 50, offset: int = 0
    ) -> List[AIErrorLog]:
        """List logs newest first."""
        try:
            if not self._client.is_configured():
                return []

            query = self.table.select("*")
            if user_id:
                query = query.eq("user_id", user_id)

            result = (
                query.order("created_at", desc=True).range(offset, offset + limit - 1).execute()
            )
            return [self._row_to_model(row) for row in result.data or []]

        except Exception as e:
            logger.error("error_log_list_failed", error=str(e))
            return []

    def list_since(self, since: datetime, user_id: Optional[str] = None) -> List[AIErrorLog]:
        """List logs created at or after a timestamp."""
        try:
            if not self._client.is_configured():
                return []

            query = self.table.select("*").gte("created_at", since.isoformat())
            if user_id:
                query = query.eq("user_id", user_id)

            result = query.execute()
            return [self._row_to_model(row) for row in result.data or []]

        except Exception as e:
            logger.error("error_log_list_failed", error=str(e))
            return []

    def _row_to_model(self, row: Dict[str, Any]) -> AIErrorLog:
        return AIErrorLog(
            id=row["id"],
            user_id=row["user_id"],
            error_type=row["error_type"],
            error_message=row["error_message"],
            severity=row.get("severity") or "MEDIUM",
            retry_count=int(row.get("retry_count") or 0),
            note_id=row.get("note_id"),
            stack_trace=row.get("stack_trace"),
            resolved_at=row.get("resolved_at"),
            created_at=row.get("created_at"),
        )
