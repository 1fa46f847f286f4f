"""Edit history repository for the notes API.

Records manual edits of summaries and tags.
"""

from typing import Optional

from notes_ai.core.logging import logger
from notes_ai.infrastructure.database.models import EditHistoryEntry
from notes_ai.infrastructure.database.repositories.base import BaseRepository


class EditHistoryRepository(BaseRepository[EditHistoryEntry]):
    """Repository for edit_history table operations."""

    def table_name(self) -> str:
        """Return table name."""
        return "edit_history"

    def record_edit(
        self,
        note_id: str,
        edit_type: str,
        edited_content: str,
        edited_by: str,
        original_content: Optional[str] = None,
        is_manual_edit: bool = True,
    ) -> None:
        """Record an edit of a summary or tag list.

        Note:
            Fails silently; history is informational.
        """
        try:
            if not self._client.is_configured():
                logger.warning("edit_history_skipped", reason="Supabase not configured")
                return

            self.table.insert(
                {
                    "note_id": note_id,
                    "type": edit_type,
                    "is_manual_edit": "true" if is_manual_edit else "false",
                    "original_content": original_content,
                    "edited_content": edited_content,
                    "edited_by": edited_by,
                }
            ).execute()

        except Exception as e:
            logger.warning("edit_history_failed", note_id=note_id, type=edit_type, error=str(e))
