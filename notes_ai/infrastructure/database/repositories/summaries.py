"""Summary and tag repositories for the notes API.

Both tables hold derived AI output that is replaced wholesale on regeneration.
"""

from typing import List, Optional

from notes_ai.core.logging import logger
from notes_ai.infrastructure.database.models import NoteTag, Summary
from notes_ai.infrastructure.database.repositories.base import BaseRepository


class SummaryRepository(BaseRepository[Summary]):
    """Repository for summaries table operations."""

    def table_name(self) -> str:
        """Return table name."""
        return "summaries"

    def get_latest(self, note_id: str) -> Optional[Summary]:
        """Get the most recent summary of a note."""
        try:
            if not self._client.is_configured():
                return None

            result = (
                self.table.select("*")
                .eq("note_id", note_id)
                .order("created_at", desc=True)
                .limit(1)
                .execute()
            )

            if not result.data:
                return None

            row = result.data[0]
            return Summary(
                id=row["id"],
                note_id=row["note_id"],
                content=row["content"],
                model=row.get("model") or "gemini-2.0-flash-001",
                created_at=row.get("created_at"),
            )

        except Exception as e:
            logger.error("summary_get_failed", note_id=note_id, error=str(e))
            return None

    def replace(self, note_id: str, content: str, model: str) -> bool:
        """Replace the note's summary with a new one.

        Raises:
            RuntimeError: If Supabase is not configured
        """
        if not self._client.is_configured():
            raise RuntimeError("Supabase not configured")

        # Insert first so a failed write leaves the previous summary in place
        result = self.table.insert({"note_id": note_id, "content": content, "model": model}).execute()
        new_ids = [row["id"] for row in result.data or []]
        if new_ids:
            self.table.delete().eq("note_id", note_id).not_.in_("id", new_ids).execute()

        logger.info("summary_saved", note_id=note_id, model=model)
        return True

    def clear(self, note_id: str) -> bool:
        """Delete every summary of a note.

        Raises:
            RuntimeError: If Supabase is not configured
        """
        if not self._client.is_configured():
            raise RuntimeError("Supabase not configured")

        self.table.delete().eq("note_id", note_id).execute()
        logger.info("summary_cleared", note_id=note_id)
        return True


class TagRepository(BaseRepository[NoteTag]):
    """Repository for note_tags table operations."""

    def table_name(self) -> str:
        """Return table name."""
        return "note_tags"

    def list_tags(self, note_id: str) -> List[str]:
        """List tag strings of a note in insertion order."""
        try:
            if not self._client.is_configured():
                return []

            result = self.table.select("tag").eq("note_id", note_id).execute()
            return [row["tag"] for row in result.data or []]

        except Exception as e:
            logger.error("tag_list_failed", note_id=note_id, error=str(e))
            return []

    def replace(self, note_id: str, tags: List[str]) -> bool:
        """Replace the note's tags.

        Raises:
            RuntimeError: If Supabase is not configured
        """
        if not self._client.is_configured():
            raise RuntimeError("Supabase not configured")

        if not tags:
            self.table.delete().eq("note_id", note_id).execute()
        else:
            result = self.table.insert([{"note_id": note_id, "tag": tag} for tag in tags]).execute()
            new_ids = [row["id"] for row in result.data or []]
            if new_ids:
                self.table.delete().eq("note_id", note_id).not_.in_("id", new_ids).execute()

        logger.info("tags_saved", note_id=note_id, count=len(tags))
        return True
