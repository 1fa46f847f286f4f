"""Notes repository for the notes API.

Handles CRUD, pagination, and search over the notes table.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from notes_ai.core.logging import logger
from notes_ai.infrastructure.database.models import Note
from notes_ai.infrastructure.database.repositories.base import BaseRepository

SORT_ORDERS = {
    "newest": ("updated_at", True),
    "oldest": ("updated_at", False),
    "title": ("title", False),
}


class NoteRepository(BaseRepository[Note]):
    """Repository for notes table operations."""

    def table_name(self) -> str:
        """Return table name."""
        return "notes"

    def create_note(self, user_id: str, title: str, content: Optional[str]) -> Optional[Note]:
        """Insert a new note.

        Args:
            user_id: Owner UUID
            title: Validated title
            content: Note body (None when empty)

        Returns:
            Created Note or None if failed
        """
        try:
            if not self._client.is_configured():
                logger.warning("note_create_skipped", reason="Supabase not configured")
                return None

            now = datetime.now(timezone.utc).isoformat()
            result = self.table.insert(
                {
                    "user_id": user_id,
                    "title": title,
                    "content": content,
                    "created_at": now,
                    "updated_at": now,
                }
            ).execute()

            if not result.data:
                return None

            note = self._row_to_model(result.data[0])
            logger.info("note_created", note_id=note.id, user_id=user_id)
            return note

        except Exception as e:
            logger.error("note_create_failed", user_id=user_id, error=str(e))
            return None

    def get_note(self, note_id: str) -> Optional[Note]:
        """Get a single note by ID (ownership is checked by the caller)."""
        try:
            if not self._client.is_configured():
                return None

            result = self.table.select("*").eq("id", note_id).limit(1).execute()

            if not result.data:
                return None

            return self._row_to_model(result.data[0])

        except Exception as e:
            logger.error("note_get_failed", note_id=note_id, error=str(e))
            return None

    def update_note(self, note_id: str, updates: Dict[str, Any]) -> Optional[Note]:
        """Update title and/or content; updated_at is always refreshed."""
        try:
            if not self._client.is_configured():
                logger.warning("note_update_skipped", reason="Supabase not configured")
                return None

            data = dict(updates)
            data["updated_at"] = datetime.now(timezone.utc).isoformat()

            result = self.table.update(data).eq("id", note_id).execute()

            if not result.data:
                return None

            logger.info("note_updated", note_id=note_id, fields=sorted(updates))
            return self._row_to_model(result.data[0])

        except Exception as e:
            logger.error("note_update_failed", note_id=note_id, error=str(e))
            return None

    def delete_note(self, note_id: str) -> bool:
        """Delete a note; summaries, tags and history cascade in the database."""
        try:
            if not self._client.is_configured():
                logger.warning("note_delete_skipped", reason="Supabase not configured")
                return False

            self.table.delete().eq("id", note_id).execute()
            logger.info("note_deleted", note_id=note_id)
            return True

        except Exception as e:
            logger.error("note_delete_failed", note_id=note_id, error=str(e))
            return False

    def list_notes(
        self, user_id: str, page: int = 1, limit: int = 12, sort: str = "newest"
    ) -> Tuple[List[Note], int]:
        """List a page of the user's notes.

        Returns:
            (notes, total_count)
        """
        try:
            if not self._client.is_configured():
                return [], 0

            offset = (page - 1) * limit
            column, desc = SORT_ORDERS.get(sort, SORT_ORDERS["newest"])

            result = (
                self.table.select("*", count="exact")
                .eq("user_id", user_id)
                .order(column, desc=desc)
                .range(offset, offset + limit - 1)
                .execute()
            )

            notes = [self._row_to_model(row) for row in result.data or []]
            return notes, result.count or 0

        except Exception as e:
            logger.error("note_list_failed", user_id=user_id, error=str(e))
            return [], 0

    def search_notes(
        self, user_id: str, query: str, page: int = 1, limit: int = 12, sort: str = "newest"
    ) -> Tuple[List[Note], int]:
        """Search title and content, ranking title matches before content-only matches.

        Paginates across the two ranked groups so each page stays in order.

        Returns:
            (notes, total_count)
        """
        try:
            if not self._client.is_configured():
                return [], 0

            pattern = f"%{query.strip()}%"
            offset = (page - 1) * limit
            end = offset + limit
            column, desc = SORT_ORDERS.get(sort, SORT_ORDERS["newest"])

            def title_matches():
                return self.table.select("*", count="exact").eq("user_id", user_id).ilike("title", pattern)

            def content_only_matches():
                return (
                    self.table.select("*", count="exact")
                    .eq("user_id", user_id)
                    .ilike("content", pattern)
                    .not_.ilike("title", pattern)
                )

            title_count = title_matches().limit(1).execute().count or 0
            content_count = content_only_matches().limit(1).execute().count or 0

            rows: List[Dict[str, Any]] = []
            if offset < title_count:
                result = (
                    title_matches()
                    .order(column, desc=desc)
                    .range(offset, min(end, title_count) - 1)
                    .execute()
                )
                rows.extend(result.data or [])

            if end > title_count and content_count:
                start = max(offset - title_count, 0)
                stop = end - title_count
                result = (
                    content_only_matches()
                    .order(column, desc=desc)
                    .range(start, stop - 1)
                    .execute()
                )
                rows.extend(result.data or [])

            return [self._row_to_model(row) for row in rows], title_count + content_count

        except Exception as e:
            logger.error("note_search_failed", user_id=user_id, error=str(e))
            return [], 0

    def _row_to_model(self, row: Dict[str, Any]) -> Note:
        return Note(
            id=row["id"],
            user_id=row["user_id"],
            title=row.get("title") or "",
            content=row.get("content"),
            created_at=row.get("created_at"),
            updated_at=row.get("updated_at"),
        )
