"""Note workflows for the notes API.

Creates, edits, searches, and deletes notes, and generates their AI summaries
and tags through the retry executor.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from notes_ai.core.exceptions import NoteValidationError
from notes_ai.core.execution.error_classifier import AIError
from notes_ai.core.execution.error_logger import ErrorLogger
from notes_ai.core.execution.retry_executor import RetryExecutor, RetryResult
from notes_ai.core.execution.retry_state import RetryState
from notes_ai.core.logging import logger
from notes_ai.core.notes.tags import normalize_tags, parse_tags, validate_summary
from notes_ai.core.retry_config import RetryConfig
from notes_ai.infrastructure.database.models import Note, Summary
from notes_ai.infrastructure.database.repositories import (
    EditHistoryRepository,
    NoteRepository,
    RegenerationRepository,
    SummaryRepository,
    TagRepository,
)
from notes_ai.infrastructure.rate_limit import RegenerationCount, RegenerationLimiter
from notes_ai.integrations.gemini import GeminiClient, create_summary_prompt, create_tag_prompt
from notes_ai.utils.text import content_preview, highlight_text

DEFAULT_TITLE = "Untitled"
MAX_TITLE_LENGTH = 200
MAX_CONTENT_LENGTH = 50000
DEFAULT_PAGE_SIZE = 12
MAX_PAGE_SIZE = 100
REGENERATION_KINDS = ("summary", "tags", "both")


@dataclass
class ServiceResult:
    """Outcome of a note workflow.

    status_code is the HTTP status the API should answer with.
    """

    success: bool
    data: Dict[str, Any] = field(default_factory=dict)
    error: Optional[str] = None
    ai_error: Optional[AIError] = None
    status_code: int = 200

    @classmethod
    def ok(cls, **data: Any) -> "ServiceResult":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: str, status_code: int, ai_error: Optional[AIError] = None) -> "ServiceResult":
        return cls(success=False, error=error, status_code=status_code, ai_error=ai_error)

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"success": self.success}
        if not self.success:
            body["error"] = self.error
        if self.success or self.data:
            body["data"] = self.data
        if self.ai_error is not None:
            body["ai_error"] = self.ai_error.to_dict()
        return body


@dataclass
class GenerationOutcome:
    summary: Optional[str] = None
    tags: Optional[List[str]] = None
    error: Optional[AIError] = None
    attempts: int = 0
    retry_state: Optional[RetryState] = None

    @property
    def success(self) -> bool:
        return self.error is None


def note_to_dict(
    note: Note, summary: Optional[str] = None, tags: Optional[List[str]] = None
) -> Dict[str, Any]:
    return {
        "id": note.id,
        "title": note.title,
        "content": note.content,
        "summary": summary,
        "tags": tags or [],
        "created_at": note.created_at,
        "updated_at": note.updated_at,
    }


class NoteService:
    """User-facing note actions.

    Expected failures come back as ServiceResult; nothing here raises past the
    service boundary for bad input, missing notes, or AI errors.
    """

    def __init__(
        self,
        notes: Optional[NoteRepository] = None,
        summaries: Optional[SummaryRepository] = None,
        tags: Optional[TagRepository] = None,
        regenerations: Optional[RegenerationRepository] = None,
        edit_history: Optional[EditHistoryRepository] = None,
        ai_client: Optional[GeminiClient] = None,
        limiter: Optional[RegenerationLimiter] = None,
        error_logger: Optional[ErrorLogger] = None,
        executor: Optional[RetryExecutor] = None,
        retry_config: Optional[RetryConfig] = None,
    ):
        self.notes = notes or NoteRepository()
        self.summaries = summaries or SummaryRepository()
        self.tags = tags or TagRepository()
        self.regenerations = regenerations or RegenerationRepository()
        self.edit_history = edit_history or EditHistoryRepository()
        self.ai_client = ai_client or GeminiClient()
        self.limiter = limiter or RegenerationLimiter(self.regenerations)
        self.error_logger = error_logger or ErrorLogger()
        self.executor = executor or RetryExecutor()
        self.retry_config = retry_config or RetryConfig()

    # ------------------------------------------------------------------
    # Notes
    # ------------------------------------------------------------------

    async def create_note(
        self, user_id: str, title: str, content: Optional[str], generate_ai: bool = True
    ) -> ServiceResult:
        """Create a note and, when it has content, generate summary and tags.

        An AI failure does not fail the creation; it is reported in the result.
        """
        try:
            clean_title = self._clean_title(title)
            clean_content = self._clean_content(content)
        except NoteValidationError as e:
            return ServiceResult.fail(str(e), 400)

        note = self.notes.create_note(user_id, clean_title, clean_content)
        if note is None:
            return ServiceResult.fail("Failed to save the note", 500)

        if not (generate_ai and clean_content):
            return ServiceResult.ok(note=note_to_dict(note))

        outcome = await self._generate(note, "both", user_id)
        if not outcome.success:
            result = ServiceResult.ok(note=note_to_dict(note), retry=outcome.retry_state.to_dict())
            result.ai_error = outcome.error
            return result

        stored = self._store_generated(note.id, outcome)
        return ServiceResult.ok(
            note=note_to_dict(
                note,
                outcome.summary if stored else None,
                outcome.tags if stored else None,
            )
        )

    async def update_note(
        self,
        user_id: str,
        note_id: str,
        title: Optional[str] = None,
        content: Optional[str] = None,
        regenerate_ai: bool = False,
    ) -> ServiceResult:
        """Update title and/or content; optionally regenerate AI output for the new content."""
        note, failure = self._owned_note(user_id, note_id)
        if failure:
            return failure

        updates: Dict[str, Any] = {}
        try:
            if title is not None:
                updates["title"] = self._clean_title(title)
            if content is not None:
                updates["content"] = self._clean_content(content)
        except NoteValidationError as e:
            return ServiceResult.fail(str(e), 400)

        if not updates:
            return ServiceResult.fail("Nothing to update", 400)

        updated = self.notes.update_note(note_id, updates)
        if updated is None:
            return ServiceResult.fail("Failed to save the note", 500)

        if not (regenerate_ai and updated.content):
            return ServiceResult.ok(note=note_to_dict(updated))

        # The edit is saved either way; a failed regeneration is reported alongside it
        regeneration = await self._regenerate_owned(user_id, updated, "both")
        if regeneration.success:
            return ServiceResult.ok(
                note=note_to_dict(
                    updated, regeneration.data.get("summary"), regeneration.data.get("tags")
                ),
                regeneration=regeneration.data["regeneration"],
            )

        result = ServiceResult.ok(
            note=note_to_dict(updated), regeneration_error=regeneration.error, **regeneration.data
        )
        result.ai_error = regeneration.ai_error
        return result

    def delete_note(self, user_id: str, note_id: str) -> ServiceResult:
        note, failure = self._owned_note(user_id, note_id)
        if failure:
            return failure

        if not self.notes.delete_note(note_id):
            return ServiceResult.fail("Failed to delete the note", 500)
        return ServiceResult.ok(id=note_id)

    def get_note(self, user_id: str, note_id: str) -> ServiceResult:
        """Note with its current summary and tags."""
        note, failure = self._owned_note(user_id, note_id)
        if failure:
            return failure

        summary = self.summaries.get_latest(note_id)
        return ServiceResult.ok(
            note=note_to_dict(note, summary.content if summary else None, self.tags.list_tags(note_id))
        )

    def list_notes(
        self, user_id: str, page: int = 1, limit: int = DEFAULT_PAGE_SIZE, sort: str = "newest"
    ) -> ServiceResult:
        page, limit = self._page_args(page, limit)
        notes, total = self.notes.list_notes(user_id, page=page, limit=limit, sort=sort)
        items = [dict(note_to_dict(note), preview=content_preview(note.content)) for note in notes]
        return ServiceResult.ok(notes=items, total_count=total, page=page, limit=limit)

    def search_notes(
        self,
        user_id: str,
        query: str,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
        sort: str = "newest",
    ) -> ServiceResult:
        """Search title and content; title matches come first. Blank queries list notes."""
        if not query or not query.strip():
            return self.list_notes(user_id, page=page, limit=limit, sort=sort)

        page, limit = self._page_args(page, limit)
        notes, total = self.notes.search_notes(user_id, query, page=page, limit=limit, sort=sort)
        items = [
            dict(
                note_to_dict(note),
                preview=content_preview(note.content),
                highlighted_title=highlight_text(note.title, query),
                highlighted_preview=highlight_text(content_preview(note.content), query),
            )
            for note in notes
        ]
        return ServiceResult.ok(
            notes=items, total_count=total, page=page, limit=limit, query=query.strip()
        )

    # ------------------------------------------------------------------
    # AI summary and tags
    # ------------------------------------------------------------------

    async def regenerate(self, user_id: str, note_id: str, kind: str = "both") -> ServiceResult:
        """Regenerate the summary, the tags, or both, within the daily limit."""
        if kind not in REGENERATION_KINDS:
            return ServiceResult.fail(
                f"Invalid regeneration type '{kind}'. Use one of: {', '.join(REGENERATION_KINDS)}",
                400,
            )

        note, failure = self._owned_note(user_id, note_id)
        if failure:
            return failure

        return await self._regenerate_owned(user_id, note, kind)

    def update_summary(self, user_id: str, note_id: str, summary: Any) -> ServiceResult:
        """Replace the summary with a manual edit."""
        try:
            cleaned = validate_summary(summary)
        except NoteValidationError as e:
            return ServiceResult.fail(str(e), 400)

        note, failure = self._owned_note(user_id, note_id)
        if failure:
            return failure

        previous = self.summaries.get_latest(note_id)
        try:
            self.summaries.replace(note_id, cleaned, model="manual")
        except Exception as e:
            logger.error("summary_update_failed", note_id=note_id, error=str(e))
            return ServiceResult.fail("Failed to save the summary", 500)

        self.edit_history.record_edit(
            note_id,
            "summary",
            edited_content=cleaned,
            edited_by=user_id,
            original_content=previous.content if previous else None,
        )
        return ServiceResult.ok(summary=cleaned)

    def update_tags(self, user_id: str, note_id: str, tags: Any) -> ServiceResult:
        """Replace the tags with a manual edit."""
        try:
            normalized = normalize_tags(tags)
        except NoteValidationError as e:
            return ServiceResult.fail(str(e), 400)

        note, failure = self._owned_note(user_id, note_id)
        if failure:
            return failure

        previous = self.tags.list_tags(note_id)
        try:
            self.tags.replace(note_id, normalized)
        except Exception as e:
            logger.error("tags_update_failed", note_id=note_id, error=str(e))
            return ServiceResult.fail("Failed to save the tags", 500)

        self.edit_history.record_edit(
            note_id,
            "tags",
            edited_content=", ".join(normalized),
            edited_by=user_id,
            original_content=", ".join(previous) if previous else None,
        )
        return ServiceResult.ok(tags=normalized)

    def get_regeneration_count(self, user_id: str) -> RegenerationCount:
        return self.limiter.get_status(user_id)

    async def generate_preview(self, user_id: str, text: str) -> ServiceResult:
        """Summary and tags for arbitrary text, without storing anything."""
        if not text or not text.strip():
            return ServiceResult.fail("Text is required", 400)

        outcome = await self._run_generation(text, "both")
        if not outcome.success:
            self.error_logger.log_error(outcome.error, user_id, retry_count=outcome.attempts - 1)
            return ServiceResult.fail(outcome.error.user_message, 502, ai_error=outcome.error)

        return ServiceResult.ok(summary=outcome.summary, tags=outcome.tags)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    async def _regenerate_owned(self, user_id: str, note: Note, kind: str) -> ServiceResult:
        if not note.content:
            return ServiceResult.fail("The note has no content to process", 400)

        status = self.limiter.get_status(user_id)
        if not status.can_regenerate:
            result = ServiceResult.fail(
                f"Daily regeneration limit reached ({status.current_count}/{status.limit})",
                429,
            )
            result.data["regeneration"] = status.to_dict()
            return result

        outcome = await self._generate(note, kind, user_id)
        if not outcome.success:
            result = ServiceResult.fail(outcome.error.user_message, 502, ai_error=outcome.error)
            result.data["retry"] = outcome.retry_state.to_dict()
            return result

        if not self._store_generated(note.id, outcome):
            return ServiceResult.fail("Failed to save AI results", 500)

        self.regenerations.record(note.id, user_id, kind)

        data: Dict[str, Any] = {"type": kind}
        if outcome.summary is not None:
            data["summary"] = outcome.summary
        if outcome.tags is not None:
            data["tags"] = outcome.tags
        data["regeneration"] = RegenerationCount(
            current_count=status.current_count + 1,
            limit=status.limit,
            can_regenerate=status.current_count + 1 < status.limit,
        ).to_dict()
        return ServiceResult.ok(**data)

    async def _generate(self, note: Note, kind: str, user_id: str) -> GenerationOutcome:
        """Run generation for a note and log the failure, if any."""
        outcome = await self._run_generation(note.content or "", kind)
        if not outcome.success:
            self.error_logger.log_error(
                outcome.error,
                user_id,
                note_id=note.id,
                retry_count=max(outcome.attempts - 1, 0),
            )
        return outcome

    async def _run_generation(self, content: str, kind: str) -> GenerationOutcome:
        state = RetryState()
        outcome = GenerationOutcome(retry_state=state)

        if kind in ("summary", "both"):
            result = await self._complete(create_summary_prompt(content), state)
            outcome.attempts += result.attempts
            if not result.success:
                outcome.error = result.error
                return outcome
            outcome.summary = result.data

        if kind in ("tags", "both"):
            result = await self._complete(create_tag_prompt(content), state)
            outcome.attempts += result.attempts
            if not result.success:
                outcome.error = result.error
                return outcome
            outcome.tags = parse_tags(result.data)

        return outcome

    async def _complete(self, prompt: str, state: RetryState) -> RetryResult[str]:
        result = await self.executor.execute(
            lambda: self.ai_client.complete(prompt),
            self.retry_config,
            on_retry=state.tracker(),
        )
        state.stop_retry()
        if not result.success:
            state.set_error(result.error)
        return result

    def _store_generated(self, note_id: str, outcome: GenerationOutcome) -> bool:
        previous = self.summaries.get_latest(note_id) if outcome.summary is not None else None
        summary_written = False
        try:
            if outcome.summary is not None:
                self.summaries.replace(note_id, outcome.summary, model=self.ai_client.model_name)
                summary_written = True
            if outcome.tags is not None:
                self.tags.replace(note_id, outcome.tags)
        except Exception as e:
            logger.error("ai_results_store_failed", note_id=note_id, error=str(e))
            if summary_written:
                self._restore_summary(note_id, previous)
            return False
        return True

    def _restore_summary(self, note_id: str, previous: Optional[Summary]) -> None:
        """Put back the summary that was stored before a failed save."""
        try:
            if previous is None:
                self.summaries.clear(note_id)
            else:
                self.summaries.replace(note_id, previous.content, model=previous.model)
        except Exception as e:
            logger.error("summary_restore_failed", note_id=note_id, error=str(e))

    def _owned_note(self, user_id: str, note_id: str) -> Tuple[Optional[Note], Optional[ServiceResult]]:
        note = self.notes.get_note(note_id)
        if note is None or note.user_id != user_id:
            return None, ServiceResult.fail("Note not found or access denied", 404)
        return note, None

    @staticmethod
    def _clean_title(title: Optional[str]) -> str:
        cleaned = (title or "").strip() or DEFAULT_TITLE
        if len(cleaned) > MAX_TITLE_LENGTH:
            raise NoteValidationError(f"Titles are limited to {MAX_TITLE_LENGTH} characters")
        return cleaned

    @staticmethod
    def _clean_content(content: Optional[str]) -> Optional[str]:
        cleaned = (content or "").strip()
        if len(cleaned) > MAX_CONTENT_LENGTH:
            raise NoteValidationError(f"Content is limited to {MAX_CONTENT_LENGTH:,} characters")
        return cleaned or None

    @staticmethod
    def _page_args(page: int, limit: int) -> Tuple[int, int]:
        page = page if page and page > 0 else 1
        limit = limit if limit and limit > 0 else DEFAULT_PAGE_SIZE
        return page, min(limit, MAX_PAGE_SIZE)
