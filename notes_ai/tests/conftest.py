"""Shared fixtures: in-memory repositories and a scripted AI client."""

import itertools
from datetime import datetime, timezone
from typing import Dict, List, Optional

import pytest

from notes_ai.core.execution import ErrorLogger, RetryExecutor
from notes_ai.core.notes import NoteService
from notes_ai.infrastructure.database.models import Note, Summary
from notes_ai.infrastructure.rate_limit import RegenerationLimiter


_ids = itertools.count(1)


def _next_id(prefix: str) -> str:
    return f"{prefix}-{next(_ids)}"


class FakeNoteRepository:
    def __init__(self):
        self.notes: Dict[str, Note] = {}

    def create_note(self, user_id, title, content):
        note = Note(id=_next_id("note"), user_id=user_id, title=title, content=content)
        self.notes[note.id] = note
        return note

    def get_note(self, note_id):
        return self.notes.get(note_id)

    def update_note(self, note_id, updates):
        note = self.notes.get(note_id)
        if note is None:
            return None
        for key, value in updates.items():
            setattr(note, key, value)
        return note

    def delete_note(self, note_id):
        return self.notes.pop(note_id, None) is not None

    def list_notes(self, user_id, page=1, limit=12, sort="newest"):
        owned = [n for n in self.notes.values() if n.user_id == user_id]
        start = (page - 1) * limit
        return owned[start:start + limit], len(owned)

    def search_notes(self, user_id, query, page=1, limit=12, sort="newest"):
        needle = query.strip().lower()
        owned = [n for n in self.notes.values() if n.user_id == user_id]
        title_hits = [n for n in owned if needle in n.title.lower()]
        content_hits = [
            n for n in owned if n not in title_hits and needle in (n.content or "").lower()
        ]
        ranked = title_hits + content_hits
        start = (page - 1) * limit
        return ranked[start:start + limit], len(ranked)


class FakeSummaryRepository:
    def __init__(self):
        self.summaries: Dict[str, Summary] = {}
        self.fail = False

    def get_latest(self, note_id):
        return self.summaries.get(note_id)

    def replace(self, note_id, content, model):
        if self.fail:
            raise RuntimeError("Supabase not configured")
        self.summaries[note_id] = Summary(
            id=_next_id("summary"), note_id=note_id, content=content, model=model
        )
        return True

    def clear(self, note_id):
        self.summaries.pop(note_id, None)
        return True


class FakeTagRepository:
    def __init__(self):
        self.tags: Dict[str, List[str]] = {}
        self.fail = False

    def list_tags(self, note_id):
        return list(self.tags.get(note_id, []))

    def replace(self, note_id, tags):
        if self.fail:
            raise RuntimeError("insert into note_tags failed")
        self.tags[note_id] = list(tags)
        return True


class FakeRegenerationRepository:
    def __init__(self):
        self.records: List[dict] = []
        self.unreachable = False

    def record(self, note_id, user_id, regeneration_type):
        self.records.append({"note_id": note_id, "user_id": user_id, "type": regeneration_type})

    def count_since(self, user_id, since):
        if self.unreachable:
            raise ConnectionError("database unreachable")
        return sum(1 for r in self.records if r["user_id"] == user_id)


class FakeEditHistoryRepository:
    def __init__(self):
        self.edits: List[dict] = []

    def record_edit(
        self, note_id, edit_type, edited_content, edited_by, original_content=None, is_manual_edit=True
    ):
        self.edits.append(
            {
                "note_id": note_id,
                "type": edit_type,
                "edited_content": edited_content,
                "edited_by": edited_by,
                "original_content": original_content,
            }
        )


class FakeErrorLogRepository:
    def __init__(self):
        self.rows: List[dict] = []

    def insert_log(self, log):
        row = dict(log, id=_next_id("log"), created_at=datetime.now(timezone.utc).isoformat())
        self.rows.append(row)
        return row["id"]

    def mark_resolved(self, log_id, user_id=None):
        for row in self.rows:
            if row["id"] == log_id and (user_id is None or row["user_id"] == user_id):
                row["resolved_at"] = datetime.now(timezone.utc).isoformat()
                return True
        return False

    def list_logs(self, user_id=None, limit=50, offset=0):
        return []

    def list_since(self, since, user_id=None):
        return []


class ScriptedAIClient:
    """Replays queued responses; exceptions in the queue are raised."""

    model_name = "gemini-test"

    def __init__(self, responses: Optional[list] = None):
        self.responses = list(responses or [])
        self.prompts: List[str] = []

    def is_configured(self):
        return True

    async def complete(self, prompt):
        self.prompts.append(prompt)
        response = self.responses.pop(0)
        if isinstance(response, BaseException):
            raise response
        return response


class FakeSleep:
    def __init__(self):
        self.calls: List[float] = []

    async def __call__(self, seconds):
        self.calls.append(seconds)


@pytest.fixture
def fake_sleep():
    return FakeSleep()


@pytest.fixture
def ai_client():
    return ScriptedAIClient()


@pytest.fixture
def repos():
    return {
        "notes": FakeNoteRepository(),
        "summaries": FakeSummaryRepository(),
        "tags": FakeTagRepository(),
        "regenerations": FakeRegenerationRepository(),
        "edit_history": FakeEditHistoryRepository(),
        "error_logs": FakeErrorLogRepository(),
    }


@pytest.fixture
def note_service(repos, ai_client, fake_sleep):
    return NoteService(
        notes=repos["notes"],
        summaries=repos["summaries"],
        tags=repos["tags"],
        regenerations=repos["regenerations"],
        edit_history=repos["edit_history"],
        ai_client=ai_client,
        limiter=RegenerationLimiter(repos["regenerations"]),
        error_logger=ErrorLogger(repos["error_logs"]),
        executor=RetryExecutor(sleep=fake_sleep),
    )
