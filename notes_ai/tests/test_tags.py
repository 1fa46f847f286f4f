"""Unit tests for tag and summary normalization."""

import pytest

from notes_ai.core.exceptions import NoteValidationError
from notes_ai.core.notes import normalize_tags, parse_tags, validate_summary


class TestParseTags:
    """Test parsing of comma-separated model output."""

    def test_basic(self):
        assert parse_tags("react, typescript, 웹개발") == ["react", "typescript", "웹개발"]

    def test_drops_blank_entries(self):
        assert parse_tags("react, , typescript") == ["react", "typescript"]

    def test_truncates_to_six(self):
        raw = "a1, b2, c3, d4, e5, f6, g7, h8"

        assert parse_tags(raw) == ["a1", "b2", "c3", "d4", "e5", "f6"]

    def test_lowercases_and_dedupes(self):
        """Test the canonical rule applies to AI output too."""
        assert parse_tags("React, react , TypeScript") == ["react", "typescript"]

    def test_idempotent(self):
        once = parse_tags(" Python,  FastAPI ,,python ")

        assert parse_tags(", ".join(once)) == once


class TestNormalizeTags:
    """Test validation of manually edited tags."""

    def test_normalizes(self):
        assert normalize_tags([" Work ", "work", "Ideas", ""]) == ["work", "ideas"]

    def test_rejects_non_list(self):
        with pytest.raises(NoteValidationError):
            normalize_tags("work, ideas")

    def test_rejects_too_many(self):
        with pytest.raises(NoteValidationError, match="At most 10"):
            normalize_tags([f"tag{i}" for i in range(11)])

    def test_rejects_all_blank(self):
        with pytest.raises(NoteValidationError):
            normalize_tags(["  ", ""])


class TestValidateSummary:
    """Test validation of manually edited summaries."""

    def test_trims(self):
        assert validate_summary("  - point one\n") == "- point one"

    @pytest.mark.parametrize("summary", ["", "   ", None])
    def test_rejects_empty(self, summary):
        with pytest.raises(NoteValidationError):
            validate_summary(summary)

    def test_rejects_too_long(self):
        with pytest.raises(NoteValidationError, match="1000"):
            validate_summary("x" * 1001)

    def test_accepts_max_length(self):
        assert len(validate_summary("x" * 1000)) == 1000
