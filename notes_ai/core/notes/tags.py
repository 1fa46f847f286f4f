"""Tag and summary normalization for notes.

One canonical tag rule applies to AI output and manual edits alike:
trim, lowercase, drop empties, drop duplicates keeping the first.
"""

from typing import Any, Iterable, List

from notes_ai.core.exceptions import NoteValidationError

MAX_AI_TAGS = 6
MAX_MANUAL_TAGS = 10
MAX_SUMMARY_LENGTH = 1000


def _canonical(tags: Iterable[str]) -> List[str]:
    result: List[str] = []
    for tag in tags:
        cleaned = tag.strip().lower()
        if cleaned and cleaned not in result:
            result.append(cleaned)
    return result


def parse_tags(raw: str, max_tags: int = MAX_AI_TAGS) -> List[str]:
    """Parse comma-separated model output into at most max_tags tags."""
    return _canonical(raw.split(","))[:max_tags]


def normalize_tags(tags: Any, max_tags: int = MAX_MANUAL_TAGS) -> List[str]:
    """Validate and normalize a manually edited tag list.

    Raises:
        NoteValidationError: Not a list, too many tags, or no usable tag
    """
    if not isinstance(tags, (list, tuple)):
        raise NoteValidationError("Tags must be a list")

    if len(tags) > max_tags:
        raise NoteValidationError(f"At most {max_tags} tags are allowed")

    normalized = _canonical(tag for tag in tags if isinstance(tag, str))
    if not normalized:
        raise NoteValidationError("Please enter at least one valid tag")

    return normalized


def validate_summary(summary: Any) -> str:
    """Validate a manually edited summary and return it trimmed.

    Raises:
        NoteValidationError: Empty or longer than 1000 characters
    """
    if not isinstance(summary, str) or not summary.strip():
        raise NoteValidationError("Please enter the summary content")

    cleaned = summary.strip()
    if len(cleaned) > MAX_SUMMARY_LENGTH:
        raise NoteValidationError(f"Summaries are limited to {MAX_SUMMARY_LENGTH} characters")

    return cleaned
