"""Text helpers for note listings and search results."""

import html
import re

EMPTY_PREVIEW = "No content."


def content_preview(content, max_length: int = 150) -> str:
    """First max_length characters of the trimmed content, with an ellipsis when cut.

    Example:
        >>> content_preview("  hello world  ", max_length=5)
        'hello…'
    """
    base = (content or "").strip()
    if not base:
        return EMPTY_PREVIEW
    if len(base) <= max_length:
        return base
    return base[:max_length] + "…"


def highlight_text(text: str, query: str) -> str:
    """Wrap case-insensitive occurrences of query in <mark> tags.

    The surrounding text is HTML-escaped so the result can be rendered as markup.
    """
    if not text or not query or not query.strip():
        return text

    # The capture group keeps matches at odd indices of the split
    parts = re.split(f"({re.escape(query)})", text, flags=re.IGNORECASE)
    return "".join(
        f"<mark>{html.escape(part)}</mark>" if i % 2 else html.escape(part)
        for i, part in enumerate(parts)
    )
