"""User input sanitization for new comments.

Markup is neutralised by HTML-escaping (quotes included).  Author names
additionally lose any tags and surrounding whitespace, since they are written
into a single metadata line.
"""

from __future__ import annotations

import html
import re
import unicodedata

from app.core.errors import CommentValidationError

_TAG_RE = re.compile(r"<[^>]*>?")
_CONTENT_WHITESPACE = frozenset("\n\r\t")
_CONTROL: frozenset[str] = frozenset({"Cc"})
# Categories str.splitlines() breaks on.
_LINE_BREAKING: frozenset[str] = frozenset({"Cc", "Zl", "Zp"})


def _has_control_chars(
    text: str,
    allowed: frozenset[str] = frozenset(),
    categories: frozenset[str] = _CONTROL,
) -> bool:
    return any(
        unicodedata.category(ch) in categories and ch not in allowed for ch in text
    )


def sanitize_author(author: str) -> str:
    """Return a display-safe author name.

    Raises ``CommentValidationError`` if the name contains control characters or
    line separators, or is empty once tags and whitespace are removed.
    """
    if _has_control_chars(author, categories=_LINE_BREAKING):
        raise CommentValidationError("Name contains invalid characters")
    cleaned = _TAG_RE.sub("", author).strip()
    if not cleaned:
        raise CommentValidationError("Name is required")
    return html.escape(cleaned, quote=True)


def sanitize_content(content: str, size_limit: int) -> str:
    """Return escaped comment content.

    Raises ``CommentValidationError`` for blank content, control characters
    other than line breaks and tabs, or content longer than *size_limit*
    characters after escaping.
    """
    if _has_control_chars(content, _CONTENT_WHITESPACE):
        raise CommentValidationError("Comment contains invalid characters")
    if not content.strip():
        raise CommentValidationError("Comment is required")
    escaped = html.escape(content, quote=True)
    if len(escaped) > size_limit:
        raise CommentValidationError(
            f"Comment is longer than {size_limit} characters"
        )
    return escaped


def single_line(value: str) -> str:
    """Drop control characters and line separators from a metadata value."""
    return "".join(
        ch for ch in value if not _has_control_chars(ch, categories=_LINE_BREAKING)
    ).strip()
