"""Enum types shared by the comment models."""

from enum import Enum


class CommentsMode(str, Enum):
    """Comment support declared by a page's metadata."""
    enabled = "enabled"
    readonly = "readonly"


class SubmissionStatus(str, Enum):
    """Outcome of handling a page request."""
    submitted = "submitted"
    disabled = "disabled"
    missing_fields = "missing_fields"
    rejected = "rejected"
    server_error = "server_error"
