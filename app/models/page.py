"""Pydantic models for the page-level request and its outcome."""

from __future__ import annotations

from pydantic import BaseModel, Field

from app.models.comment import CommentView
from app.models.enums import CommentsMode, SubmissionStatus


class PageContext(BaseModel):
    """What the host knows about the page being rendered."""
    page_id: str
    comments: CommentsMode

    @property
    def submission_allowed(self) -> bool:
        return self.comments is CommentsMode.enabled


class CommentForm(BaseModel):
    """Submission body as posted by the page's comment form."""
    comment_author: str | None = None
    comment_content: str | None = None
    comment_replyguid: str | None = None
    website: str | None = Field(
        default=None,
        description="Honeypot field, left empty by humans",
    )

    def to_submission(self, origin_address: str) -> CommentSubmission:
        return CommentSubmission(
            author=self.comment_author,
            content=self.comment_content,
            reply_guid=self.comment_replyguid or None,
            honeypot=self.website,
            origin_address=origin_address,
        )


class CommentSubmission(BaseModel):
    """A new comment as received from the host."""
    author: str | None = None
    content: str | None = None
    reply_guid: str | None = None
    honeypot: str | None = None
    origin_address: str = ""


class PageCommentsResult(BaseModel):
    """Everything the host needs to render the comment section.

    ``comments`` is ``None`` when the tree could not be produced.
    """
    status: SubmissionStatus | None = None
    message: str | None = None
    message_status: int | None = None
    comments: list[CommentView] | None = None
    comments_number: int = 0
