"""Pydantic models for stored comments and the reply tree built from them.

``CommentRecord`` is what lives on disk, one file per record.
``CommentNode`` wraps a record with its approved direct replies and only
exists for the duration of a read.  ``CommentView`` is the rendered shape
handed to the host, without the remote address or moderation flag.
``CommentThread`` bundles the top-level nodes with the approved count.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from app.core.config import Settings


class CommentConfig(BaseModel):
    """Per-request comment policy."""
    comment_size_limit: int = Field(gt=0)
    comment_review_enabled: bool = False

    @classmethod
    def from_settings(cls, settings: Settings) -> CommentConfig:
        return cls(
            comment_size_limit=settings.COMMENT_SIZE_LIMIT,
            comment_review_enabled=settings.COMMENT_REVIEW,
        )


class CommentRecord(BaseModel):
    """One persisted comment."""
    model_config = ConfigDict(frozen=True)

    guid: str
    reply_guid: str | None = None
    author: str
    content: str
    created_at: int
    # For administrative use only, never dumped.
    remote_address: str = Field(default="", repr=False, exclude=True)
    pending: bool = False


class CommentView(BaseModel):
    """A comment as rendered for readers."""
    guid: str
    author: str
    content: str
    created_at: int
    replies: list[CommentView] = Field(default_factory=list)


class CommentNode(BaseModel):
    """A record plus its approved direct replies, most recent first."""
    record: CommentRecord
    replies: list[CommentNode] = Field(default_factory=list)

    @property
    def guid(self) -> str:
        return self.record.guid

    @property
    def created_at(self) -> int:
        return self.record.created_at

    def _bare_view(self) -> CommentView:
        return CommentView(
            guid=self.record.guid,
            author=self.record.author,
            content=self.record.content,
            created_at=self.record.created_at,
        )

    def to_view(self) -> CommentView:
        """Render this node and all of its descendants, without recursion."""
        root = self._bare_view()
        stack: list[tuple[CommentNode, CommentView]] = [(self, root)]
        while stack:
            node, view = stack.pop()
            for reply in node.replies:
                child = reply._bare_view()
                view.replies.append(child)
                stack.append((reply, child))
        return root


class CommentThread(BaseModel):
    """Top-level comments with their replies, plus the approved count."""
    comments: list[CommentNode] = Field(default_factory=list)
    approved_count: int = 0
