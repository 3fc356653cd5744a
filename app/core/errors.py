"""Comment engine error taxonomy.

Validation and reply-target errors are raised before anything touches the
disk.  Storage errors wrap the underlying ``OSError``.  Parse errors never
leave the store: unreadable records are logged and skipped.
"""


class CommentError(Exception):
    """Base class for all comment engine errors."""


class CommentValidationError(CommentError):
    """Author, content or page id is unusable.

    The message is safe to show to the submitter.
    """


class DanglingReplyError(CommentError):
    """The reply target does not exist on this page."""

    def __init__(self, page_id: str, reply_guid: str) -> None:
        super().__init__(f"reply target {reply_guid!r} not found on page {page_id!r}")
        self.page_id = page_id
        self.reply_guid = reply_guid


class CommentStorageError(CommentError):
    """A directory or file operation failed."""


class RecordParseError(CommentError):
    """A stored record is malformed."""
