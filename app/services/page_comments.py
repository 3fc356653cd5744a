"""Page comment service.

Entry point used by the host once per page render.  A submission (if any)
is handled first, then the page's records are always listed and assembled
into a reply tree so the submitter sees their own comment straight away.

Internal error details go to the log only; the caller always receives one
of the ``SubmissionStatus`` outcomes with a fixed message.
"""

from __future__ import annotations

import logging
import time

from app.core.constants import (
    MESSAGE_DISABLED,
    MESSAGE_MISSING_FIELDS,
    MESSAGE_REJECTED,
    MESSAGE_SERVER_ERROR,
    MESSAGE_SUBMITTED,
)
from app.core.errors import (
    CommentError,
    CommentStorageError,
    CommentValidationError,
    DanglingReplyError,
)
from app.db.comment_store import CommentStore
from app.models.comment import CommentConfig
from app.models.enums import SubmissionStatus
from app.models.page import CommentSubmission, PageCommentsResult, PageContext
from app.services.threads import build_thread

logger = logging.getLogger(__name__)

_MESSAGES: dict[SubmissionStatus, str] = {
    SubmissionStatus.submitted: MESSAGE_SUBMITTED,
    SubmissionStatus.disabled: MESSAGE_DISABLED,
    SubmissionStatus.missing_fields: MESSAGE_MISSING_FIELDS,
    SubmissionStatus.rejected: MESSAGE_REJECTED,
    SubmissionStatus.server_error: MESSAGE_SERVER_ERROR,
}


def _outcome(
    status: SubmissionStatus, detail: str | None = None
) -> tuple[SubmissionStatus, str]:
    message = _MESSAGES[status]
    if detail:
        message = f"{message}: {detail}"
    return status, message


def submit_comment(
    store: CommentStore,
    page: PageContext,
    submission: CommentSubmission,
    config: CommentConfig,
    now: int | None = None,
) -> tuple[SubmissionStatus, str]:
    """Try to create a comment and return the outcome with its message."""
    if not page.submission_allowed:
        return _outcome(SubmissionStatus.disabled)

    if submission.honeypot:
        # Looks like a success to whoever filled the hidden field.
        logger.info(
            "comment_honeypot_triggered",
            extra={"page_id": page.page_id, "remote_address": submission.origin_address},
        )
        return _outcome(SubmissionStatus.submitted)

    if submission.author is None or submission.content is None:
        return _outcome(SubmissionStatus.missing_fields)

    try:
        store.create(
            page.page_id,
            submission.author,
            submission.content,
            submission.reply_guid,
            submission.origin_address,
            int(time.time()) if now is None else now,
            config,
        )
    except CommentValidationError as exc:
        logger.info(
            "comment_rejected",
            extra={"page_id": page.page_id, "reason": str(exc)},
        )
        return _outcome(SubmissionStatus.rejected, str(exc))
    except DanglingReplyError as exc:
        logger.info(
            "comment_rejected",
            extra={"page_id": page.page_id, "reason": str(exc)},
        )
        return _outcome(SubmissionStatus.rejected)
    except CommentStorageError:
        logger.error(
            "comment_write_failed",
            extra={"page_id": page.page_id},
            exc_info=True,
        )
        return _outcome(SubmissionStatus.server_error)

    return _outcome(SubmissionStatus.submitted)


def handle_page_request(
    store: CommentStore,
    page: PageContext,
    config: CommentConfig,
    submission: CommentSubmission | None = None,
    now: int | None = None,
) -> PageCommentsResult:
    """Handle one page render, with or without a submission.

    Returns the reply tree and approved count, together with the submission
    outcome when there was one.  If the tree cannot be produced the result
    carries a ``server_error`` outcome and no comments.
    """
    result = PageCommentsResult()

    if submission is not None:
        status, message = submit_comment(store, page, submission, config, now)
        result.status = status
        result.message = message
        result.message_status = 0 if status is SubmissionStatus.submitted else 1

    try:
        thread = build_thread(store.list_records(page.page_id))
    except CommentError:
        logger.error(
            "comment_listing_failed",
            extra={"page_id": page.page_id},
            exc_info=True,
        )
        status, message = _outcome(SubmissionStatus.server_error)
        result.status = status
        result.message = message
        result.message_status = 1
        return result

    result.comments = [node.to_view() for node in thread.comments]
    result.comments_number = thread.approved_count
    return result
