"""Page comment endpoints.

GET  /pages/{page_id}/comments -- reply tree and approved count.
POST /pages/{page_id}/comments -- submit a comment, then return the tree.

Submission outcomes are reported in the body with ``200``; only pages that do
not declare comments at all answer ``404``.  Handlers are plain functions so
the file I/O runs in FastAPI's threadpool.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Request

from app.core.config import settings
from app.db.comment_store import get_comment_store, is_valid_page_id
from app.models.comment import CommentConfig
from app.models.enums import CommentsMode
from app.models.page import CommentForm, PageCommentsResult, PageContext
from app.services.page_comments import handle_page_request

logger = logging.getLogger(__name__)

router = APIRouter()


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _page_context(page_id: str) -> PageContext:
    """Resolve the page metadata, or 404 if the page has no comments."""
    page_id = page_id.strip("/")
    if not is_valid_page_id(page_id) or page_id in settings.disabled_pages:
        raise HTTPException(status_code=404, detail="Comments are not available on this page")

    mode = CommentsMode.readonly if page_id in settings.readonly_pages else CommentsMode.enabled
    return PageContext(page_id=page_id, comments=mode)


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.get("/pages/{page_id:path}/comments", response_model=PageCommentsResult)
def list_page_comments(page_id: str) -> PageCommentsResult:
    """Return the approved comments of a page, most recent first."""
    page = _page_context(page_id)
    return handle_page_request(
        get_comment_store(),
        page,
        CommentConfig.from_settings(settings),
    )


@router.post("/pages/{page_id:path}/comments", response_model=PageCommentsResult)
def submit_page_comment(
    page_id: str,
    form: CommentForm,
    request: Request,
) -> PageCommentsResult:
    """Submit a comment for a page and return the refreshed comments."""
    page = _page_context(page_id)
    origin_address = request.client.host if request.client else ""
    return handle_page_request(
        get_comment_store(),
        page,
        CommentConfig.from_settings(settings),
        submission=form.to_submission(origin_address),
    )
