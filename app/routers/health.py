"""Health check endpoint.

Returns service status including whether the comment storage root can be
written to.
"""

import logging
import os
from typing import Any

from fastapi import APIRouter
from starlette.responses import JSONResponse

from app.db.comment_store import get_comment_store

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health")
def health_check() -> Any:
    """Return health status of the comment storage.

    Returns 200 OK when the storage root is a writable directory, 503
    otherwise.
    """
    storage_status = "unavailable"

    try:
        root = get_comment_store().root
        if root.is_dir() and os.access(root, os.W_OK):
            storage_status = "writable"
        elif not root.exists():
            # Created on the first submission.
            parent = root.resolve().parent
            if parent.is_dir() and os.access(parent, os.W_OK):
                storage_status = "writable"
    except Exception:
        logger.warning("Health check: storage check failed", exc_info=True)

    payload: dict[str, str] = {
        "status": "ok" if storage_status == "writable" else "degraded",
        "storage": storage_status,
    }

    if storage_status != "writable":
        return JSONResponse(status_code=503, content=payload)

    return payload
