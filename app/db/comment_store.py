"""On-disk comment store.

Each page owns a directory under the storage root (nested page ids map to
nested directories) holding one immutable ``<guid>.md`` file per comment.
New files are written to a hidden temporary file first and then hard-linked
into place, so a record is either fully visible or not visible at all, and
an existing name is never overwritten.

Provides ``get_comment_store()`` which returns a lazily-initialized,
process-wide store rooted at ``settings.COMMENTS_STORAGE_PATH``.
"""

from __future__ import annotations

import logging
import os
import re
import secrets
import tempfile
from collections.abc import Iterator
from pathlib import Path

from app.core.config import settings
from app.core.constants import GUID_BYTES, RECORD_FILE_MODE, RECORD_SUFFIX
from app.core.errors import (
    CommentStorageError,
    CommentValidationError,
    DanglingReplyError,
    RecordParseError,
)
from app.core.sanitize import sanitize_author, sanitize_content, single_line
from app.db.record_codec import decode_record, encode_record
from app.models.comment import CommentConfig, CommentRecord

logger = logging.getLogger(__name__)

_PAGE_SEGMENT_RE = re.compile(r"^[A-Za-z0-9._-]+$")


def is_valid_page_id(page_id: str) -> bool:
    """Check that *page_id* maps to a directory below the storage root."""
    trimmed = page_id.strip("/")
    if not trimmed:
        return False
    return all(
        segment not in (".", "..") and _PAGE_SEGMENT_RE.match(segment)
        for segment in trimmed.split("/")
    )


class CommentStore:
    """Creates and lists comment records below *root*."""

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root)

    def page_dir(self, page_id: str) -> Path:
        """Return the directory holding *page_id*'s records."""
        if not is_valid_page_id(page_id):
            raise CommentValidationError("Invalid page")
        return self.root.joinpath(*page_id.strip("/").split("/"))

    # ------------------------------------------------------------------
    # Write side
    # ------------------------------------------------------------------

    def create(
        self,
        page_id: str,
        author: str,
        content: str,
        reply_guid: str | None,
        origin_address: str,
        now: int,
        config: CommentConfig,
    ) -> str:
        """Persist a new comment and return its guid.

        Raises ``CommentValidationError`` or ``DanglingReplyError`` before
        touching the disk, and ``CommentStorageError`` if the record could not
        be written in full.
        """
        directory = self.page_dir(page_id)
        author = sanitize_author(author)
        content = sanitize_content(content, config.comment_size_limit)

        if reply_guid is not None and not self._has_record(directory, reply_guid):
            raise DanglingReplyError(page_id, reply_guid)

        record = CommentRecord(
            guid=secrets.token_hex(GUID_BYTES),
            reply_guid=reply_guid,
            author=author,
            content=content,
            created_at=now,
            remote_address=single_line(origin_address),
            pending=config.comment_review_enabled,
        )

        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise CommentStorageError(f"could not create {directory}") from exc

        self._write_exclusive(directory / f"{record.guid}{RECORD_SUFFIX}", encode_record(record))

        logger.info(
            "comment_created",
            extra={
                "page_id": page_id,
                "guid": record.guid,
                "reply_guid": reply_guid,
                "pending": record.pending,
                "remote_address": record.remote_address,
            },
        )
        return record.guid

    def _has_record(self, directory: Path, guid: str) -> bool:
        if not directory.is_dir():
            return False
        try:
            return any(path.stem == guid for path in self._record_paths(directory))
        except OSError as exc:
            raise CommentStorageError(f"could not scan {directory}") from exc

    @staticmethod
    def _write_exclusive(target: Path, text: str) -> None:
        tmp_path: Path | None = None
        try:
            fd, tmp_name = tempfile.mkstemp(prefix=".", suffix=".tmp", dir=target.parent)
            tmp_path = Path(tmp_name)
            with os.fdopen(fd, "w", encoding="utf-8", newline="") as handle:
                # mkstemp creates owner-only files; records are world-readable.
                os.chmod(tmp_path, RECORD_FILE_MODE)
                handle.write(text)
                handle.flush()
                os.fsync(handle.fileno())
            # Fails with FileExistsError rather than replacing a record.
            os.link(tmp_path, target)
        except OSError as exc:
            raise CommentStorageError(f"could not write {target}") from exc
        finally:
            if tmp_path is not None:
                tmp_path.unlink(missing_ok=True)

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------

    def list_records(self, page_id: str) -> Iterator[CommentRecord]:
        """Return the decodable records of *page_id*.

        The directory is enumerated eagerly, so ``CommentStorageError`` is
        raised here; files are decoded lazily.  Unparseable files are logged
        and skipped.
        """
        directory = self.page_dir(page_id)
        if not directory.exists():
            return iter(())
        try:
            paths = self._record_paths(directory)
        except OSError as exc:
            raise CommentStorageError(f"could not list {directory}") from exc
        return self._read_records(page_id, paths)

    @staticmethod
    def _record_paths(directory: Path) -> list[Path]:
        return sorted(
            path
            for path in directory.iterdir()
            if path.suffix == RECORD_SUFFIX
            and not path.name.startswith(".")
            and path.is_file()
        )

    @staticmethod
    def _read_records(page_id: str, paths: list[Path]) -> Iterator[CommentRecord]:
        for path in paths:
            try:
                yield decode_record(path.read_bytes().decode("utf-8"))
            except (RecordParseError, UnicodeDecodeError) as exc:
                logger.warning(
                    "comment_record_skipped",
                    extra={
                        "page_id": page_id,
                        "file": path.name,
                        "error_message": str(exc),
                    },
                )
            except OSError:
                logger.warning(
                    "comment_record_unreadable",
                    extra={"page_id": page_id, "file": path.name},
                    exc_info=True,
                )


_store: CommentStore | None = None


def get_comment_store() -> CommentStore:
    """Return the singleton comment store, creating it on first call."""
    global _store
    if _store is None:
        _store = CommentStore(settings.COMMENTS_STORAGE_PATH)
    return _store
