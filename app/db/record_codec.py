"""Text codec for a single comment record.

A record is a ``---`` delimited metadata block of ``key: value`` lines followed
by the raw body::

    ---
    guid: 5f0c...
    reply_guid: 9ab1...
    date: 1700000000
    ip: 203.0.113.7
    author: alice
    pending: true
    ---
    body text, which may itself contain ---

``reply_guid`` and ``pending`` are only written when set.
"""

from __future__ import annotations

from pydantic import ValidationError

from app.core.constants import RECORD_DELIMITER, REQUIRED_RECORD_KEYS, TRUTHY_VALUES
from app.core.errors import RecordParseError
from app.models.comment import CommentRecord


def encode_record(record: CommentRecord) -> str:
    """Serialize *record* into its on-disk text form."""
    lines = [f"guid: {record.guid}"]
    if record.reply_guid:
        lines.append(f"reply_guid: {record.reply_guid}")
    lines.append(f"date: {record.created_at}")
    lines.append(f"ip: {record.remote_address}")
    lines.append(f"author: {record.author}")
    if record.pending:
        lines.append("pending: true")

    return RECORD_DELIMITER + "\n".join(lines) + "\n" + RECORD_DELIMITER + record.content


def _parse_meta(block: str) -> dict[str, str]:
    meta: dict[str, str] = {}
    # Split on "\n" only; the first occurrence of a key wins.
    for line in block.split("\n"):
        if not line.strip():
            continue
        key, sep, value = line.partition(":")
        if not sep:
            raise RecordParseError(f"malformed metadata line: {line!r}")
        meta.setdefault(key.strip(), value.strip())
    return meta


def decode_record(text: str) -> CommentRecord:
    """Parse the text form of a record.

    Raises ``RecordParseError`` when the delimiter structure is broken, a
    required key is missing, or ``date`` is not an integer.
    """
    segments = text.split(RECORD_DELIMITER)
    if len(segments) < 3 or segments[0].strip():
        raise RecordParseError("record is missing its metadata block")

    meta = _parse_meta(segments[1])
    missing = [key for key in REQUIRED_RECORD_KEYS if not meta.get(key)]
    if missing:
        raise RecordParseError(f"record is missing keys: {', '.join(missing)}")

    try:
        created_at = int(meta["date"])
    except ValueError as exc:
        raise RecordParseError(f"invalid date: {meta['date']!r}") from exc

    try:
        return CommentRecord(
            guid=meta["guid"],
            reply_guid=meta.get("reply_guid") or None,
            author=meta["author"],
            content=RECORD_DELIMITER.join(segments[2:]),
            created_at=created_at,
            remote_address=meta.get("ip", ""),
            pending=meta.get("pending", "").lower() in TRUTHY_VALUES,
        )
    except ValidationError as exc:
        raise RecordParseError(str(exc)) from exc
