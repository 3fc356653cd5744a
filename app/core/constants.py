"""Application constants.

Contains the on-disk record format and the messages shown to submitters.
"""

# ---------------------------------------------------------------------------
# Record format
# ---------------------------------------------------------------------------
RECORD_DELIMITER: str = "---\n"
RECORD_SUFFIX: str = ".md"
GUID_BYTES: int = 16
RECORD_FILE_MODE: int = 0o644

REQUIRED_RECORD_KEYS: tuple[str, ...] = ("guid", "date", "author")
TRUTHY_VALUES: frozenset[str] = frozenset({"true", "1", "yes"})

# ---------------------------------------------------------------------------
# Submitter-facing messages
# ---------------------------------------------------------------------------
MESSAGE_SUBMITTED: str = "Comment submitted"
MESSAGE_DISABLED: str = "Comment submission is disabled on this page"
MESSAGE_MISSING_FIELDS: str = "Please fill out all required fields."
MESSAGE_REJECTED: str = "Comment not submitted"
MESSAGE_SERVER_ERROR: str = "Server error"
