"""Reply tree construction.

Turns the flat records of a page into a tree of ``CommentNode``s:

1. Pending records are dropped; the rest make up ``approved_count``.
2. Approved records are bucketed by the guid they reply to (``None`` for
   top-level comments).
3. Starting from the top-level bucket, each node takes its own bucket as
   replies.  Buckets are detached top-down with an explicit stack, so reply
   depth is not limited by the interpreter's recursion limit.
4. Once every node has its replies, each level is sorted by ``created_at``,
   most recent first.  The sort is stable, so ties keep enumeration order.

Replies whose parent is pending, missing, or itself unreachable are never
taken out of their bucket and therefore do not appear anywhere in the tree.
They still count towards ``approved_count``.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable

from app.models.comment import CommentNode, CommentRecord, CommentThread


def build_thread(records: Iterable[CommentRecord]) -> CommentThread:
    """Build the reply tree for a page's records.  Never raises."""
    buckets: dict[str | None, list[CommentRecord]] = defaultdict(list)
    approved_count = 0

    for record in records:
        if record.pending:
            continue
        approved_count += 1
        buckets[record.reply_guid].append(record)

    roots = [CommentNode(record=record) for record in buckets.pop(None, [])]
    levels: list[list[CommentNode]] = [roots]
    stack = list(roots)

    while stack:
        node = stack.pop()
        children = buckets.pop(node.guid, None)
        if not children:
            continue
        node.replies = [CommentNode(record=record) for record in children]
        levels.append(node.replies)
        stack.extend(node.replies)

    for level in levels:
        level.sort(key=lambda node: node.created_at, reverse=True)

    return CommentThread(comments=roots, approved_count=approved_count)
