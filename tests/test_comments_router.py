"""API tests for the page comment endpoints."""

from __future__ import annotations

from collections.abc import Generator
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.db.comment_store import CommentStore

BASE = "/api/v1/pages"


@pytest.fixture()
def page_settings() -> Generator[Settings, None, None]:
    """Patch router settings with one read-only and one comment-less page."""
    custom = Settings(
        _env_file=None,  # type: ignore[call-arg]
        COMMENT_SIZE_LIMIT=50,
        COMMENTS_READONLY_PAGES="blog/closed",
        COMMENTS_DISABLED_PAGES="about",
    )
    with patch("app.routers.comments.settings", custom):
        yield custom


class TestListComments:
    """GET /pages/{page_id}/comments."""

    def test_empty_page(self, test_client: TestClient, page_settings: Settings) -> None:
        response = test_client.get(f"{BASE}/blog/post/comments")

        assert response.status_code == 200
        body = response.json()
        assert body["comments"] == []
        assert body["comments_number"] == 0
        assert body["status"] is None

    def test_page_without_comments_is_404(
        self, test_client: TestClient, page_settings: Settings
    ) -> None:
        assert test_client.get(f"{BASE}/about/comments").status_code == 404

    def test_invalid_page_id_is_404(self, test_client: TestClient, page_settings: Settings) -> None:
        assert test_client.get(f"{BASE}/bad%20page/comments").status_code == 404


class TestSubmitComment:
    """POST /pages/{page_id}/comments."""

    def test_submit_then_read(
        self, test_client: TestClient, page_settings: Settings, store: CommentStore
    ) -> None:
        response = test_client.post(
            f"{BASE}/blog/post/comments",
            json={"comment_author": "alice", "comment_content": "hi", "website": ""},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "submitted"
        assert body["message_status"] == 0
        assert body["comments_number"] == 1
        comment = body["comments"][0]
        assert set(comment) == {"guid", "author", "content", "created_at", "replies"}

        record = next(store.list_records("blog/post"))
        assert record.remote_address == "testclient"

        listed = test_client.get(f"{BASE}/blog/post/comments").json()
        assert listed["comments"] == body["comments"]

    def test_reply_is_nested(self, test_client: TestClient, page_settings: Settings) -> None:
        first = test_client.post(
            f"{BASE}/blog/post/comments",
            json={"comment_author": "alice", "comment_content": "hi"},
        ).json()
        parent = first["comments"][0]["guid"]

        body = test_client.post(
            f"{BASE}/blog/post/comments",
            json={
                "comment_author": "bob",
                "comment_content": "hello",
                "comment_replyguid": parent,
            },
        ).json()

        assert len(body["comments"]) == 1
        assert [r["author"] for r in body["comments"][0]["replies"]] == ["bob"]

    def test_readonly_page_reports_disabled(
        self, test_client: TestClient, page_settings: Settings
    ) -> None:
        response = test_client.post(
            f"{BASE}/blog/closed/comments",
            json={"comment_author": "alice", "comment_content": "hi"},
        )

        assert response.status_code == 200
        assert response.json()["status"] == "disabled"

    def test_oversized_comment_rejected(
        self, test_client: TestClient, page_settings: Settings
    ) -> None:
        response = test_client.post(
            f"{BASE}/blog/post/comments",
            json={"comment_author": "alice", "comment_content": "x" * 51},
        )

        body = response.json()
        assert body["status"] == "rejected"
        assert body["comments"] == []

    def test_missing_fields(self, test_client: TestClient, page_settings: Settings) -> None:
        response = test_client.post(
            f"{BASE}/blog/post/comments",
            json={"comment_author": "alice"},
        )

        assert response.json()["status"] == "missing_fields"

    def test_post_to_page_without_comments_is_404(
        self, test_client: TestClient, page_settings: Settings
    ) -> None:
        response = test_client.post(
            f"{BASE}/about/comments",
            json={"comment_author": "alice", "comment_content": "hi"},
        )

        assert response.status_code == 404
