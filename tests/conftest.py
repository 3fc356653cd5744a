"""Shared test fixtures.

Provides an on-disk ``CommentStore`` rooted in a temporary directory, a
default ``CommentConfig``, and a FastAPI ``test_client`` wired to that store.
"""

from collections.abc import Generator
from pathlib import Path
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from app.db.comment_store import CommentStore
from app.models.comment import CommentConfig


@pytest.fixture()
def store(tmp_path: Path) -> CommentStore:
    """Provide an empty comment store below ``tmp_path``."""
    return CommentStore(tmp_path / "blog-comments")


@pytest.fixture()
def config() -> CommentConfig:
    """Provide a comment policy with a small size limit and no review."""
    return CommentConfig(comment_size_limit=100, comment_review_enabled=False)


@pytest.fixture()
def test_client(store: CommentStore) -> Generator[TestClient, None, None]:
    """Provide a FastAPI TestClient backed by the temporary store."""
    from app.main import app

    with (
        patch("app.routers.comments.get_comment_store", return_value=store),
        patch("app.routers.health.get_comment_store", return_value=store),
        TestClient(app) as client,
    ):
        yield client
