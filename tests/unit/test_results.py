"""
Repository Result Test Suite
============================

Tests for run_operation and the tagged RepositoryResult.
"""

import sqlite3
import pytest

from newsboard.storage import RepositoryResult, run_operation
from newsboard.utils.exceptions import DatabaseError, ErrorKind, NotFoundError


class TestRunOperation:
    """Test capturing repository outcomes."""

    def test_success(self, topic_repo):
        result = run_operation(topic_repo.fetch_all)

        assert result.ok
        assert result.kind is None
        assert len(result.unwrap()) == 3

    @pytest.mark.parametrize("article_id, kind", [
        ("not-article-id", ErrorKind.INVALID_IDENTIFIER),
        (300, ErrorKind.NOT_FOUND),
    ])
    def test_fetch_errors_are_classified(self, article_repo, article_id, kind):
        result = run_operation(article_repo.fetch_by_id, article_id)

        assert not result.ok
        assert result.kind == kind

    def test_keyword_arguments(self, article_repo):
        result = run_operation(article_repo.update_votes, article_id=1, delta="100")

        assert result.kind == ErrorKind.INVALID_BODY

    def test_invalid_reference(self, comment_repo):
        result = run_operation(comment_repo.create_for_article, 1, "alex", "Hello world!")

        assert result.kind == ErrorKind.INVALID_REFERENCE

    def test_driver_failure_is_infrastructure(self, seeded_db, article_repo):
        with seeded_db.get_connection() as conn:
            conn.execute("DROP TABLE comments")

        result = run_operation(article_repo.fetch_by_id, 1)

        assert result.kind == ErrorKind.INFRASTRUCTURE
        assert isinstance(result.error, DatabaseError)
        assert isinstance(result.error.__cause__, sqlite3.OperationalError)
        assert "no such table" not in result.error.user_message

    def test_unexpected_exception_is_infrastructure(self):
        def broken():
            raise RuntimeError("unexpected")

        result = run_operation(broken)

        assert result.kind == ErrorKind.INFRASTRUCTURE
        assert result.error.context["operation"] == "broken"

    def test_unwrap_reraises(self, article_repo):
        result = run_operation(article_repo.fetch_by_id, 300)

        with pytest.raises(NotFoundError):
            result.unwrap()


class TestRepositoryResult:
    """Test result serialization."""

    def test_error_to_dict(self):
        result = RepositoryResult(error=NotFoundError("article", 300))

        assert result.to_dict() == {
            "error": "not_found",
            "msg": "valid but non existent article_id",
        }

    def test_value_to_dict(self, article_repo):
        data = run_operation(article_repo.fetch_by_id, 1).to_dict()["data"]

        assert data["comment_count"] == 13
        assert data["created_at"].startswith("2018-11-15T12:21:54.171")

    def test_list_to_dict(self, topic_repo):
        data = run_operation(topic_repo.fetch_all).to_dict()["data"]

        assert {"slug": "paper", "description": "what books are made of"} in data
