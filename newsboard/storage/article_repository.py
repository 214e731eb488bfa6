"""
Article Repository
==================

Article reads with derived comment counts and atomic vote increments.
"""

import sqlite3
from typing import Any

from ..database.models import Article, ArticleWithCommentCount
from ..database.connection import DatabaseConnection
from ..utils.logging import get_logger_for_component
from ..utils.exceptions import DatabaseError, ErrorCode, InvalidBodyError, NotFoundError
from ..utils.validators import IdentifierValidator, BodyValidator

ARTICLE_COLUMNS = "article_id, title, topic, author, body, votes, created_at"


class ArticleRepository:
    """Repository for Article reads and vote updates."""

    def __init__(self, db_connection: DatabaseConnection):
        """Initialize article repository.

        Args:
            db_connection: Database connection manager
        """
        self.db = db_connection
        self.logger = get_logger_for_component("article_repository")

    def fetch_by_id(self, article_id: Any) -> ArticleWithCommentCount:
        """Get an article together with its comment count.

        The count is aggregated in the same statement as the article row.

        Args:
            article_id: Positive integer ID, or a string of digits

        Returns:
            Article with ``comment_count``

        Raises:
            InvalidIdentifierError: If article_id is malformed
            NotFoundError: If no article has that ID
            DatabaseError: If the query fails
        """
        article_id = IdentifierValidator.validate_row_id(article_id)

        try:
            with self.db.get_connection() as conn:
                row = conn.execute(
                    """
                    SELECT a.article_id, a.title, a.topic, a.author, a.body,
                           a.votes, a.created_at,
                           COUNT(c.comment_id) AS comment_count
                    FROM articles a
                    LEFT JOIN comments c ON c.article_id = a.article_id
                    WHERE a.article_id = ?
                    GROUP BY a.article_id
                    """,
                    (article_id,)
                ).fetchone()

        except sqlite3.Error as e:
            self.logger.error(f"Failed to get article {article_id}: {e}")
            raise DatabaseError(
                f"Failed to get article {article_id}",
                error_code=ErrorCode.DATABASE_QUERY_ERROR,
                context={'article_id': article_id, 'operation': 'fetch_by_id'}
            ) from e

        if row is None:
            raise NotFoundError("article", article_id)

        return ArticleWithCommentCount(**dict(row))

    def update_votes(self, article_id: Any, delta: Any) -> Article:
        """Add ``delta`` to an article's votes.

        The increment is a single ``votes = votes + ?`` statement, so
        concurrent updates on the same article are never lost.

        Args:
            article_id: Positive integer ID, or a string of digits
            delta: Integer vote increment (may be negative)

        Returns:
            Updated Article (without comment count)

        Raises:
            InvalidIdentifierError: If article_id is malformed
            InvalidBodyError: If delta is not an integer, or the new total
                would not fit a SQLite integer
            NotFoundError: If no article has that ID
            DatabaseError: If the update fails
        """
        article_id = IdentifierValidator.validate_row_id(article_id)
        delta = BodyValidator.validate_vote_delta(delta)

        try:
            with self.db.transaction() as conn:
                # SQLite turns an overflowing integer sum into REAL
                cursor = conn.execute(
                    """
                    UPDATE articles SET votes = votes + ?
                    WHERE article_id = ? AND typeof(votes + ?) = 'integer'
                    """,
                    (delta, article_id, delta)
                )
                updated = cursor.rowcount > 0

                row = conn.execute(
                    f"SELECT {ARTICLE_COLUMNS} FROM articles WHERE article_id = ?",
                    (article_id,)
                ).fetchone()

        except sqlite3.Error as e:
            self.logger.error(f"Failed to update votes for article {article_id}: {e}")
            raise DatabaseError(
                f"Failed to update votes for article {article_id}",
                error_code=ErrorCode.DATABASE_UPDATE_ERROR,
                context={'article_id': article_id, 'operation': 'update_votes'}
            ) from e

        if row is None:
            raise NotFoundError("article", article_id)

        if not updated:
            raise InvalidBodyError(
                f"inc_votes {delta:+d} would take article {article_id} votes "
                f"({row['votes']}) out of integer range",
                field_name="inc_votes",
            )

        self.logger.debug(f"Applied {delta:+d} votes to article {article_id}")
        return Article.from_db_row(row)

    def exists(self, article_id: int) -> bool:
        """Check whether an article with the given ID is stored."""
        try:
            with self.db.get_connection() as conn:
                row = conn.execute(
                    "SELECT 1 FROM articles WHERE article_id = ?", (article_id,)
                ).fetchone()
            return row is not None

        except sqlite3.Error as e:
            self.logger.error(f"Failed to check article {article_id}: {e}")
            raise DatabaseError(
                f"Failed to check article {article_id}",
                error_code=ErrorCode.DATABASE_QUERY_ERROR,
                context={'article_id': article_id, 'operation': 'exists'}
            ) from e
