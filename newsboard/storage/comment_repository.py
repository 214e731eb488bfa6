"""
Comment Repository
==================

Comment creation with referential checks against the article and user
repositories.
"""

import sqlite3
from datetime import datetime, timezone
from typing import Any, Optional

from ..database.models import Comment
from ..database.connection import DatabaseConnection
from ..utils.logging import get_logger_for_component
from ..utils.exceptions import (
    DatabaseError,
    ErrorCode,
    InvalidReferenceError,
    NotFoundError,
)
from ..utils.normalization import format_timestamp
from ..utils.validators import IdentifierValidator, BodyValidator
from .article_repository import ArticleRepository
from .user_repository import UserRepository


class CommentRepository:
    """Repository for Comment creation."""

    def __init__(
        self,
        db_connection: DatabaseConnection,
        article_repository: Optional[ArticleRepository] = None,
        user_repository: Optional[UserRepository] = None,
    ):
        """Initialize comment repository.

        Args:
            db_connection: Database connection manager
            article_repository: Article lookups (defaults to one on the same connection)
            user_repository: User lookups (defaults to one on the same connection)
        """
        self.db = db_connection
        self.articles = article_repository or ArticleRepository(db_connection)
        self.users = user_repository or UserRepository(db_connection)
        self.logger = get_logger_for_component("comment_repository")

    def create_for_article(self, article_id: Any, author_username: Any, body: Any) -> Comment:
        """Post a new comment on an article.

        Guards run in a fixed order so overlapping failures always surface
        the same error: identifier format, article existence, body shape,
        then username reference.

        Args:
            article_id: Positive integer ID, or a string of digits
            author_username: Username of the commenting user
            body: Comment text

        Returns:
            Created Comment with its assigned ID

        Raises:
            InvalidIdentifierError: If article_id is malformed
            NotFoundError: If the article does not exist
            InvalidBodyError: If username or body is missing or mistyped
            InvalidReferenceError: If username is not a stored user
            DatabaseError: If the insert fails
        """
        article_id = IdentifierValidator.validate_row_id(article_id)

        if not self.articles.exists(article_id):
            raise NotFoundError("article", article_id)

        fields = BodyValidator.validate_comment_body(author_username, body)

        if not self.users.exists(fields["username"]):
            raise InvalidReferenceError("username", fields["username"])

        created_at = format_timestamp(datetime.now(timezone.utc))

        try:
            with self.db.transaction() as conn:
                cursor = conn.execute(
                    """
                    INSERT INTO comments (author, article_id, votes, created_at, body)
                    VALUES (?, ?, 0, ?, ?)
                    """,
                    (fields["username"], article_id, created_at, fields["body"])
                )
                row = conn.execute(
                    """
                    SELECT comment_id, author, article_id, votes, created_at, body
                    FROM comments WHERE comment_id = ?
                    """,
                    (cursor.lastrowid,)
                ).fetchone()

        except sqlite3.Error as e:
            self.logger.error(f"Failed to create comment on article {article_id}: {e}")
            raise DatabaseError(
                f"Failed to create comment on article {article_id}",
                error_code=ErrorCode.DATABASE_INSERT_ERROR,
                context={
                    'article_id': article_id,
                    'username': fields["username"],
                    'operation': 'create_for_article',
                }
            ) from e

        comment = Comment.from_db_row(row)
        self.logger.debug(f"Created comment {comment.comment_id} on article {article_id}")
        return comment
