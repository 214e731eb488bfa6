"""User repository for database operations."""

import sqlite3
from typing import Any

from ..database.connection import DatabaseConnection
from ..database.models import User
from ..utils.logging import get_logger_for_component
from ..utils.exceptions import DatabaseError, ErrorCode, NotFoundError
from ..utils.validators import IdentifierValidator


class UserRepository:
    """Repository for User reads keyed by username."""

    def __init__(self, db_connection: DatabaseConnection):
        self.db = db_connection
        self.logger = get_logger_for_component('user_repository')

    def fetch_by_username(self, username: Any) -> User:
        """Get a user by username.

        Args:
            username: Username to look up

        Returns:
            Matching User model

        Raises:
            InvalidIdentifierError: If username is empty or not a string
            NotFoundError: If no user has that username
            DatabaseError: If the query fails
        """
        username = IdentifierValidator.validate_username(username)

        try:
            with self.db.get_connection() as conn:
                row = conn.execute("""
                    SELECT username, name, avatar_url FROM users WHERE username = ?
                """, (username,)).fetchone()

        except sqlite3.Error as e:
            self.logger.error(f"Error getting user {username}: {e}")
            raise DatabaseError(
                message=f"Failed to get user {username}",
                error_code=ErrorCode.DATABASE_QUERY_ERROR,
                context={'username': username, 'operation': 'fetch_by_username'}
            ) from e

        if row is None:
            raise NotFoundError("user", username)

        return User(**dict(row))

    def exists(self, username: str) -> bool:
        """Check whether a username is taken by a stored user."""
        try:
            with self.db.get_connection() as conn:
                row = conn.execute(
                    "SELECT 1 FROM users WHERE username = ?", (username,)
                ).fetchone()
            return row is not None

        except sqlite3.Error as e:
            self.logger.error(f"Error checking user {username}: {e}")
            raise DatabaseError(
                message=f"Failed to check user {username}",
                error_code=ErrorCode.DATABASE_QUERY_ERROR,
                context={'username': username, 'operation': 'exists'}
            ) from e
