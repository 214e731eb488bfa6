"""
Topic Repository
================

Read-only access to discussion topics.
"""

import sqlite3
from typing import List

from ..database.models import Topic
from ..database.connection import DatabaseConnection
from ..utils.logging import get_logger_for_component
from ..utils.exceptions import DatabaseError, ErrorCode


class TopicRepository:
    """Repository for Topic reads."""

    def __init__(self, db_connection: DatabaseConnection):
        """Initialize topic repository.

        Args:
            db_connection: Database connection manager
        """
        self.db = db_connection
        self.logger = get_logger_for_component("topic_repository")

    def fetch_all(self) -> List[Topic]:
        """Get every topic in storage order.

        Returns:
            List of Topic models

        Raises:
            DatabaseError: If the query fails
        """
        try:
            with self.db.get_connection() as conn:
                rows = conn.execute("SELECT slug, description FROM topics").fetchall()

            return [Topic(**dict(row)) for row in rows]

        except sqlite3.Error as e:
            self.logger.error(f"Failed to fetch topics: {e}")
            raise DatabaseError(
                "Failed to fetch topics",
                error_code=ErrorCode.DATABASE_QUERY_ERROR,
                context={'operation': 'fetch_all'}
            ) from e
