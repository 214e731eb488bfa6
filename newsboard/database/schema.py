"""
Newsboard Database Schema
=========================

SQLite schema with foreign key constraints and indexes:
- topics: discussion topics keyed by slug
- users: platform users keyed by username
- articles: articles filed under a topic by a user
- comments: user comments on articles
"""

import sqlite3
from contextlib import closing
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

EXPECTED_TABLES = {"topics", "users", "articles", "comments"}


class DatabaseSchema:
    """Database schema manager for the Newsboard SQLite database."""

    def __init__(self, db_path: str = "data/newsboard.db"):
        """Initialize database schema manager.

        Args:
            db_path: Path to SQLite database file
        """
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    def create_tables(self) -> None:
        """Create all database tables."""
        with closing(self.get_connection()) as conn:
            # Dependency order
            self._create_topics_table(conn)
            self._create_users_table(conn)
            self._create_articles_table(conn)
            self._create_comments_table(conn)

            self._create_indexes(conn)

            conn.commit()
            logger.info("Database schema created successfully")

    def _create_topics_table(self, conn: sqlite3.Connection) -> None:
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS topics (
                slug TEXT PRIMARY KEY NOT NULL UNIQUE,
                description TEXT
            )
        """
        )

    def _create_users_table(self, conn: sqlite3.Connection) -> None:
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS users (
                username TEXT PRIMARY KEY NOT NULL,
                name TEXT,
                avatar_url TEXT
            )
        """
        )

    def _create_articles_table(self, conn: sqlite3.Connection) -> None:
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS articles (
                article_id INTEGER PRIMARY KEY AUTOINCREMENT,
                title TEXT NOT NULL,
                topic TEXT NOT NULL,
                author TEXT NOT NULL,
                body TEXT,
                votes INTEGER NOT NULL DEFAULT 0,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                FOREIGN KEY (topic) REFERENCES topics(slug),
                FOREIGN KEY (author) REFERENCES users(username)
            )
        """
        )

    def _create_comments_table(self, conn: sqlite3.Connection) -> None:
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS comments (
                comment_id INTEGER PRIMARY KEY AUTOINCREMENT,
                author TEXT NOT NULL,
                article_id INTEGER NOT NULL,
                votes INTEGER NOT NULL DEFAULT 0,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                body TEXT NOT NULL,
                FOREIGN KEY (author) REFERENCES users(username),
                FOREIGN KEY (article_id) REFERENCES articles(article_id)
            )
        """
        )

    def _create_indexes(self, conn: sqlite3.Connection) -> None:
        indexes = [
            "CREATE INDEX IF NOT EXISTS idx_articles_topic ON articles(topic)",
            "CREATE INDEX IF NOT EXISTS idx_articles_author ON articles(author)",
            # Comment counts aggregate on this column
            "CREATE INDEX IF NOT EXISTS idx_comments_article ON comments(article_id)",
            "CREATE INDEX IF NOT EXISTS idx_comments_author ON comments(author)",
        ]

        for index_sql in indexes:
            conn.execute(index_sql)

    def drop_tables(self) -> None:
        """Drop all tables (for testing/reset purposes)."""
        with closing(self.get_connection()) as conn:
            # Reverse dependency order
            for table in ("comments", "articles", "users", "topics"):
                conn.execute(f"DROP TABLE IF EXISTS {table}")

            conn.commit()
            logger.info("All database tables dropped")

    def get_connection(self) -> sqlite3.Connection:
        """Open a connection with foreign keys enabled; the caller closes it."""
        conn = sqlite3.connect(self.db_path)
        conn.execute("PRAGMA foreign_keys = ON")
        conn.row_factory = sqlite3.Row
        return conn

    def verify_schema(self) -> bool:
        """Verify database schema is correctly created."""
        try:
            with closing(self.get_connection()) as conn:
                cursor = conn.execute(
                    """
                    SELECT name FROM sqlite_master
                    WHERE type='table' AND name NOT LIKE 'sqlite_%'
                    ORDER BY name
                """
                )
                tables = {row[0] for row in cursor.fetchall()}

                if tables != EXPECTED_TABLES:
                    logger.error(
                        f"Missing tables. Expected: {EXPECTED_TABLES}, Found: {tables}"
                    )
                    return False

                violations = conn.execute("PRAGMA foreign_key_check").fetchall()
                if violations:
                    logger.error(f"Foreign key violations found: {len(violations)}")
                    return False

                logger.info("Database schema verification passed")
                return True

        except sqlite3.Error as e:
            logger.error(f"Schema verification failed: {e}")
            return False
