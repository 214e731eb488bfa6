"""
Newsboard Seeder
================

Loads raw seed records, normalizes them, and inserts them in dependency order
inside a single transaction. Any previous data is cleared first, so a seed
run always leaves exactly the given dataset behind.
"""

import json
import sqlite3
from pathlib import Path
from typing import Dict, List

from pydantic import ValidationError

from .connection import DatabaseConnection
from .models import Article, SeedData
from ..utils.exceptions import DatabaseError, ErrorCode, SeedDataError
from ..utils.logging import PerformanceLogger, get_logger_for_component
from ..utils.normalization import (
    build_title_index,
    format_timestamp,
    normalize_comments,
    normalize_timestamps,
)

SEED_FILES = ("topics", "users", "articles", "comments")


def load_seed_data(data_dir: str) -> SeedData:
    """Read ``topics.json``, ``users.json``, ``articles.json`` and ``comments.json``.

    Raises:
        SeedDataError: If a file is missing, is not valid JSON, or holds
            records of the wrong shape
    """
    directory = Path(data_dir)
    raw: Dict[str, List[dict]] = {}

    for name in SEED_FILES:
        path = directory / f"{name}.json"
        try:
            with open(path, encoding="utf-8") as f:
                raw[name] = json.load(f)
        except FileNotFoundError as e:
            raise SeedDataError(
                f"Seed file not found: {path}",
                error_code=ErrorCode.SEED_FILE_MISSING,
            ) from e
        except json.JSONDecodeError as e:
            raise SeedDataError(f"Invalid JSON in {path}: {e}") from e

    try:
        return SeedData(**raw)
    except ValidationError as e:
        raise SeedDataError(f"Malformed seed records in {directory}: {e}") from e


class DataSeeder:
    """Inserts a normalized dataset through a ``DatabaseConnection``."""

    def __init__(self, db_connection: DatabaseConnection):
        self.db = db_connection
        self.logger = get_logger_for_component("seeder")

    def seed(self, data: SeedData) -> Dict[str, int]:
        """Replace all stored rows with ``data``.

        Returns:
            Number of rows inserted per table

        Raises:
            SeedDataError: If records cannot be normalized
            DatabaseError: If an insert fails (nothing is committed)
        """
        articles = normalize_timestamps(data.articles)

        with PerformanceLogger(self.logger, "seed", dataset=str(data)):
            try:
                with self.db.transaction() as conn:
                    self._clear(conn)

                    conn.executemany(
                        "INSERT INTO topics (slug, description) VALUES (?, ?)",
                        [(t.slug, t.description) for t in data.topics]
                    )
                    conn.executemany(
                        "INSERT INTO users (username, name, avatar_url) VALUES (?, ?, ?)",
                        [(u.username, u.name, u.avatar_url) for u in data.users]
                    )

                    inserted = [self._insert_article(conn, article) for article in articles]
                    comments = normalize_comments(data.comments, build_title_index(inserted))

                    conn.executemany(
                        """
                        INSERT INTO comments (author, article_id, votes, created_at, body)
                        VALUES (?, ?, ?, ?, ?)
                        """,
                        [
                            (c.author, c.article_id, c.votes, format_timestamp(c.created_at), c.body)
                            for c in comments
                        ]
                    )

            except sqlite3.Error as e:
                raise DatabaseError(
                    f"Failed to seed database: {e}",
                    error_code=ErrorCode.DATABASE_TRANSACTION,
                    context={'operation': 'seed'}
                ) from e

        counts = {
            "topics": len(data.topics),
            "users": len(data.users),
            "articles": len(articles),
            "comments": len(comments),
        }
        self.logger.info(f"Seeded database: {counts}")
        return counts

    def _clear(self, conn: sqlite3.Connection) -> None:
        # Children first for foreign keys
        for table in ("comments", "articles", "users", "topics"):
            conn.execute(f"DELETE FROM {table}")
        # Restart AUTOINCREMENT ids so seeded ids are stable between runs
        conn.execute(
            "DELETE FROM sqlite_sequence WHERE name IN ('articles', 'comments')"
        )

    def _insert_article(self, conn: sqlite3.Connection, article) -> Article:
        cursor = conn.execute(
            """
            INSERT INTO articles (title, topic, author, body, votes, created_at)
            VALUES (?, ?, ?, ?, ?, ?)
            """,
            (
                article.title, article.topic, article.author, article.body,
                article.votes, format_timestamp(article.created_at)
            )
        )
        return Article(
            article_id=cursor.lastrowid,
            **article.model_dump(),
        )
