"""
PyTest Configuration and Fixtures
=================================

Shared fixtures for Newsboard tests.

Every test that touches storage gets its own temporary SQLite file with the
schema created, so tests never share rows.
"""

import pytest
import sys
from pathlib import Path

# Add project root to Python path
sys.path.insert(0, str(Path(__file__).parent.parent))

TEST_DATA_DIR = Path(__file__).parent / "data"


# ============================================================================
# Database Fixtures
# ============================================================================


@pytest.fixture
def test_database(tmp_path):
    """Path to a fresh database file with the schema created."""
    from newsboard.database.schema import DatabaseSchema

    db_path = tmp_path / "newsboard_test.db"
    DatabaseSchema(str(db_path)).create_tables()
    return str(db_path)


@pytest.fixture
def db_connection(test_database):
    """Create a database connection manager for testing."""
    from newsboard.database.connection import DatabaseConnection

    connection = DatabaseConnection(test_database, pool_size=2)
    yield connection

    connection.close_all_connections()


@pytest.fixture
def seed_data():
    """Raw test dataset loaded from tests/data."""
    from newsboard.database.seed import load_seed_data

    return load_seed_data(str(TEST_DATA_DIR))


@pytest.fixture
def seeded_db(db_connection, seed_data):
    """Database connection with the test dataset inserted.

    Article 1 starts at 100 votes with 13 comments; user ``rogersop``
    exists and ``alex`` does not.
    """
    from newsboard.database.seed import DataSeeder

    DataSeeder(db_connection).seed(seed_data)
    return db_connection


# ============================================================================
# Repository Fixtures
# ============================================================================


@pytest.fixture
def topic_repo(seeded_db):
    from newsboard.storage.topic_repository import TopicRepository

    return TopicRepository(seeded_db)


@pytest.fixture
def user_repo(seeded_db):
    from newsboard.storage.user_repository import UserRepository

    return UserRepository(seeded_db)


@pytest.fixture
def article_repo(seeded_db):
    from newsboard.storage.article_repository import ArticleRepository

    return ArticleRepository(seeded_db)


@pytest.fixture
def comment_repo(seeded_db):
    from newsboard.storage.comment_repository import CommentRepository

    return CommentRepository(seeded_db)


# ============================================================================
# Raw Record Fixtures
# ============================================================================


@pytest.fixture
def raw_comments():
    """Raw seed comments referencing articles by title."""
    from newsboard.database.models import RawComment

    return [
        RawComment(
            body="Itaque quisquam est similique et est perspiciatis reprehenderit voluptatem autem.",
            belongs_to="They're not exactly dogs, are they?",
            created_by="butter_bridge",
            votes=16,
            created_at=1511354163389,
        ),
        RawComment(
            body="The owls are not what they seem.",
            belongs_to="Living in the shadow of a great man",
            created_by="icellusedkars",
            votes=20,
            created_at="2017-11-22T12:36:03.389Z",
        ),
    ]
