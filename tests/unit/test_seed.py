"""
Seeder Test Suite
=================

Tests for loading seed files and inserting them through DataSeeder.
"""

import json
import shutil
import pytest
from pathlib import Path

from newsboard.database.models import RawComment, SeedData
from newsboard.database.seed import DataSeeder, load_seed_data
from newsboard.utils.exceptions import ErrorCode, SeedDataError

TEST_DATA_DIR = Path(__file__).parent.parent / "data"


@pytest.fixture
def data_dir(tmp_path):
    """Writable copy of the test dataset."""
    target = tmp_path / "seed"
    shutil.copytree(TEST_DATA_DIR, target)
    return target


class TestLoadSeedData:
    """Test reading seed files."""

    def test_loads_all_record_types(self, seed_data):
        assert isinstance(seed_data, SeedData)
        assert len(seed_data.topics) == 3
        assert len(seed_data.users) == 4
        assert len(seed_data.articles) == 5
        assert len(seed_data.comments) == 15

    def test_raw_timestamps_kept_as_given(self, seed_data):
        assert seed_data.articles[0].created_at == 1542284514171
        assert seed_data.articles[3].created_at == "2006-11-18T12:21:54.171Z"

    def test_missing_file(self, data_dir):
        (data_dir / "comments.json").unlink()

        with pytest.raises(SeedDataError) as exc_info:
            load_seed_data(str(data_dir))

        assert exc_info.value.error_code == ErrorCode.SEED_FILE_MISSING

    def test_invalid_json(self, data_dir):
        (data_dir / "users.json").write_text("[{", encoding="utf-8")

        with pytest.raises(SeedDataError):
            load_seed_data(str(data_dir))

    def test_malformed_record(self, data_dir):
        (data_dir / "topics.json").write_text(json.dumps([{"description": "no slug"}]), encoding="utf-8")

        with pytest.raises(SeedDataError):
            load_seed_data(str(data_dir))

    def test_duplicate_titles_rejected(self, data_dir):
        articles = json.loads((data_dir / "articles.json").read_text(encoding="utf-8"))
        articles.append(dict(articles[0]))
        (data_dir / "articles.json").write_text(json.dumps(articles), encoding="utf-8")

        with pytest.raises(SeedDataError):
            load_seed_data(str(data_dir))


class TestDataSeeder:
    """Test inserting a dataset."""

    def test_seed_counts(self, db_connection, seed_data):
        counts = DataSeeder(db_connection).seed(seed_data)

        assert counts == {"topics": 3, "users": 4, "articles": 5, "comments": 15}

    def test_article_ids_follow_input_order(self, seeded_db, seed_data):
        with seeded_db.get_connection() as conn:
            rows = conn.execute("SELECT article_id, title FROM articles ORDER BY article_id").fetchall()

        assert [row["title"] for row in rows] == [a.title for a in seed_data.articles]
        assert [row["article_id"] for row in rows] == [1, 2, 3, 4, 5]

    def test_comments_linked_by_title(self, seeded_db):
        with seeded_db.get_connection() as conn:
            rows = conn.execute("""
                SELECT article_id, COUNT(*) AS n FROM comments GROUP BY article_id
            """).fetchall()

        assert {row["article_id"]: row["n"] for row in rows} == {1: 13, 2: 1, 5: 1}

    def test_timestamps_stored_in_canonical_form(self, seeded_db):
        with seeded_db.get_connection() as conn:
            stored = conn.execute("SELECT created_at FROM articles WHERE article_id = 1").fetchone()[0]

        assert stored == "2018-11-15T12:21:54.171000+00:00"

    def test_reseed_replaces_data_and_resets_ids(self, seeded_db, seed_data):
        with seeded_db.transaction() as conn:
            conn.execute("INSERT INTO comments (author, article_id, body) VALUES ('lurker', 1, 'extra')")

        counts = DataSeeder(seeded_db).seed(seed_data)

        with seeded_db.get_connection() as conn:
            total = conn.execute("SELECT COUNT(*) FROM comments").fetchone()[0]
            max_id = conn.execute("SELECT MAX(comment_id) FROM comments").fetchone()[0]

        assert total == counts["comments"] == 15
        assert max_id == 15

    def test_unresolved_title_rolls_back(self, db_connection, seed_data):
        orphan = RawComment(
            body="Lost", belongs_to="No such article", created_by="lurker", created_at=0
        )
        broken = seed_data.model_copy(update={"comments": seed_data.comments + [orphan]})

        with pytest.raises(SeedDataError) as exc_info:
            DataSeeder(db_connection).seed(broken)

        assert exc_info.value.error_code == ErrorCode.SEED_UNRESOLVED_REFERENCE
        with db_connection.get_connection() as conn:
            assert conn.execute("SELECT COUNT(*) FROM articles").fetchone()[0] == 0

    def test_empty_dataset(self, db_connection):
        counts = DataSeeder(db_connection).seed(SeedData())

        assert counts == {"topics": 0, "users": 0, "articles": 0, "comments": 0}
