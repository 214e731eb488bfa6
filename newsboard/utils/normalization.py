"""
Seed Data Normalization
=======================

Pure transforms that turn raw seed records into insert-ready rows. Nothing
here touches the database; the seeder runs these before inserting.

Accepted raw timestamp formats:
- ``int``/``float``: milliseconds since the Unix epoch
- ``str`` of ASCII digits: milliseconds since the Unix epoch
- ISO 8601 ``str`` (``Z`` suffix allowed)
- ``datetime``: naive values are taken as UTC

The canonical form is a timezone-aware UTC ``datetime``.
"""

import re
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Mapping, Sequence, TypeVar

from pydantic import BaseModel

from ..database.models import CommentSeed, RawComment
from .exceptions import ErrorCode, SeedDataError

RecordT = TypeVar("RecordT", bound=BaseModel)

_EPOCH_MS_PATTERN = re.compile(r"-?[0-9]+")


def parse_timestamp(value: Any) -> datetime:
    """Parse a raw seed timestamp into an aware UTC datetime.

    Raises:
        SeedDataError: If the value is not one of the accepted formats
    """
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    if isinstance(value, bool) or value is None:
        raise SeedDataError(f"Unsupported timestamp value: {value!r}")

    if isinstance(value, str):
        text = value.strip()
        if _EPOCH_MS_PATTERN.fullmatch(text):
            value = int(text)
        else:
            if text.endswith("Z"):
                text = text[:-1] + "+00:00"
            try:
                parsed = datetime.fromisoformat(text)
            except ValueError as e:
                raise SeedDataError(f"Unparseable timestamp: {value!r}") from e
            return parse_timestamp(parsed)

    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError) as e:
            raise SeedDataError(f"Timestamp out of range: {value!r}") from e

    raise SeedDataError(f"Unsupported timestamp type: {type(value).__name__}")


def format_timestamp(value: datetime) -> str:
    """Render a canonical timestamp for storage."""
    return parse_timestamp(value).isoformat()


def normalize_timestamps(records: Sequence[RecordT]) -> List[RecordT]:
    """Return copies of ``records`` with ``created_at`` in canonical form.

    The input sequence and its records are left untouched; order is kept.
    """
    return [
        record.model_copy(update={"created_at": parse_timestamp(record.created_at)})
        for record in records
    ]


def build_title_index(articles: Iterable[Any]) -> Dict[str, int]:
    """Map article titles to their assigned ``article_id``.

    Titles are assumed unique; a repeated title keeps the last id seen.
    """
    index: Dict[str, int] = {}
    for article in articles:
        index[article.title] = article.article_id
    return index


def normalize_comments(
    comments: Sequence[RawComment], title_index: Mapping[str, int]
) -> List[CommentSeed]:
    """Convert raw seed comments into insert-ready rows.

    ``created_by`` becomes ``author``, ``created_at`` is parsed, and the
    ``belongs_to`` title is resolved to ``article_id``.

    Raises:
        SeedDataError: If a ``belongs_to`` title has no entry in ``title_index``
    """
    normalized = []
    for comment in comments:
        if comment.belongs_to not in title_index:
            raise SeedDataError(
                f"Comment references unknown article title: {comment.belongs_to!r}",
                record=comment.model_dump(mode="json"),
                error_code=ErrorCode.SEED_UNRESOLVED_REFERENCE,
            )

        normalized.append(
            CommentSeed(
                author=comment.created_by,
                article_id=title_index[comment.belongs_to],
                body=comment.body,
                votes=comment.votes,
                created_at=parse_timestamp(comment.created_at),
            )
        )
    return normalized
