"""
Newsboard Data Models
=====================

Pydantic data models for the records returned by the repositories and for
the raw and normalized seed records consumed by the seeder. Stored rows map
onto these models column for column.
"""

from datetime import datetime
from typing import List, Optional, Union, Dict, Any

from pydantic import BaseModel, Field, field_validator

# Timestamp representations found in raw seed files
RawTimestamp = Union[int, float, str, datetime]


class Topic(BaseModel):
    """Discussion topic keyed by slug."""
    slug: str = Field(..., min_length=1, description="Unique topic slug")
    description: Optional[str] = Field(default=None, description="Topic description")

    def __str__(self) -> str:
        return f"Topic({self.slug})"


class User(BaseModel):
    """Platform user keyed by username."""
    username: str = Field(..., min_length=1, description="Unique username")
    name: Optional[str] = Field(default=None, description="Display name")
    avatar_url: Optional[str] = Field(default=None, description="Avatar image URL")

    def __str__(self) -> str:
        return f"User({self.username})"


class Article(BaseModel):
    """Stored article row."""
    article_id: int = Field(..., description="Database primary key")
    title: str = Field(..., description="Article title")
    topic: str = Field(..., description="Slug of the article's topic")
    author: str = Field(..., description="Username of the author")
    body: Optional[str] = Field(default=None, description="Article body")
    votes: int = Field(default=0, description="Net vote count")
    created_at: datetime = Field(..., description="Creation timestamp (UTC)")

    @classmethod
    def from_db_row(cls, row: Dict[str, Any]) -> "Article":
        return cls(**dict(row))

    def __str__(self) -> str:
        return f"Article({self.article_id}:{self.title[:50]})"


class ArticleWithCommentCount(Article):
    """Article row augmented with its derived comment count."""
    comment_count: int = Field(default=0, ge=0, description="Number of comments on the article")


class Comment(BaseModel):
    """Stored comment row."""
    comment_id: int = Field(..., description="Database primary key")
    author: str = Field(..., description="Username of the author")
    article_id: int = Field(..., description="Parent article ID")
    votes: int = Field(default=0, description="Net vote count")
    created_at: datetime = Field(..., description="Creation timestamp (UTC)")
    body: str = Field(..., description="Comment text")

    @classmethod
    def from_db_row(cls, row: Dict[str, Any]) -> "Comment":
        return cls(**dict(row))

    def __str__(self) -> str:
        return f"Comment({self.comment_id} on {self.article_id} by {self.author})"


# Seed records


class RawArticle(BaseModel):
    """Article as found in a seed file, before ids are assigned."""
    title: str = Field(..., min_length=1)
    topic: str = Field(..., min_length=1)
    author: str = Field(..., min_length=1)
    body: Optional[str] = None
    votes: int = 0
    created_at: RawTimestamp


class RawComment(BaseModel):
    """Comment as found in a seed file.

    The parent article is referenced by title (``belongs_to``) and the author
    sits under ``created_by``.
    """
    body: str
    belongs_to: str = Field(..., min_length=1)
    created_by: str = Field(..., min_length=1)
    votes: int = 0
    created_at: RawTimestamp


class CommentSeed(BaseModel):
    """Normalized comment row ready for insertion."""
    author: str
    article_id: int
    body: str
    votes: int = 0
    created_at: datetime


class SeedData(BaseModel):
    """Complete raw dataset loaded at bootstrap."""
    topics: List[Topic] = Field(default_factory=list)
    users: List[User] = Field(default_factory=list)
    articles: List[RawArticle] = Field(default_factory=list)
    comments: List[RawComment] = Field(default_factory=list)

    @field_validator("articles")
    @classmethod
    def validate_unique_titles(cls, v):
        """Comments reference articles by title, so titles must be unique."""
        titles = [article.title for article in v]
        if len(titles) != len(set(titles)):
            raise ValueError("Article titles must be unique in seed data")
        return v

    def __str__(self) -> str:
        return (
            f"SeedData({len(self.topics)} topics, {len(self.users)} users, "
            f"{len(self.articles)} articles, {len(self.comments)} comments)"
        )
