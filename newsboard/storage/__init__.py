"""
Newsboard Storage Layer
=======================

Repository pattern implementations for data access abstraction.

This module provides:
- Topic and user repositories for read-only lookups
- Article repository with comment counts and vote increments
- Comment repository with referential checks
- Tagged results for the controller layer
"""

from .article_repository import ArticleRepository
from .comment_repository import CommentRepository
from .results import RepositoryResult, run_operation
from .topic_repository import TopicRepository
from .user_repository import UserRepository

__all__ = [
    "ArticleRepository",
    "CommentRepository",
    "RepositoryResult",
    "TopicRepository",
    "UserRepository",
    "run_operation",
]
