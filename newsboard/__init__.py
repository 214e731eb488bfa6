"""
Newsboard - Discussion Platform Data Layer
==========================================

Data access and shaping layer for a discussion platform of topics, users,
articles and comments.

Main Components:
- Database: SQLite with connection pooling, schema management and seeding
- Configuration: environment variables with Pydantic validation
- Storage: repositories returning typed records or classified errors
- Utilities: seed normalization, input validation, logging
"""

__version__ = "1.0.0"
__description__ = "Discussion platform data access layer"

from .config.settings import get_settings
from .database.connection import DatabaseConnection, get_db_manager
from .database.schema import DatabaseSchema
from .utils.logging import configure_application_logging, get_logger_for_component
from .utils.exceptions import ErrorKind, NewsboardError

__all__ = [
    "get_settings",
    "DatabaseConnection",
    "get_db_manager",
    "DatabaseSchema",
    "configure_application_logging",
    "get_logger_for_component",
    "ErrorKind",
    "NewsboardError",
]
