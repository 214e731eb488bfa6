"""
Newsboard Database Connection Management
========================================

Connection pool and transaction management for SQLite. Each repository is
handed a ``DatabaseConnection`` at construction; connections are borrowed per
operation and always returned to the pool.
"""

import sqlite3
import threading
import logging
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Optional, Generator, Any, Dict
from queue import Queue, Empty, Full

logger = logging.getLogger(__name__)

TABLES = ("topics", "users", "articles", "comments")


class DatabaseConnection:
    """Thread-safe SQLite database connection manager with pooling."""

    def __init__(
        self,
        db_path: str = "data/newsboard.db",
        pool_size: int = 5,
        acquire_timeout: float = 10.0,
        busy_timeout: float = 30.0,
    ):
        """Initialize database connection manager.

        Args:
            db_path: Path to SQLite database file
            pool_size: Maximum number of connections in pool
            acquire_timeout: Seconds to wait for a pooled connection
            busy_timeout: Seconds SQLite waits for a lock before failing
        """
        self.db_path = Path(db_path)
        self.pool_size = pool_size
        self.acquire_timeout = acquire_timeout
        self.busy_timeout = busy_timeout
        self.pool: Queue = Queue(maxsize=pool_size)
        self.lock = threading.Lock()
        self._total_connections = 0

        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        self._initialize_pool()

    @classmethod
    def from_settings(cls, settings) -> "DatabaseConnection":
        """Build a connection manager from ``NewsboardSettings``."""
        return cls(
            settings.database.path,
            pool_size=settings.database.pool_size,
            acquire_timeout=settings.database.acquire_timeout,
            busy_timeout=settings.database.busy_timeout,
        )

    def _initialize_pool(self) -> None:
        for _ in range(self.pool_size):
            self.pool.put(self._create_connection())

    def _create_connection(self) -> sqlite3.Connection:
        conn = sqlite3.connect(
            self.db_path,
            check_same_thread=False,  # Pooled connections move between threads
            timeout=self.busy_timeout,
        )

        conn.execute("PRAGMA foreign_keys = ON")
        conn.execute("PRAGMA journal_mode = WAL")
        conn.execute("PRAGMA synchronous = NORMAL")
        conn.row_factory = sqlite3.Row

        with self.lock:
            self._total_connections += 1

        logger.debug(f"Created database connection #{self._total_connections}")
        return conn

    @contextmanager
    def get_connection(self) -> Generator[sqlite3.Connection, None, None]:
        """Get a connection from the pool with automatic return.

        Usage:
            with db_manager.get_connection() as conn:
                rows = conn.execute("SELECT * FROM topics").fetchall()
        """
        start_time = time.time()
        conn = None

        try:
            try:
                conn = self.pool.get(timeout=self.acquire_timeout)
            except Empty:
                logger.warning("Connection pool exhausted, creating new connection")
                conn = self._create_connection()

            acquisition_time = time.time() - start_time
            if acquisition_time > 1.0:
                logger.warning(f"Database connection acquisition took {acquisition_time:.2f}s")

            yield conn

        except Exception as e:
            if isinstance(e, sqlite3.Error):
                logger.error(f"Database connection error: {e}")
            # Never hand a connection back with an open transaction
            if conn is not None and conn.in_transaction:
                conn.rollback()
            raise
        finally:
            if conn is not None:
                self._release(conn)

    def _release(self, conn: sqlite3.Connection) -> None:
        try:
            self.pool.put_nowait(conn)
        except Full:
            # Pool full, close the overflow connection
            conn.close()
            with self.lock:
                self._total_connections -= 1

    @contextmanager
    def transaction(self) -> Generator[sqlite3.Connection, None, None]:
        """Execute operations within a database transaction.

        Usage:
            with db_manager.transaction() as conn:
                conn.execute("UPDATE articles SET votes = votes + ? ...")
                # Automatic commit on success, rollback on exception
        """
        with self.get_connection() as conn:
            try:
                conn.execute("BEGIN IMMEDIATE")
                yield conn
                conn.commit()
            except Exception as e:
                conn.rollback()
                logger.debug(f"Transaction rolled back due to error: {e}")
                raise

    def get_database_info(self) -> Dict[str, Any]:
        """Get database information and statistics."""
        with self.get_connection() as conn:
            page_count = conn.execute("PRAGMA page_count").fetchone()[0]
            page_size = conn.execute("PRAGMA page_size").fetchone()[0]

            table_counts = {}
            for table in TABLES:
                try:
                    table_counts[table] = conn.execute(f"SELECT COUNT(*) FROM {table}").fetchone()[0]
                except sqlite3.Error:
                    table_counts[table] = 0

            return {
                'database_size_mb': page_count * page_size / (1024 * 1024),
                'page_count': page_count,
                'page_size': page_size,
                'table_counts': table_counts,
                'connection_pool_size': self.pool.qsize(),
                'total_connections': self._total_connections
            }

    def close_all_connections(self) -> None:
        """Close all connections in the pool."""
        logger.info("Closing all database connections")

        while not self.pool.empty():
            try:
                conn = self.pool.get_nowait()
                conn.close()
            except (Empty, sqlite3.Error):
                break

        with self.lock:
            self._total_connections = 0


_db_manager: Optional[DatabaseConnection] = None


def get_db_manager(db_path: Optional[str] = None) -> DatabaseConnection:
    """Get the process-wide database manager, built from settings on first use.

    Repositories take their ``DatabaseConnection`` explicitly; this accessor
    only serves entry points such as the management CLI.
    """
    global _db_manager

    if _db_manager is None:
        from ..config.settings import get_settings

        settings = get_settings()
        if db_path is not None:
            _db_manager = DatabaseConnection(
                db_path,
                pool_size=settings.database.pool_size,
                acquire_timeout=settings.database.acquire_timeout,
                busy_timeout=settings.database.busy_timeout,
            )
        else:
            _db_manager = DatabaseConnection.from_settings(settings)

    return _db_manager
