"""
SQLite database handle shared by the repositories.

This adapter implements the TransactionManager port. It owns the schema,
opens connections, and lets several repository calls share one connection
(and therefore one transaction) while a `transaction()` block is active
on the current thread.
"""

import logging
import sqlite3
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional, Union

from book_management.domain.ports import TransactionManager

logger = logging.getLogger(__name__)

SCHEMA = (
    """
    CREATE TABLE IF NOT EXISTS authors (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        name TEXT NOT NULL,
        birth_date TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS books (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        title TEXT NOT NULL,
        price INTEGER NOT NULL CHECK (price >= 0),
        status TEXT NOT NULL CHECK (status IN ('unpublished', 'published'))
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS book_authors (
        book_id INTEGER NOT NULL REFERENCES books(id),
        author_id INTEGER NOT NULL REFERENCES authors(id),
        PRIMARY KEY (book_id, author_id)
    )
    """,
    "CREATE INDEX IF NOT EXISTS idx_book_authors_author_id ON book_authors(author_id)",
)


class SqliteDatabase(TransactionManager):
    """
    Connection and transaction management for a SQLite file.

    Each thread gets its own transaction slot, so concurrent requests
    served from different worker threads never share a connection.
    """

    def __init__(self, db_path: Union[Path, str]) -> None:
        """
        Initialize the database and create the schema if needed.

        Args:
            db_path: Location of the SQLite file; parent dirs are created
        """
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._local = threading.local()
        self.init_schema()

    @property
    def path(self) -> Path:
        return self._db_path

    def _open(self) -> sqlite3.Connection:
        """Open a new connection with row factory and FK enforcement."""
        conn = sqlite3.connect(str(self._db_path))
        conn.row_factory = sqlite3.Row  # access columns by name
        conn.execute("PRAGMA foreign_keys = ON")
        return conn

    def _active(self) -> Optional[sqlite3.Connection]:
        return getattr(self._local, "conn", None)

    def init_schema(self) -> None:
        """Create the tables and indexes if they don't exist."""
        with self.connection() as conn:
            for statement in SCHEMA:
                conn.execute(statement)
        logger.debug("Schema ready at %s", self._db_path)

    @contextmanager
    def transaction(self) -> Iterator[None]:
        """
        Run the enclosed repository calls in one transaction.

        A nested call joins the outer transaction instead of opening a new one.
        """
        if self._active() is not None:
            yield
            return

        conn = self._open()
        self._local.conn = conn
        try:
            yield
            conn.commit()
        except BaseException:
            conn.rollback()
            raise
        finally:
            self._local.conn = None
            conn.close()

    @contextmanager
    def connection(self) -> Iterator[sqlite3.Connection]:
        """
        Provide a connection for a single repository call.

        Inside a transaction this is the transaction's connection and
        committing is left to `transaction()`. Otherwise a short-lived
        connection is opened and committed (or rolled back) on exit.
        """
        active = self._active()
        if active is not None:
            yield active
            return

        conn = self._open()
        try:
            yield conn
            conn.commit()
        except BaseException:
            conn.rollback()
            raise
        finally:
            conn.close()

    def is_ready(self) -> bool:
        """
        Check that the database file can be queried.

        Used by the health endpoint.
        """
        try:
            with self.connection() as conn:
                conn.execute("SELECT 1").fetchone()
            return True
        except sqlite3.Error as e:
            logger.error("Database health check failed: %s", e)
            return False
