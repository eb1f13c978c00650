"""
SQLite adapters for the domain ports.
"""

from .sqlite_author_repository import SqliteAuthorRepository
from .sqlite_book_repository import SqliteBookRepository
from .sqlite_database import SqliteDatabase

__all__ = [
    "SqliteAuthorRepository",
    "SqliteBookRepository",
    "SqliteDatabase",
]
