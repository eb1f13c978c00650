"""
FastAPI dependencies for dependency injection.

This module provides singleton instances of the database, repositories
and services for use with FastAPI's Depends() system.

Note: We use module-level singletons instead of @lru_cache with Depends()
parameters, which is an antipattern that can cause unexpected behavior.
"""

import os
from pathlib import Path
from typing import Optional

from book_management.domain.ports import AuthorRepository, BookRepository
from book_management.domain.services import AuthorService, BookService
from book_management.infrastructure.db import (
    SqliteAuthorRepository,
    SqliteBookRepository,
    SqliteDatabase,
)

# Configuration from environment
DB_PATH = Path(os.getenv("DB_PATH", "data/books.db"))

# Module-level singletons (initialized lazily)
_database: Optional[SqliteDatabase] = None
_author_repository: Optional[AuthorRepository] = None
_book_repository: Optional[BookRepository] = None
_author_service: Optional[AuthorService] = None
_book_service: Optional[BookService] = None


def get_database() -> SqliteDatabase:
    """Provide a singleton database handle (schema created on first use)."""
    global _database
    if _database is None:
        _database = SqliteDatabase(DB_PATH)
    return _database


def get_author_repository() -> AuthorRepository:
    """Provide a singleton instance of the author repository."""
    global _author_repository
    if _author_repository is None:
        _author_repository = SqliteAuthorRepository(get_database())
    return _author_repository


def get_book_repository() -> BookRepository:
    """Provide a singleton instance of the book repository."""
    global _book_repository
    if _book_repository is None:
        _book_repository = SqliteBookRepository(get_database())
    return _book_repository


def get_author_service() -> AuthorService:
    """Provide the Author Service with its repository wired."""
    global _author_service
    if _author_service is None:
        _author_service = AuthorService(author_repo=get_author_repository())
    return _author_service


def get_book_service() -> BookService:
    """Provide the Book Service with all dependencies wired."""
    global _book_service
    if _book_service is None:
        _book_service = BookService(
            book_repo=get_book_repository(),
            author_repo=get_author_repository(),
            transactions=get_database(),
        )
    return _book_service


def reset_dependencies() -> None:
    """
    Reset all singletons. Useful for testing.

    This allows tests to inject their own dependencies by resetting
    the module state between test cases.
    """
    global _database, _author_repository, _book_repository
    global _author_service, _book_service

    _database = None
    _author_repository = None
    _book_repository = None
    _author_service = None
    _book_service = None
