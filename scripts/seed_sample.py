#!/usr/bin/env python3
"""
Sample data script.

Registers one author and one book through the domain services, so the
API has something to show right after a fresh install.

Usage:
    python -m scripts.seed_sample --db-path data/books.db
"""

import argparse
import logging
import sys
from datetime import date
from pathlib import Path

from book_management.domain.errors import DomainError
from book_management.domain.services import AuthorService, BookService
from book_management.domain.value_objects import BookStatus
from book_management.infrastructure.db import (
    SqliteAuthorRepository,
    SqliteBookRepository,
    SqliteDatabase,
)

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = Path("data/books.db")


def main(db_path: Path = DEFAULT_DB_PATH) -> int:
    """
    Seed the sample author and book.

    Returns:
        Process exit code (0 on success)
    """
    database = SqliteDatabase(db_path)
    author_repo = SqliteAuthorRepository(database)
    author_service = AuthorService(author_repo=author_repo)
    book_service = BookService(
        book_repo=SqliteBookRepository(database),
        author_repo=author_repo,
        transactions=database,
    )

    try:
        author = author_service.create_author("Haruki Murakami", date(1949, 1, 12))
        result = book_service.create_book(
            title="Norwegian Wood",
            price=1980,
            status=BookStatus.PUBLISHED,
            author_ids=[author.id],
        )
    except DomainError as e:
        logger.error(f"Seeding failed: {e}")
        return 1

    logger.info(f"Seeded author id={author.id} and book id={result.book.id}")
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Insert sample authors and books")
    parser.add_argument(
        "--db-path", "-d",
        type=Path,
        default=DEFAULT_DB_PATH,
        help=f"SQLite file location (default: {DEFAULT_DB_PATH})"
    )

    args = parser.parse_args()
    sys.exit(main(args.db_path))
