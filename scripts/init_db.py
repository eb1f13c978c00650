#!/usr/bin/env python3
"""
Database initialisation script.

Creates the SQLite file (and its parent directory) with the authors,
books and book_authors tables.

Usage:
    python -m scripts.init_db --db-path data/books.db
"""

import argparse
import logging
import sys
from pathlib import Path

from book_management.infrastructure.db import SqliteDatabase

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = Path("data/books.db")


def main(db_path: Path = DEFAULT_DB_PATH) -> int:
    """
    Create the schema at `db_path`.

    Returns:
        Process exit code (0 on success)
    """
    logger.info(f"Initialising database at {db_path}")
    database = SqliteDatabase(db_path)

    if not database.is_ready():
        logger.error("Database is not usable after initialisation")
        return 1

    logger.info("Database ready")
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Create the book management schema")
    parser.add_argument(
        "--db-path", "-d",
        type=Path,
        default=DEFAULT_DB_PATH,
        help=f"SQLite file location (default: {DEFAULT_DB_PATH})"
    )

    args = parser.parse_args()
    sys.exit(main(args.db_path))
