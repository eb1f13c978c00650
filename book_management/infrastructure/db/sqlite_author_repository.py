"""
SQLite implementation of the AuthorRepository port.
"""

import sqlite3
from datetime import date
from typing import List, Optional

from book_management.domain.entities import Author
from book_management.domain.errors import PersistenceError
from book_management.domain.ports import AuthorRepository
from book_management.infrastructure.db.sqlite_database import SqliteDatabase


class SqliteAuthorRepository(AuthorRepository):
    """
    Stores authors in the `authors` table. Birth dates are kept as
    ISO-8601 text (YYYY-MM-DD).
    """

    def __init__(self, database: SqliteDatabase) -> None:
        self._database = database

    def _row_to_author(self, row: sqlite3.Row) -> Author:
        """Convert a database row to an Author entity."""
        return Author(
            id=row["id"],
            name=row["name"],
            birth_date=date.fromisoformat(row["birth_date"]),
        )

    def count(self) -> int:
        """Get the total number of authors."""
        with self._database.connection() as conn:
            result = conn.execute("SELECT COUNT(*) AS cnt FROM authors").fetchone()
            return result["cnt"]

    def create(self, author: Author) -> Author:
        """Insert a new author and read it back with its id."""
        try:
            with self._database.connection() as conn:
                cursor = conn.execute(
                    "INSERT INTO authors (name, birth_date) VALUES (?, ?)",
                    (author.name, author.birth_date.isoformat()),
                )
                row = conn.execute(
                    "SELECT * FROM authors WHERE id = ?",
                    (cursor.lastrowid,),
                ).fetchone()

                if row is None:
                    raise PersistenceError("Failed to create author")

                return self._row_to_author(row)

        except (sqlite3.Error, OverflowError) as e:
            raise PersistenceError(f"Database error while creating author: {e}") from e

    def get_by_id(self, author_id: int) -> Optional[Author]:
        """Retrieve an author by id."""
        with self._database.connection() as conn:
            try:
                row = conn.execute(
                    "SELECT * FROM authors WHERE id = ?",
                    (author_id,),
                ).fetchone()
            except OverflowError:
                # Beyond SQLite's 64-bit INTEGER range, so no row can match
                return None

            if row is None:
                return None

            return self._row_to_author(row)

    def get_all(self) -> List[Author]:
        """Retrieve all authors."""
        with self._database.connection() as conn:
            rows = conn.execute("SELECT * FROM authors ORDER BY id").fetchall()
            return [self._row_to_author(row) for row in rows]

    def update(self, author: Author) -> None:
        """Overwrite name and birth date of an existing author."""
        try:
            with self._database.connection() as conn:
                conn.execute(
                    "UPDATE authors SET name = ?, birth_date = ? WHERE id = ?",
                    (author.name, author.birth_date.isoformat(), author.id),
                )
        except (sqlite3.Error, OverflowError) as e:
            raise PersistenceError(f"Database error while updating author: {e}") from e
