"""
SQLite implementation of the BookRepository port.

Books live in the `books` table; the many-to-many relation with authors
lives in `book_authors`, whose (book_id, author_id) primary key rejects
duplicate pairs.
"""

import sqlite3
from typing import List, Optional

from book_management.domain.entities import Book
from book_management.domain.errors import PersistenceError
from book_management.domain.ports import BookRepository
from book_management.domain.value_objects import unique_ids
from book_management.infrastructure.db.sqlite_database import SqliteDatabase


class SqliteBookRepository(BookRepository):
    """
    The author relation is replaced wholesale by `set_authors`
    (delete all rows for the book, then insert the distinct ids).
    It is never diffed.
    """

    def __init__(self, database: SqliteDatabase) -> None:
        self._database = database

    def _row_to_book(self, row: sqlite3.Row) -> Book:
        """Convert a database row to a Book entity."""
        return Book(
            id=row["id"],
            title=row["title"],
            price=row["price"],
            status=row["status"],
        )

    def count(self) -> int:
        """Get the total number of books."""
        with self._database.connection() as conn:
            result = conn.execute("SELECT COUNT(*) AS cnt FROM books").fetchone()
            return result["cnt"]

    def create(self, book: Book) -> Book:
        """Insert a new book and read it back with its id."""
        try:
            with self._database.connection() as conn:
                cursor = conn.execute(
                    "INSERT INTO books (title, price, status) VALUES (?, ?, ?)",
                    (book.title, book.price, book.status.value),
                )
                row = conn.execute(
                    "SELECT * FROM books WHERE id = ?",
                    (cursor.lastrowid,),
                ).fetchone()

                if row is None:
                    raise PersistenceError("Failed to create book")

                return self._row_to_book(row)

        except (sqlite3.Error, OverflowError) as e:
            raise PersistenceError(f"Database error while creating book: {e}") from e

    def get_by_id(self, book_id: int) -> Optional[Book]:
        """Retrieve a book by id."""
        with self._database.connection() as conn:
            try:
                row = conn.execute(
                    "SELECT * FROM books WHERE id = ?",
                    (book_id,),
                ).fetchone()
            except OverflowError:
                # Beyond SQLite's 64-bit INTEGER range, so no row can match
                return None

            if row is None:
                return None

            return self._row_to_book(row)

    def get_all(self) -> List[Book]:
        """Retrieve all books."""
        with self._database.connection() as conn:
            rows = conn.execute("SELECT * FROM books ORDER BY id").fetchall()
            return [self._row_to_book(row) for row in rows]

    def get_by_author_ids(self, author_ids: List[int]) -> List[Book]:
        """Retrieve the distinct books related to any of the given authors."""
        if not author_ids:
            return []

        placeholders = ", ".join("?" * len(author_ids))
        with self._database.connection() as conn:
            rows = conn.execute(
                f"""
                SELECT DISTINCT b.id, b.title, b.price, b.status
                FROM books b
                JOIN book_authors ba ON ba.book_id = b.id
                WHERE ba.author_id IN ({placeholders})
                ORDER BY b.id
                """,
                list(author_ids),
            ).fetchall()
            return [self._row_to_book(row) for row in rows]

    def get_author_ids(self, book_id: int) -> List[int]:
        """Get the author ids of a book in the order they were related."""
        with self._database.connection() as conn:
            rows = conn.execute(
                "SELECT author_id FROM book_authors WHERE book_id = ? ORDER BY rowid",
                (book_id,),
            ).fetchall()
            return [row["author_id"] for row in rows]

    def set_authors(self, book_id: int, author_ids: List[int]) -> None:
        """Replace the author relation of a book."""
        rows = [(book_id, author_id) for author_id in unique_ids(author_ids)]

        try:
            with self._database.connection() as conn:
                conn.execute("DELETE FROM book_authors WHERE book_id = ?", (book_id,))
                conn.executemany(
                    "INSERT INTO book_authors (book_id, author_id) VALUES (?, ?)",
                    rows,
                )
        except sqlite3.IntegrityError as e:
            raise PersistenceError(f"Book/author relation violates constraints: {e}") from e
        except sqlite3.Error as e:
            raise PersistenceError(f"Database error while setting book authors: {e}") from e

    def update(self, book: Book) -> None:
        """Overwrite title, price and status of an existing book."""
        try:
            with self._database.connection() as conn:
                conn.execute(
                    "UPDATE books SET title = ?, price = ?, status = ? WHERE id = ?",
                    (book.title, book.price, book.status.value, book.id),
                )
        except (sqlite3.Error, OverflowError) as e:
            raise PersistenceError(f"Database error while updating book: {e}") from e
