"""
Domain service for books and their author relation.

The service depends ONLY on ports. It validates every referenced entity
and the publication rule before the first write, then performs the
writes inside a single transaction:

    validate (read only) --> write book --> replace relation --> commit

If anything fails before the commit, nothing is persisted.
"""

import logging
from typing import Iterable, List

from book_management.domain.entities import Author, Book, BookWithAuthors
from book_management.domain.errors import InvalidTransitionError, NotFoundError
from book_management.domain.ports import (
    AuthorRepository,
    BookRepository,
    TransactionManager,
)
from book_management.domain.value_objects import BookStatus, unique_ids

logger = logging.getLogger(__name__)


class BookService:
    """
    Orchestrates book creation, retrieval and update.

    Usage:
        service = BookService(
            book_repo=sqlite_book_repo,
            author_repo=sqlite_author_repo,
            transactions=sqlite_database,
        )
        result = service.create_book("Norwegian Wood", 1980, BookStatus.PUBLISHED, [1])
    """

    def __init__(
        self,
        book_repo: BookRepository,
        author_repo: AuthorRepository,
        transactions: TransactionManager,
    ) -> None:
        """
        Initialize the book service with required dependencies.

        Args:
            book_repo: Repository for books and the book/author relation
            author_repo: Repository used to resolve author ids
            transactions: Provides the atomic scope for multi-step writes
        """
        self._book_repo = book_repo
        self._author_repo = author_repo
        self._transactions = transactions

    def create_book(
        self,
        title: str,
        price: int,
        status: BookStatus,
        author_ids: List[int],
    ) -> BookWithAuthors:
        """
        Create a book and relate it to the given authors.

        No status rule applies on creation. Duplicate author ids collapse to
        a single relation row and a single entry in the returned authors.

        Args:
            title: Book title
            price: Book price (>= 0)
            status: Initial publication status
            author_ids: Ids of existing authors, in caller order

        Returns:
            The stored book with its resolved authors

        Raises:
            NotFoundError: For the first author id (in input order) that
                does not exist; nothing is persisted
            PersistenceError: If the store cannot return the created book
        """
        with self._transactions.transaction():
            authors = self._resolve_authors(author_ids)

            created = self._book_repo.create(Book.create_new(title, price, status))
            self._book_repo.set_authors(created.id, [a.id for a in authors])

        logger.info(
            "Created book id=%s with authors=%s",
            created.id,
            [a.id for a in authors],
        )
        return BookWithAuthors(book=created, authors=authors)

    def get_book(self, book_id: int) -> BookWithAuthors:
        """
        Raises:
            NotFoundError: If no book has this id
        """
        book = self._book_repo.get_by_id(book_id)
        if book is None:
            raise NotFoundError("book", book_id)
        return self._attach_authors(book)

    def list_books(self) -> List[BookWithAuthors]:
        return [self._attach_authors(book) for book in self._book_repo.get_all()]

    def list_books_by_authors(self, author_ids: Iterable[int]) -> List[BookWithAuthors]:
        """
        List the distinct books written by ANY of the given authors.

        Unknown author ids simply match nothing.

        Args:
            author_ids: Author ids to match

        Returns:
            Matching books with their full author set (not only the
            authors that matched)
        """
        books = self._book_repo.get_by_author_ids(unique_ids(author_ids))
        return [self._attach_authors(book) for book in books]

    def update_book(
        self,
        book_id: int,
        title: str,
        price: int,
        status: BookStatus,
        author_ids: List[int],
    ) -> BookWithAuthors:
        """
        Replace every field of a book and its author relation.

        Steps:
        1. Load the existing book
        2. Reject published -> unpublished
        3. Resolve every author id
        4. Overwrite title, price and status
        5. Replace the relation with the distinct author ids

        Steps 1-3 only read, so a failure there leaves storage untouched.
        Steps 4-5 commit together or not at all.

        Returns:
            The updated book with the authors resolved in step 3

        Raises:
            NotFoundError: If the book or any author does not exist
            InvalidTransitionError: If a published book would be unpublished
        """
        with self._transactions.transaction():
            existing = self._book_repo.get_by_id(book_id)
            if existing is None:
                raise NotFoundError("book", book_id)

            if not existing.status.can_transition_to(status):
                logger.warning(
                    "Rejected status change for book id=%s: %s -> %s",
                    book_id,
                    existing.status.value,
                    status.value,
                )
                raise InvalidTransitionError(existing.status, status)

            authors = self._resolve_authors(author_ids)

            updated = existing.with_changes(title=title, price=price, status=status)
            self._book_repo.update(updated)
            self._book_repo.set_authors(book_id, [a.id for a in authors])

        logger.info(
            "Updated book id=%s with authors=%s",
            book_id,
            [a.id for a in authors],
        )
        return BookWithAuthors(book=updated, authors=authors)

    def _resolve_authors(self, author_ids: Iterable[int]) -> List[Author]:
        """
        Load every distinct author id, in first-occurrence order.

        Raises:
            NotFoundError: On the first id that does not resolve
        """
        authors: List[Author] = []
        for author_id in unique_ids(author_ids):
            author = self._author_repo.get_by_id(author_id)
            if author is None:
                logger.warning("Author id=%s referenced by a book does not exist", author_id)
                raise NotFoundError("author", author_id)
            authors.append(author)
        return authors

    def _attach_authors(self, book: Book) -> BookWithAuthors:
        """Resolve the related authors of a stored book."""
        authors: List[Author] = []
        for author_id in self._book_repo.get_author_ids(book.id):
            author = self._author_repo.get_by_id(author_id)
            if author is None:
                # Dangling relation row: skip it rather than failing the read
                logger.warning(
                    "Book id=%s references missing author id=%s", book.id, author_id
                )
                continue
            authors.append(author)
        return BookWithAuthors(book=book, authors=authors)
