"""
Tests for BookService.

End-to-end service tests using:
- SQLite on a temporary file (real repositories and transactions)
- A failing book repository wrapper to check that multi-step writes
  are rolled back together

Verifies the relation workflow: validate authors -> write book -> replace relation.
"""

import pytest
from datetime import date
from typing import List

from book_management.domain.entities import Author
from book_management.domain.errors import InvalidTransitionError, NotFoundError
from book_management.domain.services import BookService
from book_management.domain.value_objects import BookStatus
from book_management.infrastructure.db import (
    SqliteAuthorRepository,
    SqliteBookRepository,
    SqliteDatabase,
)


# =============================================================================
# Fakes
# =============================================================================


class FailingRelationBookRepository(SqliteBookRepository):
    """Book repository whose set_authors always fails after the book is written."""

    def __init__(self, database: SqliteDatabase) -> None:
        super().__init__(database)
        self.set_authors_calls: List[tuple] = []

    def set_authors(self, book_id: int, author_ids: List[int]) -> None:
        self.set_authors_calls.append((book_id, list(author_ids)))
        raise RuntimeError("relation write failed")


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def database(tmp_path):
    return SqliteDatabase(tmp_path / "test_books.db")


@pytest.fixture
def author_repo(database):
    return SqliteAuthorRepository(database)


@pytest.fixture
def book_repo(database):
    return SqliteBookRepository(database)


@pytest.fixture
def service(database, author_repo, book_repo):
    return BookService(book_repo=book_repo, author_repo=author_repo, transactions=database)


@pytest.fixture
def haruki(author_repo) -> Author:
    return author_repo.create(Author.create_new("Haruki", date(1949, 1, 12)))


@pytest.fixture
def banana(author_repo) -> Author:
    return author_repo.create(Author.create_new("Banana", date(1964, 7, 24)))


@pytest.fixture
def published_book(service, haruki):
    return service.create_book("Norwegian Wood", 1980, BookStatus.PUBLISHED, [haruki.id])


# =============================================================================
# create_book
# =============================================================================


class TestCreateBook:
    def test_returns_book_with_resolved_authors(self, service, haruki):
        # Act
        result = service.create_book("Norwegian Wood", 1980, BookStatus.PUBLISHED, [haruki.id])

        # Assert
        assert result.book.id is not None
        assert result.book.title == "Norwegian Wood"
        assert result.book.price == 1980
        assert result.book.status is BookStatus.PUBLISHED
        assert result.authors == [haruki]

    def test_duplicate_author_ids_are_collapsed(self, service, book_repo, haruki, banana):
        """[a, b, b] stores {a, b} and returns each author once."""
        # Act
        result = service.create_book("Duo", 100, BookStatus.UNPUBLISHED, [haruki.id, banana.id, banana.id])

        # Assert
        assert book_repo.get_author_ids(result.book.id) == [haruki.id, banana.id]
        assert result.authors == [haruki, banana]

    def test_authors_keep_input_order(self, service, haruki, banana):
        result = service.create_book("Duo", 100, BookStatus.UNPUBLISHED, [banana.id, haruki.id])

        assert result.author_ids == [banana.id, haruki.id]

    def test_unknown_author_raises_and_persists_nothing(self, service, book_repo, haruki):
        # Act
        with pytest.raises(NotFoundError, match="Author with id=999 not found"):
            service.create_book("Ghost", 100, BookStatus.PUBLISHED, [haruki.id, 999])

        # Assert
        assert book_repo.count() == 0

    def test_reports_first_unknown_author_in_input_order(self, service, haruki):
        with pytest.raises(NotFoundError) as exc_info:
            service.create_book("Ghost", 100, BookStatus.PUBLISHED, [998, haruki.id, 997])

        assert exc_info.value.entity_id == 998

    def test_unpublished_creation_allowed(self, service, haruki):
        result = service.create_book("Draft", 0, BookStatus.UNPUBLISHED, [haruki.id])

        assert result.book.status is BookStatus.UNPUBLISHED

    def test_relation_failure_rolls_back_book(self, database, author_repo, haruki):
        # Arrange
        failing_repo = FailingRelationBookRepository(database)
        service = BookService(book_repo=failing_repo, author_repo=author_repo, transactions=database)

        # Act
        with pytest.raises(RuntimeError, match="relation write failed"):
            service.create_book("Lost", 100, BookStatus.PUBLISHED, [haruki.id])

        # Assert: the book row written before the failure is gone
        assert len(failing_repo.set_authors_calls) == 1
        assert failing_repo.count() == 0


# =============================================================================
# get / list
# =============================================================================


class TestGetBook:
    def test_round_trip_matches_created(self, service, published_book):
        # Act
        fetched = service.get_book(published_book.book.id)

        # Assert
        assert fetched.book == published_book.book
        assert fetched.authors == published_book.authors

    def test_missing_book_raises_not_found(self, service):
        with pytest.raises(NotFoundError, match="Book with id=42 not found"):
            service.get_book(42)

    def test_dangling_relation_is_skipped(self, service, database, published_book, haruki):
        """A relation row whose author vanished should not break reads."""
        # Arrange: remove the author behind the service's back
        with database.connection() as conn:
            conn.execute("PRAGMA foreign_keys = OFF")
            conn.execute("DELETE FROM authors WHERE id = ?", (haruki.id,))

        # Act
        fetched = service.get_book(published_book.book.id)

        # Assert
        assert fetched.authors == []


class TestListBooks:
    def test_lists_all_with_authors(self, service, haruki, banana):
        # Arrange
        first = service.create_book("First", 1, BookStatus.PUBLISHED, [haruki.id])
        second = service.create_book("Second", 2, BookStatus.UNPUBLISHED, [banana.id, haruki.id])

        # Act
        result = service.list_books()

        # Assert
        assert [r.book.id for r in result] == [first.book.id, second.book.id]
        assert result[1].authors == [banana, haruki]

    def test_empty(self, service):
        assert service.list_books() == []


class TestListBooksByAuthors:
    def test_union_of_authors(self, service, haruki, banana, author_repo):
        # Arrange
        other = author_repo.create(Author.create_new("Other", date(1970, 1, 1)))
        by_haruki = service.create_book("H", 1, BookStatus.PUBLISHED, [haruki.id])
        by_banana = service.create_book("B", 1, BookStatus.PUBLISHED, [banana.id])
        service.create_book("O", 1, BookStatus.PUBLISHED, [other.id])

        # Act
        result = service.list_books_by_authors([haruki.id, banana.id])

        # Assert
        assert [r.book.id for r in result] == [by_haruki.book.id, by_banana.book.id]

    def test_book_appears_once_and_carries_all_authors(self, service, haruki, banana):
        # Arrange
        both = service.create_book("Both", 1, BookStatus.PUBLISHED, [haruki.id, banana.id])

        # Act
        result = service.list_books_by_authors([haruki.id, banana.id, haruki.id])

        # Assert
        assert len(result) == 1
        assert result[0].book.id == both.book.id
        assert result[0].authors == [haruki, banana]

    def test_empty_filter_returns_nothing(self, service, published_book):
        assert service.list_books_by_authors([]) == []


# =============================================================================
# update_book
# =============================================================================


class TestUpdateBook:
    def test_replaces_fields_and_authors(self, service, published_book, banana):
        # Act
        result = service.update_book(
            published_book.book.id, "Norwegian Wood (new)", 2000, BookStatus.PUBLISHED, [banana.id]
        )

        # Assert
        assert result.book.title == "Norwegian Wood (new)"
        assert result.book.price == 2000
        assert result.authors == [banana]
        assert service.get_book(published_book.book.id).authors == [banana]

    def test_unpublished_to_published_allowed(self, service, haruki):
        # Arrange
        draft = service.create_book("Draft", 0, BookStatus.UNPUBLISHED, [haruki.id])

        # Act
        result = service.update_book(draft.book.id, "Draft", 0, BookStatus.PUBLISHED, [haruki.id])

        # Assert
        assert result.book.status is BookStatus.PUBLISHED

    def test_published_to_unpublished_rejected_and_unchanged(self, service, published_book, haruki, banana):
        # Arrange
        book_id = published_book.book.id

        # Act
        with pytest.raises(InvalidTransitionError, match="Cannot revert a published book to unpublished"):
            service.update_book(book_id, "Changed", 1, BookStatus.UNPUBLISHED, [banana.id])

        # Assert
        stored = service.get_book(book_id)
        assert stored.book == published_book.book
        assert stored.authors == [haruki]

    def test_missing_book_raises_not_found(self, service, haruki):
        with pytest.raises(NotFoundError, match="Book with id=999 not found"):
            service.update_book(999, "T", 1, BookStatus.PUBLISHED, [haruki.id])

    def test_unknown_author_leaves_book_and_relation_unchanged(self, service, book_repo, published_book, haruki):
        # Arrange
        book_id = published_book.book.id

        # Act
        with pytest.raises(NotFoundError, match="Author with id=999 not found"):
            service.update_book(book_id, "Changed", 1, BookStatus.PUBLISHED, [haruki.id, 999])

        # Assert
        assert book_repo.get_by_id(book_id) == published_book.book
        assert book_repo.get_author_ids(book_id) == [haruki.id]

    def test_duplicate_author_ids_are_collapsed(self, service, book_repo, published_book, haruki, banana):
        # Act
        result = service.update_book(
            published_book.book.id, "T", 1, BookStatus.PUBLISHED, [banana.id, banana.id, haruki.id]
        )

        # Assert
        assert result.authors == [banana, haruki]
        assert book_repo.get_author_ids(published_book.book.id) == [banana.id, haruki.id]

    def test_relation_failure_rolls_back_field_update(self, database, author_repo, published_book, banana):
        # Arrange
        failing_repo = FailingRelationBookRepository(database)
        service = BookService(book_repo=failing_repo, author_repo=author_repo, transactions=database)
        book_id = published_book.book.id

        # Act
        with pytest.raises(RuntimeError):
            service.update_book(book_id, "Changed", 5, BookStatus.PUBLISHED, [banana.id])

        # Assert
        assert failing_repo.get_by_id(book_id) == published_book.book
