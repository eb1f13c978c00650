"""
Tests for AuthorService.

Uses a real SQLite repository on a temporary file.
"""

import pytest
from datetime import date

from book_management.domain.errors import NotFoundError
from book_management.domain.services import AuthorService
from book_management.infrastructure.db import SqliteAuthorRepository, SqliteDatabase


@pytest.fixture
def repo(tmp_path):
    return SqliteAuthorRepository(SqliteDatabase(tmp_path / "test_books.db"))


@pytest.fixture
def service(repo):
    return AuthorService(author_repo=repo)


class TestCreateAuthor:
    def test_returns_id_and_submitted_fields(self, service):
        # Act
        author = service.create_author("Haruki", date(1949, 1, 12))

        # Assert
        assert author.id is not None
        assert author.name == "Haruki"
        assert author.birth_date == date(1949, 1, 12)

    def test_first_author_gets_id_1(self, service):
        assert service.create_author("Haruki", date(1949, 1, 12)).id == 1


class TestGetAuthor:
    def test_returns_stored_author(self, service):
        created = service.create_author("Haruki", date(1949, 1, 12))

        assert service.get_author(created.id) == created

    def test_missing_author_raises_not_found(self, service):
        with pytest.raises(NotFoundError, match="Author with id=999 not found"):
            service.get_author(999)


class TestListAuthors:
    def test_empty(self, service):
        assert service.list_authors() == []

    def test_returns_all(self, service):
        # Arrange
        first = service.create_author("A", date(1900, 1, 1))
        second = service.create_author("B", date(1901, 1, 1))

        # Act / Assert
        assert service.list_authors() == [first, second]


class TestUpdateAuthor:
    def test_replaces_all_fields(self, service):
        # Arrange
        created = service.create_author("Haruki", date(1949, 1, 12))

        # Act
        updated = service.update_author(created.id, "Haruki Murakami", date(1949, 1, 13))

        # Assert
        assert updated.id == created.id
        assert updated.name == "Haruki Murakami"
        assert service.get_author(created.id) == updated

    def test_missing_author_raises_not_found(self, service, repo):
        with pytest.raises(NotFoundError):
            service.update_author(999, "Nobody", date(1900, 1, 1))

        assert repo.count() == 0
