"""
Domain service for author management.
"""

import logging
from datetime import date
from typing import List

from book_management.domain.entities import Author
from book_management.domain.errors import NotFoundError
from book_management.domain.ports import AuthorRepository

logger = logging.getLogger(__name__)


class AuthorService:
    """
    Creates, reads and updates authors.

    Usage:
        service = AuthorService(author_repo=sqlite_author_repo)
        author = service.create_author("Haruki", date(1949, 1, 12))
    """

    def __init__(self, author_repo: AuthorRepository) -> None:
        """
        Args:
            author_repo: Repository for persisting authors
        """
        self._author_repo = author_repo

    def create_author(self, name: str, birth_date: date) -> Author:
        """
        Persist a new author and return it with its assigned id.

        Raises:
            PersistenceError: If the store cannot return the created record
        """
        created = self._author_repo.create(Author.create_new(name, birth_date))
        logger.info("Created author id=%s", created.id)
        return created

    def get_author(self, author_id: int) -> Author:
        """
        Raises:
            NotFoundError: If no author has this id
        """
        author = self._author_repo.get_by_id(author_id)
        if author is None:
            raise NotFoundError("author", author_id)
        return author

    def list_authors(self) -> List[Author]:
        return self._author_repo.get_all()

    def update_author(self, author_id: int, name: str, birth_date: date) -> Author:
        """
        Replace every field of an existing author.

        There is no partial update: both name and birth date are overwritten.

        Raises:
            NotFoundError: If no author has this id
        """
        existing = self.get_author(author_id)
        updated = existing.with_changes(name=name, birth_date=birth_date)
        self._author_repo.update(updated)
        logger.info("Updated author id=%s", author_id)
        return updated
