"""
Port interfaces (protocols) for the domain layer.

Ports define the contracts between the domain and infrastructure layers.
They are implemented by adapters in the infrastructure layer, allowing
the domain to remain independent of technical details.

Following Hexagonal Architecture principles, the domain layer depends only
on these abstract protocols, never on concrete implementations.
"""

from typing import ContextManager, List, Optional, Protocol

from .entities import Author, Book


class TransactionManager(Protocol):
    """
    Port for grouping several repository writes into one atomic unit.

    Repositories called inside `transaction()` share the same underlying
    connection, so either every write commits or none does.
    """

    def transaction(self) -> ContextManager[None]:
        """
        Open a transaction scope.

        Commits when the block exits normally and rolls back when it
        raises. The exception is re-raised after the rollback.
        """
        ...


class AuthorRepository(Protocol):
    """
    Port for persisting and retrieving authors.
    """

    def create(self, author: Author) -> Author:
        """
        Insert a new author.

        Args:
            author: Author without id

        Returns:
            The stored author, with the id assigned by storage

        Raises:
            PersistenceError: If the stored record cannot be read back
        """
        ...

    def get_by_id(self, author_id: int) -> Optional[Author]:
        """
        Retrieve an author by id.

        Returns:
            The Author if found, None otherwise
        """
        ...

    def get_all(self) -> List[Author]:
        """Retrieve every author in storage order (ascending id)."""
        ...

    def update(self, author: Author) -> None:
        """
        Replace all fields of an existing author.

        Args:
            author: Author carrying the id of the row to overwrite
        """
        ...

    def count(self) -> int:
        """Get the total number of authors."""
        ...


class BookRepository(Protocol):
    """
    Port for persisting books and their author relation.

    The relation is keyed by (book_id, author_id) and is only ever replaced
    as a whole through `set_authors`.
    """

    def create(self, book: Book) -> Book:
        """
        Insert a new book.

        Returns:
            The stored book, with the id assigned by storage

        Raises:
            PersistenceError: If the stored record cannot be read back
        """
        ...

    def get_by_id(self, book_id: int) -> Optional[Book]:
        """Retrieve a book by id, or None if it does not exist."""
        ...

    def get_all(self) -> List[Book]:
        """Retrieve every book in storage order (ascending id)."""
        ...

    def get_by_author_ids(self, author_ids: List[int]) -> List[Book]:
        """
        Retrieve the distinct books related to any of the given authors.

        Args:
            author_ids: Author ids to match (union semantics)

        Returns:
            Books in storage order; empty if `author_ids` is empty
        """
        ...

    def get_author_ids(self, book_id: int) -> List[int]:
        """Get the author ids related to a book, in insertion order."""
        ...

    def set_authors(self, book_id: int, author_ids: List[int]) -> None:
        """
        Replace the author relation of a book.

        Deletes every existing row for the book, then inserts one row per
        distinct id in `author_ids`.
        """
        ...

    def update(self, book: Book) -> None:
        """Replace title, price and status of an existing book."""
        ...

    def count(self) -> int:
        """Get the total number of books."""
        ...
