"""
Domain entities for the book management system.

Entities are objects with a unique identity that runs through time and
different representations. Here the identity is the integer id assigned
by storage: it is None until the entity has been persisted.
"""

from dataclasses import dataclass, field, replace
from datetime import date
from typing import List, Optional

from .value_objects import BookStatus

AUTHOR_NAME_MAX_LENGTH = 100


@dataclass
class Author:
    """
    Represents a book author.

    Authors are created once and afterwards only changed by a full
    replace of their fields. They are never deleted.
    """

    name: str
    """Author display name (1 to 100 characters)"""

    birth_date: date
    """Date of birth"""

    id: Optional[int] = None
    """Storage-assigned identifier, None until persisted"""

    def __post_init__(self) -> None:
        """Validate author data."""
        if not self.name:
            raise ValueError("Author name cannot be empty")

        if len(self.name) > AUTHOR_NAME_MAX_LENGTH:
            raise ValueError(
                f"Author name cannot exceed {AUTHOR_NAME_MAX_LENGTH} characters, "
                f"got {len(self.name)}"
            )

    def with_changes(self, name: str, birth_date: date) -> "Author":
        """Return a copy carrying the new field values and the same id."""
        return replace(self, name=name, birth_date=birth_date)

    @staticmethod
    def create_new(name: str, birth_date: date) -> "Author":
        """
        Factory method for an author that has not been stored yet.

        Args:
            name: Author name
            birth_date: Date of birth

        Returns:
            A new Author instance without id
        """
        return Author(name=name, birth_date=birth_date)


@dataclass
class Book:
    """
    Represents a book in the catalog.

    A book's authors are not part of the entity: they live in the
    book/author relation and are attached through BookWithAuthors.
    """

    title: str
    """Book title"""

    price: int
    """Price in the smallest currency unit (>= 0)"""

    status: BookStatus = BookStatus.UNPUBLISHED
    """Publication status"""

    id: Optional[int] = None
    """Storage-assigned identifier, None until persisted"""

    def __post_init__(self) -> None:
        """Validate book data."""
        if not self.title or not self.title.strip():
            raise ValueError("Book title cannot be empty")

        if self.price < 0:
            raise ValueError(f"Book price cannot be negative, got {self.price}")

        # Storage rows carry the raw string value
        self.status = BookStatus(self.status)

    def with_changes(self, title: str, price: int, status: BookStatus) -> "Book":
        """Return a copy carrying the new field values and the same id."""
        return replace(self, title=title, price=price, status=status)

    @staticmethod
    def create_new(title: str, price: int, status: BookStatus) -> "Book":
        """
        Factory method for a book that has not been stored yet.

        Args:
            title: Book title
            price: Book price
            status: Initial publication status

        Returns:
            A new Book instance without id
        """
        return Book(title=title, price=price, status=status)


@dataclass
class BookWithAuthors:
    """
    A book together with every author it is related to, fully resolved.
    """

    book: Book
    """The book itself"""

    authors: List[Author] = field(default_factory=list)
    """Resolved authors of the book"""

    @property
    def author_ids(self) -> List[Optional[int]]:
        return [author.id for author in self.authors]
