"""
Domain layer - Core business logic and entities.

This layer contains the business entities, value objects, typed errors,
and defines the ports (interfaces) that the infrastructure layer must
implement.

It has NO dependencies on external frameworks, databases, or APIs.
"""

from .entities import Author, Book, BookWithAuthors
from .errors import (
    DomainError,
    ErrorKind,
    InvalidTransitionError,
    NotFoundError,
    PersistenceError,
)
from .value_objects import BookStatus

__all__ = [
    # Entities
    "Author",
    "Book",
    "BookWithAuthors",
    # Value Objects
    "BookStatus",
    # Errors
    "DomainError",
    "ErrorKind",
    "InvalidTransitionError",
    "NotFoundError",
    "PersistenceError",
]
