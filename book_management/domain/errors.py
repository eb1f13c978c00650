"""
Typed failures raised by the domain layer.

Every error carries an ErrorKind. The HTTP boundary maps the kind to a
status code in a single place, so services never deal with transport
concerns.
"""

from enum import Enum
from typing import Any

from .value_objects import BookStatus


class ErrorKind(str, Enum):
    """Discriminator for domain failures."""

    NOT_FOUND = "not_found"
    INVALID_TRANSITION = "invalid_transition"
    PERSISTENCE = "persistence"


class DomainError(Exception):
    """Base class for all failures raised by domain services."""

    kind: ErrorKind

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(DomainError):
    """
    A referenced entity does not exist.

    Args:
        entity: Entity kind, e.g. 'author' or 'book'
        entity_id: The id that failed to resolve
    """

    kind = ErrorKind.NOT_FOUND

    def __init__(self, entity: str, entity_id: Any) -> None:
        super().__init__(f"{entity.capitalize()} with id={entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


class InvalidTransitionError(DomainError):
    """A requested status change breaks the publication rule."""

    kind = ErrorKind.INVALID_TRANSITION

    def __init__(self, current: BookStatus, requested: BookStatus) -> None:
        super().__init__(
            f"Cannot revert a {current.value} book to {requested.value}"
        )
        self.current = current
        self.requested = requested


class PersistenceError(DomainError):
    """The store failed to perform a write or to return the written record."""

    kind = ErrorKind.PERSISTENCE
