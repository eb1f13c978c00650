"""
Converters between domain entities and API schemas.

This module centralizes all conversion logic between the domain layer
and the API layer, maintaining clean separation of concerns.
"""

from book_management.domain import entities as domain
from book_management.domain.value_objects import BookStatus
from book_management.api.v1 import schemas as api


def domain_author_to_api(author: domain.Author) -> api.Author:
    """
    Convert a domain Author entity to an API Author model.

    Args:
        author: Stored domain Author (id set)

    Returns:
        API Author model
    """
    return api.Author(
        id=author.id,
        name=author.name,
        birth_date=author.birth_date,
    )


def domain_book_to_api(result: domain.BookWithAuthors) -> api.Book:
    """
    Convert a domain BookWithAuthors aggregate to an API Book model.

    Args:
        result: Stored book with its resolved authors

    Returns:
        API Book model
    """
    book = result.book
    return api.Book(
        id=book.id,
        title=book.title,
        price=book.price,
        status=book.status.value,
        authors=[domain_author_to_api(a) for a in result.authors],
    )


def api_status_to_domain(status: str) -> BookStatus:
    return BookStatus(status)
