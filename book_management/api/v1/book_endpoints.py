"""
API endpoints for book operations.

This module defines the FastAPI routes for creating, listing, retrieving
and updating books. It handles HTTP concerns and delegates to the domain
BookService.
"""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Path, Query, status

from book_management.domain.services import BookService
from book_management.api.v1 import schemas as api
from book_management.api.v1.converters import api_status_to_domain, domain_book_to_api
from book_management.api.v1.dependencies import get_book_service

router = APIRouter(prefix="/books", tags=["books"])


@router.post("", response_model=api.Book, status_code=status.HTTP_201_CREATED)
def create_book(
    request: api.BookRequest,
    service: BookService = Depends(get_book_service),
) -> api.Book:
    """
    Register a book and relate it to existing authors.

    Raises:
        400: Invalid fields
        404: One of the author ids does not exist
    """
    result = service.create_book(
        title=request.title,
        price=request.price,
        status=api_status_to_domain(request.status),
        author_ids=request.author_ids,
    )
    return domain_book_to_api(result)


@router.get("", response_model=list[api.Book])
def list_books(
    author: Optional[list[api.EntityId]] = Query(
        default=None,
        description="Author id filter, repeatable (books by ANY of them)",
    ),
    service: BookService = Depends(get_book_service),
) -> list[api.Book]:
    """
    List books, optionally only those related to the given authors.
    """
    if not author:
        results = service.list_books()
    else:
        results = service.list_books_by_authors(author)
    return [domain_book_to_api(r) for r in results]


@router.get("/{book_id}", response_model=api.Book)
def get_book(
    book_id: Annotated[int, Path(ge=api.MIN_INT, le=api.MAX_INT)],
    service: BookService = Depends(get_book_service),
) -> api.Book:
    """
    Get a book and its authors.

    Raises:
        404: Book not found
    """
    return domain_book_to_api(service.get_book(book_id))


@router.put("/{book_id}", response_model=api.Book)
def update_book(
    book_id: Annotated[int, Path(ge=api.MIN_INT, le=api.MAX_INT)],
    request: api.BookRequest,
    service: BookService = Depends(get_book_service),
) -> api.Book:
    """
    Replace every field of a book, including its authors.

    Raises:
        400: Invalid fields
        404: Book or one of the authors not found, or a published book
             set back to unpublished
    """
    result = service.update_book(
        book_id=book_id,
        title=request.title,
        price=request.price,
        status=api_status_to_domain(request.status),
        author_ids=request.author_ids,
    )
    return domain_book_to_api(result)
