"""
API endpoints for author operations.

Domain errors raised by the service are not caught here: the handlers
registered in error_handlers translate them to HTTP responses.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, status

from book_management.domain.services import AuthorService
from book_management.api.v1 import schemas as api
from book_management.api.v1.converters import domain_author_to_api
from book_management.api.v1.dependencies import get_author_service

router = APIRouter(prefix="/authors", tags=["authors"])


@router.post("", response_model=api.Author, status_code=status.HTTP_201_CREATED)
def create_author(
    request: api.AuthorRequest,
    service: AuthorService = Depends(get_author_service),
) -> api.Author:
    """
    Register a new author.

    Raises:
        400: Invalid name or birth date
    """
    author = service.create_author(request.name, request.birth_date)
    return domain_author_to_api(author)


@router.get("", response_model=list[api.Author])
def list_authors(
    service: AuthorService = Depends(get_author_service),
) -> list[api.Author]:
    """List every author."""
    return [domain_author_to_api(a) for a in service.list_authors()]


@router.get("/{author_id}", response_model=api.Author)
def get_author(
    author_id: Annotated[int, Path(ge=api.MIN_INT, le=api.MAX_INT)],
    service: AuthorService = Depends(get_author_service),
) -> api.Author:
    """
    Get an author by id.

    Raises:
        404: Author not found
    """
    return domain_author_to_api(service.get_author(author_id))


@router.put("/{author_id}", response_model=api.Author)
def update_author(
    author_id: Annotated[int, Path(ge=api.MIN_INT, le=api.MAX_INT)],
    request: api.AuthorRequest,
    service: AuthorService = Depends(get_author_service),
) -> api.Author:
    """
    Replace name and birth date of an author.

    Raises:
        400: Invalid name or birth date
        404: Author not found
    """
    author = service.update_author(author_id, request.name, request.birth_date)
    return domain_author_to_api(author)
