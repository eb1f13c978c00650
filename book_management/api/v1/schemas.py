"""
Request and response models for the HTTP API.

JSON keys are camelCase (birthDate, authorIds); Python attributes stay
snake_case through field aliases.
"""

from datetime import date
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


StatusLiteral = Literal["unpublished", "published"]

# Ids and prices accepted from clients fit a 32-bit signed integer
MIN_INT = -(2**31)
MAX_INT = 2**31 - 1

EntityId = Annotated[int, Field(ge=MIN_INT, le=MAX_INT)]


# request bodies

class AuthorRequest(BaseModel):
    """
    Request body for POST /authors and PUT /authors/{id}.
    """
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(min_length=1, max_length=100, description="Author name (1-100 chars)")
    birth_date: date = Field(alias="birthDate", description="Date of birth, today or earlier")

    @field_validator("birth_date")
    @classmethod
    def birth_date_not_in_future(cls, value: date) -> date:
        if value > date.today():
            raise ValueError("birthDate must be today or a past date")
        return value


class BookRequest(BaseModel):
    """
    Request body for POST /books and PUT /books/{id}.
    """
    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(description="Book title, not blank")
    price: int = Field(ge=0, le=MAX_INT, description="Price, 0 or more")
    status: StatusLiteral = Field(description="'unpublished' or 'published'")
    author_ids: list[EntityId] = Field(
        alias="authorIds",
        min_length=1,
        description="Ids of the book's authors (at least one)",
    )

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("title must not be blank")
        return value


# response bodies

class Author(BaseModel):
    """
    API representation of an Author entity.
    """
    model_config = ConfigDict(populate_by_name=True)

    id: int = Field(description="Author id")
    name: str = Field(description="Author name")
    birth_date: date = Field(alias="birthDate", description="Date of birth (YYYY-MM-DD)")


class Book(BaseModel):
    """
    API representation of a book with its resolved authors.
    """
    id: int = Field(description="Book id")
    title: str = Field(description="Book title")
    price: int = Field(description="Book price")
    status: StatusLiteral = Field(description="Publication status")
    authors: list[Author] = Field(default_factory=list, description="Authors of the book")


class FieldError(BaseModel):
    field: str
    message: str


class ValidationErrorResponse(BaseModel):
    """
    Body returned with 400 when request fields fail validation.
    """
    message: str = "Invalid input"
    errors: list[FieldError] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    """
    Body returned for domain and unexpected errors.
    """
    message: str
