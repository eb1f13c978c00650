"""
Translation of failures into HTTP responses.

This is the only place that knows about status codes for failures:
- request validation errors -> 400 with a per-field error list
- DomainError -> status picked from its ErrorKind, with its own message
- anything else -> 500 with a fixed message (details only in the log)
"""

import logging
from typing import Any, Dict, List

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from book_management.domain.errors import DomainError, ErrorKind
from book_management.api.v1 import schemas as api

logger = logging.getLogger(__name__)

STATUS_BY_KIND: Dict[ErrorKind, int] = {
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.INVALID_TRANSITION: status.HTTP_404_NOT_FOUND,
    ErrorKind.PERSISTENCE: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred"

_LOCATIONS = {"body", "query", "path", "header", "cookie"}


def _field_name(loc: tuple) -> str:
    """Turn a pydantic error location into a dotted field name."""
    parts = [str(p) for p in loc]
    if len(parts) > 1 and parts[0] in _LOCATIONS:
        parts = parts[1:]
    return ".".join(parts)


def _field_message(error: Dict[str, Any]) -> str:
    # ValueErrors raised by validators keep their own text
    ctx = error.get("ctx") or {}
    if isinstance(ctx.get("error"), Exception):
        return str(ctx["error"])
    return error.get("msg", "Invalid value")


def format_validation_errors(errors: List[Dict[str, Any]]) -> api.ValidationErrorResponse:
    return api.ValidationErrorResponse(
        errors=[
            api.FieldError(field=_field_name(e.get("loc", ())), message=_field_message(e))
            for e in errors
        ]
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    body = format_validation_errors(exc.errors())
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=jsonable_encoder(body),
    )


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    status_code = STATUS_BY_KIND.get(exc.kind, status.HTTP_500_INTERNAL_SERVER_ERROR)
    if status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        message = UNEXPECTED_ERROR_MESSAGE
    else:
        message = exc.message
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(api.ErrorResponse(message=message)),
    )


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unexpected error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=jsonable_encoder(api.ErrorResponse(message=UNEXPECTED_ERROR_MESSAGE)),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install all handlers on the application."""
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(DomainError, domain_error_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)
