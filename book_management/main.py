"""
Main application entry point.
"""

import logging
import os

from fastapi import Depends, FastAPI

from book_management.api.v1.author_endpoints import router as authors_router
from book_management.api.v1.book_endpoints import router as books_router
from book_management.api.v1.dependencies import get_database
from book_management.api.v1.error_handlers import register_exception_handlers
from book_management.infrastructure.db import SqliteDatabase

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

app = FastAPI(
    title="Book Management API",
    description="Manage authors, books and the authors of each book.",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

register_exception_handlers(app)

# Include API routers
app.include_router(authors_router)
app.include_router(books_router)


@app.get("/")
def read_root():
    """Root endpoint."""
    return {
        "message": "Welcome to the Book Management API",
        "docs": "/docs",
        "health": "/health",
    }


@app.get("/health", tags=["health"])
def health_check(database: SqliteDatabase = Depends(get_database)) -> dict:
    """
    Check that the database can be queried.

    Always answers 200; `status` is "degraded" when the database is not usable.
    """
    ready = database.is_ready()
    return {
        "status": "ok" if ready else "degraded",
        "database": ready,
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("book_management.main:app", host="0.0.0.0", port=8000, reload=True)
