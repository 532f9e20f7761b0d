"""
FastAPI main application for the Book API.
"""

import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import List, Optional

import structlog
from fastapi import APIRouter, Depends, FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.config import APIConfig, config
from api.errors import BookNotFoundError
from api.models import (
    Book, BookCreate, BookPatch,
    DeleteResponse, ErrorResponse, HealthResponse,
    HelloResponse, NotFoundResponse, StatsResponse
)
from api.store import BookStore

# Setup logging
logger = structlog.get_logger(__name__)


def get_store(request: Request) -> BookStore:
    """Dependency returning the store owned by the running application."""
    return request.app.state.store


router = APIRouter(tags=["Books"])

NOT_FOUND = {status.HTTP_404_NOT_FOUND: {"model": NotFoundResponse}}


@router.get("/hello", response_model=HelloResponse)
async def hello():
    """Simple acknowledgment to verify the API is up."""
    return HelloResponse(
        message="Hello from BookAPI!",
        status="API is running",
        timestamp=int(time.time() * 1000)
    )


@router.get("/stats/summary", response_model=StatsResponse)
async def get_statistics(store: BookStore = Depends(get_store)):
    """Counts of total, available and unavailable books."""
    total, available = store.stats()
    return StatsResponse(
        total_books=total,
        available_books=available,
        unavailable_books=total - available
    )


@router.get("", response_model=List[Book])
@router.get("/", response_model=List[Book], include_in_schema=False)
async def get_all_books(store: BookStore = Depends(get_store)):
    """Get all books in insertion order."""
    return store.list()


@router.get("/{book_id}", response_model=Book, responses=NOT_FOUND)
async def get_book(book_id: int, store: BookStore = Depends(get_store)):
    """
    Get a single book by ID.

    - **book_id**: Book identifier
    """
    book = store.get_by_id(book_id)
    if book is None:
        raise BookNotFoundError(book_id)
    return book


@router.post("", response_model=Book, status_code=status.HTTP_201_CREATED)
@router.post("/", response_model=Book, status_code=status.HTTP_201_CREATED, include_in_schema=False)
async def create_book(payload: BookCreate, store: BookStore = Depends(get_store)):
    """
    Create a new book.

    Missing **year** defaults to the current year and missing **available**
    to true. An **id** is generated unless a fresh one is supplied.
    """
    return store.add(payload)


@router.put("/{book_id}", response_model=Book, responses=NOT_FOUND)
async def update_book(book_id: int, patch: BookPatch, store: BookStore = Depends(get_store)):
    """
    Update an existing book.

    Only the fields present in the body are changed; the rest keep their
    current values.
    """
    if store.get_by_id(book_id) is None:
        raise BookNotFoundError(book_id)

    book = store.update(book_id, patch)
    if book is None:
        # Deleted between the existence check and the update
        raise BookNotFoundError(book_id)
    return book


@router.delete("/{book_id}", response_model=DeleteResponse, responses=NOT_FOUND)
async def delete_book(book_id: int, store: BookStore = Depends(get_store)):
    """Delete a book by ID."""
    if not store.delete(book_id):
        raise BookNotFoundError(book_id)
    return DeleteResponse(id=book_id)


async def book_not_found_handler(request: Request, exc: BookNotFoundError):
    """Turn a missing book into a 404 carrying the requested id."""
    logger.warning("Book not found", book_id=exc.book_id, method=request.method, path=request.url.path)
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content=NotFoundResponse(id=exc.book_id).model_dump()
    )


def create_app(store: Optional[BookStore] = None, settings: Optional[APIConfig] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        store: Book store to serve; a new one is created from settings when omitted
        settings: Configuration; the global config when omitted

    Returns:
        Configured FastAPI application
    """
    settings = settings or config
    if store is None:
        store = BookStore.with_sample_data() if settings.seed_sample_data else BookStore()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager."""
        logger.info(
            "Starting Book API",
            books_prefix=settings.books_prefix,
            books_count=app.state.store.count()
        )
        yield
        logger.info("Shutting down Book API", books_count=app.state.store.count())

    app = FastAPI(
        title=settings.api_title,
        description=settings.api_description,
        version=settings.api_version,
        lifespan=lifespan
    )
    app.state.store = store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    app.add_exception_handler(BookNotFoundError, book_not_found_handler)

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle general exceptions."""
        logger.error("Unhandled exception", error=str(exc), path=request.url.path, exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=ErrorResponse(
                error="Internal server error",
                detail=str(exc) if settings.debug else None,
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
            ).model_dump()
        )

    # Health check endpoint
    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health_check(store: BookStore = Depends(get_store)):
        """Health check endpoint."""
        return HealthResponse(
            status="healthy",
            timestamp=datetime.now(timezone.utc),
            version=settings.api_version,
            books_count=store.count()
        )

    app.include_router(router, prefix=settings.books_prefix)

    return app


# Create FastAPI application
app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "api.main:app",
        host=config.host,
        port=config.port,
        reload=config.debug,
        log_level=config.log_level.lower()
    )
