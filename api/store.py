"""
In-memory book store.

The store owns the book collection and the id counter. Every operation runs
under a single lock, and callers only ever receive copies of stored records.
"""

import threading
from datetime import date
from typing import Iterable, List, Optional, Tuple

import structlog

from api.models import Book, BookCreate, BookPatch

logger = structlog.get_logger(__name__)


SAMPLE_BOOKS = (
    Book(id=1, title="Java Programming", author="John Doe", year=2022, available=True),
    Book(id=2, title="Spring Boot Guide", author="Jane Smith", year=2023, available=True),
    Book(id=3, title="Microservices Architecture", author="Mike Johnson", year=2021, available=False),
)


class BookStore:
    """Thread-safe owner of the book collection."""

    def __init__(self, books: Iterable[Book] = ()):
        self._lock = threading.Lock()
        self._books: List[Book] = []
        self._last_id = 0

        for book in books:
            if any(existing.id == book.id for existing in self._books):
                raise ValueError(f"Duplicate book id in initial data: {book.id}")
            self._books.append(book.model_copy())
            self._last_id = max(self._last_id, book.id)

    @classmethod
    def with_sample_data(cls) -> "BookStore":
        """Create a store preloaded with the three sample books."""
        return cls(SAMPLE_BOOKS)

    def _find(self, book_id: int) -> Optional[Book]:
        # Caller must hold the lock
        for book in self._books:
            if book.id == book_id:
                return book
        return None

    def list(self) -> List[Book]:
        """Return a snapshot of all books in insertion order."""
        with self._lock:
            books = [book.model_copy() for book in self._books]
        logger.debug("Listed books", count=len(books))
        return books

    def get_by_id(self, book_id: int) -> Optional[Book]:
        """Return a copy of the book with the given id, or None."""
        with self._lock:
            book = self._find(book_id)
            return book.model_copy() if book else None

    def add(self, data: BookCreate) -> Book:
        """
        Store a new book, filling in defaults.

        A requested id is honoured only if it is above every id issued so
        far; otherwise the next counter value is assigned. This keeps ids
        unique and never reused.

        Args:
            data: Partial book data from the client

        Returns:
            The stored book
        """
        with self._lock:
            if data.id is not None and data.id > self._last_id:
                book_id = data.id
                self._last_id = data.id
            else:
                if data.id is not None:
                    logger.warning("Requested book id unavailable, assigning a new one", requested_id=data.id)
                self._last_id += 1
                book_id = self._last_id

            book = Book(
                id=book_id,
                title=data.title,
                author=data.author,
                year=data.year if data.year is not None else date.today().year,
                available=data.available if data.available is not None else True,
            )
            self._books.append(book)
            created = book.model_copy()

        logger.info("Book added", book_id=created.id, title=created.title)
        return created

    def update(self, book_id: int, patch: BookPatch) -> Optional[Book]:
        """
        Apply a partial update to a stored book.

        Args:
            book_id: Identifier of the book to update
            patch: Fields to overwrite; absent or null fields are left as they are

        Returns:
            The updated book, or None if no book has this id
        """
        changes = patch.changes()
        with self._lock:
            book = self._find(book_id)
            if book is None:
                return None
            for field, value in changes.items():
                setattr(book, field, value)
            updated = book.model_copy()

        logger.info("Book updated", book_id=book_id, fields=sorted(changes))
        return updated

    def delete(self, book_id: int) -> bool:
        """Remove the book with the given id. Returns whether one was removed."""
        with self._lock:
            for index, book in enumerate(self._books):
                if book.id == book_id:
                    del self._books[index]
                    break
            else:
                return False

        logger.info("Book deleted", book_id=book_id)
        return True

    def count(self) -> int:
        with self._lock:
            return len(self._books)

    def count_available(self) -> int:
        with self._lock:
            return sum(1 for book in self._books if book.available)

    def stats(self) -> Tuple[int, int]:
        """Total and available counts taken from the same state."""
        with self._lock:
            total = len(self._books)
            available = sum(1 for book in self._books if book.available)
        return total, available
