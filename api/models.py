"""
API models and schemas for the FastAPI application.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class Book(BaseModel):
    """A stored book record. Every key is always present in responses."""
    id: int = Field(..., description="Unique book identifier, never reused")
    title: Optional[str] = Field(None, description="Book title")
    author: Optional[str] = Field(None, description="Book author")
    year: int = Field(..., description="Publication year")
    available: bool = Field(..., description="Whether the book can be borrowed")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": 1,
                "title": "Java Programming",
                "author": "John Doe",
                "year": 2022,
                "available": True
            }
        }
    )


class BookCreate(BaseModel):
    """Request body for creating a book. Missing fields are defaulted by the store."""
    id: Optional[int] = Field(None, description="Requested identifier; generated when omitted")
    title: Optional[str] = Field(None, description="Book title")
    author: Optional[str] = Field(None, description="Book author")
    year: Optional[int] = Field(None, description="Publication year; defaults to the current year")
    available: Optional[bool] = Field(None, description="Availability; defaults to true")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "Minimal Book",
                "author": "Unknown"
            }
        }
    )


class BookPatch(BaseModel):
    """
    Request body for updating a book.

    Only fields present in the body with a non-null value are applied;
    everything else keeps its stored value. An ``id`` in the body is ignored.
    """
    title: Optional[str] = Field(None, description="New title")
    author: Optional[str] = Field(None, description="New author")
    year: Optional[int] = Field(None, description="New publication year")
    available: Optional[bool] = Field(None, description="New availability")

    def changes(self) -> Dict[str, Any]:
        """Fields explicitly provided with a value."""
        return {
            name: value
            for name, value in self.model_dump(exclude_unset=True).items()
            if value is not None
        }


class HelloResponse(BaseModel):
    """Acknowledgment payload for the hello endpoint."""
    message: str = Field(..., description="Greeting")
    status: str = Field(..., description="API status text")
    timestamp: int = Field(..., description="Server time in epoch milliseconds")


class NotFoundResponse(BaseModel):
    """Body returned when a requested book does not exist."""
    error: str = Field(default="Book not found", description="Error message")
    id: int = Field(..., description="The requested book identifier")


class DeleteResponse(BaseModel):
    """Body returned after a successful delete."""
    message: str = Field(default="Book deleted successfully", description="Result message")
    id: int = Field(..., description="Identifier of the deleted book")


class StatsResponse(BaseModel):
    """Summary statistics over the collection."""
    total_books: int = Field(..., alias="totalBooks", description="Number of books")
    available_books: int = Field(..., alias="availableBooks", description="Books currently available")
    unavailable_books: int = Field(..., alias="unavailableBooks", description="Books currently unavailable")

    model_config = ConfigDict(populate_by_name=True)


class HealthResponse(BaseModel):
    """Health check response model."""
    status: str = Field(..., description="Service status")
    timestamp: datetime = Field(..., description="Health check timestamp")
    version: str = Field(..., description="API version")
    books_count: int = Field(..., description="Number of books in the store")


class ErrorResponse(BaseModel):
    """Error response model for unexpected failures."""
    error: str = Field(..., description="Error message")
    detail: Optional[str] = Field(None, description="Error details")
    status_code: int = Field(..., description="HTTP status code")
