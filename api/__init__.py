"""
FastAPI RESTful API for the Book collection.

This package provides:
- CRUD endpoints over an in-memory book store
- Summary statistics for the collection
- Structured logging and environment-driven configuration
"""

__version__ = "1.0.0"
