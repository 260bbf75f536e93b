"""
Pydantic schema definitions for the book catalogue.

The ``Book`` model is both the persisted record written to the backing
JSON file and the body returned by the API. ``NewBook`` holds the
already validated fields of a creation request before an id is
assigned to it.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict


class NewBook(BaseModel):
    title: str
    author: str
    year: Optional[int] = None


class Book(BaseModel):
    """A single catalogue entry.

    ``id`` is a UUID string generated by the server and never changes.
    ``year`` stays ``None`` when the publication year is unknown so that
    it is serialised as ``null`` in the backing file.
    """

    model_config = ConfigDict(extra="ignore")

    id: str
    title: str
    author: str
    year: Optional[int] = None


class DeletedBook(BaseModel):
    """Body returned by ``DELETE /api/libros/{book_id}``."""

    message: str
    book: Book


class ErrorResponse(BaseModel):
    error: str


class HealthStatus(BaseModel):
    status: str
    # None while the backing file could not be loaded
    books: Optional[int] = None
