"""
Route definitions for the catalogue API.

Endpoints under /api/libros:
- GET    /              : every book in insertion order
- GET    /{book_id}     : one book
- POST   /              : add a book (title and author required, year optional)
- DELETE /{book_id}     : remove a book

Handlers only translate HTTP to repository calls. Errors raised by the
repository are turned into ``{"error": ...}`` responses by the handlers
registered in ``main``.
"""

from __future__ import annotations

from typing import Any, List

from fastapi import APIRouter, Body, Depends, Request

from .models import Book, DeletedBook, ErrorResponse
from .storage import BookRepository


DELETED_MESSAGE = "Libro eliminado correctamente"

router = APIRouter(
    prefix="/api/libros",
    tags=["libros"],
    responses={500: {"model": ErrorResponse}},
)


def get_repository(request: Request) -> BookRepository:
    return request.app.state.repository


@router.get("", response_model=List[Book])
def list_books(repo: BookRepository = Depends(get_repository)) -> List[Book]:
    return repo.list_books()


@router.get(
    "/{book_id}",
    response_model=Book,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
def get_book(book_id: str, repo: BookRepository = Depends(get_repository)) -> Book:
    return repo.get_book(book_id)


@router.post(
    "",
    response_model=Book,
    status_code=201,
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
def create_book(
    payload: Any = Body(default=None),
    repo: BookRepository = Depends(get_repository),
) -> Book:
    """Create a book from ``{title, author, year?}``.

    The body is taken as raw JSON rather than a pydantic model so the
    two 400 messages (missing fields vs. invalid year) can be told
    apart.
    """
    return repo.create_book(payload)


@router.delete(
    "/{book_id}",
    response_model=DeletedBook,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
def delete_book(book_id: str, repo: BookRepository = Depends(get_repository)) -> DeletedBook:
    book = repo.delete_book(book_id)
    return DeletedBook(message=DELETED_MESSAGE, book=book)
