"""
JSON-file-backed repository for the book catalogue.

The whole collection is loaded once from the backing file and kept in
memory. Every mutation rewrites the complete file before returning; if
that write fails the in-memory change is undone so memory and disk never
disagree about a record the caller was told about.
"""

from __future__ import annotations

import json
import logging
import os
import threading
import uuid
from pathlib import Path
from typing import Any, List, Optional

from pydantic import ValidationError

from .errors import Conflict, NotFound, PersistenceFailure, StorageUnavailable
from .models import Book
from .validation import parse_new_book, require_uuid


logger = logging.getLogger(__name__)


class BookRepository:
    """Owns the in-memory book list and its backing file.

    ``books`` is ``None`` while the repository is in the load-failed
    state; every operation then raises ``StorageUnavailable``.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self.books: Optional[List[Book]] = None
        # One writer at a time: FastAPI runs sync handlers in a threadpool
        self._lock = threading.Lock()

    @property
    def loaded(self) -> bool:
        return self.books is not None

    def load(self) -> bool:
        """Read the backing file into memory.

        Returns ``True`` on success. Errors are logged, never raised: a
        missing or malformed file leaves the repository unavailable.
        """
        try:
            with self.path.open("r", encoding="utf-8") as f:
                raw = json.load(f)
            if not isinstance(raw, list):
                raise ValueError("JSON root is not an array")
            books = [Book.model_validate(entry) for entry in raw]
        except (OSError, ValueError, ValidationError) as exc:
            logger.error("Failed to load %s: %s", self.path, exc)
            self.books = None
            return False
        self.books = books
        logger.info("Loaded %d books from %s", len(books), self.path)
        return True

    def persist(self) -> None:
        """Overwrite the backing file with the full collection.

        The JSON is written to a sibling temporary file which then
        replaces the backing file, so a failed write leaves the previous
        contents intact.
        """
        data = [book.model_dump() for book in self._require_books()]
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            text = json.dumps(data, ensure_ascii=False, indent=2)
            with tmp_path.open("w", encoding="utf-8") as f:
                f.write(text)
            os.replace(tmp_path, self.path)
        except (OSError, TypeError, ValueError) as exc:
            tmp_path.unlink(missing_ok=True)
            raise PersistenceFailure(f"Could not write {self.path}: {exc}") from exc

    def _require_books(self) -> List[Book]:
        if self.books is None:
            raise StorageUnavailable()
        return self.books

    def list_books(self) -> List[Book]:
        return list(self._require_books())

    def get_book(self, book_id: Any) -> Book:
        require_uuid(book_id)
        books = self._require_books()
        book = next((b for b in books if b.id == book_id), None)
        if book is None:
            raise NotFound()
        return book

    def create_book(self, payload: Any) -> Book:
        """Validate ``payload``, append the new book and persist.

        Raises ``StorageUnavailable``, ``InvalidArgument`` or ``Conflict``
        (in that order of checking) and ``PersistenceFailure`` when the
        write fails, after removing the appended book again.
        """
        with self._lock:
            books = self._require_books()
            new = parse_new_book(payload)

            title = new.title.lower()
            if any(b.title.lower() == title and b.year == new.year for b in books):
                raise Conflict()

            book = Book(id=str(uuid.uuid4()), **new.model_dump())
            books.append(book)
            try:
                self.persist()
            except PersistenceFailure:
                books.pop()
                logger.exception("Rolled back creation of %s", book.id)
                raise

        logger.info("Created book %s (%r)", book.id, book.title)
        return book

    def delete_book(self, book_id: Any) -> Book:
        require_uuid(book_id)
        with self._lock:
            books = self._require_books()
            idx = next((i for i, b in enumerate(books) if b.id == book_id), None)
            if idx is None:
                raise NotFound()

            removed = books.pop(idx)
            try:
                self.persist()
            except PersistenceFailure:
                books.insert(idx, removed)
                logger.exception("Rolled back deletion of %s", removed.id)
                raise

        logger.info("Deleted book %s", removed.id)
        return removed
