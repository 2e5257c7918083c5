"""In-memory, insertion-ordered book collection."""

import logging
from collections.abc import Iterable, Iterator, Mapping
from datetime import datetime, timedelta
from typing import Any

from bookvault.models.book import Book, utcnow
from bookvault.models.fields import canonicalize

logger = logging.getLogger(__name__)

# Set by the store only; ignored in update() changes
PROTECTED_FIELDS: frozenset[str] = frozenset({"id", "created_at", "updated_at"})


def _later_than(previous: datetime) -> datetime:
    """Return the current time, nudged forward so it is after ``previous``."""
    now = utcnow()
    if now <= previous:
        now = previous + timedelta(microseconds=1)
    return now


class BookStore:
    """Ordered collection of books keyed by id.

    The store keeps books in the order they were added and does no sorting
    or filtering of its own; see ``run_query`` for that.

    Args:
        books: Optional initial books, loaded as-is (timestamps kept).
    """

    def __init__(self, books: Iterable[Book] = ()) -> None:
        self._books: list[Book] = []
        self.replace_all(books)

    def __len__(self) -> int:
        return len(self._books)

    def __iter__(self) -> Iterator[Book]:
        return iter(list(self._books))

    def _index(self, book_id: str) -> int | None:
        for index, book in enumerate(self._books):
            if book.id == book_id:
                return index
        return None

    def add(self, book: Book) -> Book:
        """Append a book and stamp its creation and update times.

        Args:
            book: The book to store.

        Returns:
            The stored copy, with ``created_at`` and ``updated_at`` set.

        Raises:
            ValueError: If a book with the same id is already stored.
        """
        if self._index(book.id) is not None:
            raise ValueError(f"Duplicate book id: {book.id}")

        now = utcnow()
        stored = book.model_copy(update={"created_at": now, "updated_at": now})
        self._books.append(stored)
        logger.debug("Added book %s (%s)", stored.id, stored.title)
        return stored

    def update(self, book_id: str, changes: Mapping[str, Any]) -> bool:
        """Merge partial fields onto the book with the given id.

        ``id``, ``created_at`` and ``updated_at`` in ``changes`` are ignored;
        ``updated_at`` is refreshed to a time strictly after its old value.

        Args:
            book_id: Id of the book to change.
            changes: Field values keyed by field name or camelCase alias.

        Returns:
            True if the book was found and updated, False otherwise.

        Raises:
            pydantic.ValidationError: If the merged book is invalid.
        """
        index = self._index(book_id)
        if index is None:
            return False

        current = self._books[index]
        fields = {
            key: value
            for key, value in canonicalize(Book, changes).items()
            if key not in PROTECTED_FIELDS
        }
        merged = {
            **current.model_dump(),
            **fields,
            "updated_at": _later_than(current.updated_at),
        }
        self._books[index] = Book.model_validate(merged)
        logger.debug("Updated book %s: %s", book_id, ", ".join(sorted(fields)))
        return True

    def remove(self, book_id: str) -> None:
        """Delete the book with the given id; unknown ids are ignored."""
        self._books = [book for book in self._books if book.id != book_id]

    def get(self, book_id: str) -> Book | None:
        index = self._index(book_id)
        return None if index is None else self._books[index]

    def list(self) -> list[Book]:
        """Return all books in insertion order."""
        return list(self._books)

    def replace_all(self, books: Iterable[Book]) -> None:
        """Replace the whole collection, e.g. after an import.

        Later duplicates of an id are dropped with a warning.
        """
        loaded: list[Book] = []
        seen: set[str] = set()
        for book in books:
            if book.id in seen:
                logger.warning("Skipping duplicate book id: %s", book.id)
                continue
            seen.add(book.id)
            loaded.append(book)
        self._books = loaded
