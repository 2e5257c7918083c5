"""Filter-then-sort pipeline that produces the displayed book list."""

from collections.abc import Iterable
from typing import Any

from bookvault.library.search import matches
from bookvault.models.book import Book
from bookvault.models.settings import SearchState, Settings, SortDirection, SortField


def sort_key(book: Book, field: SortField | str) -> Any:
    """Return the comparison key of ``book`` for ``field``.

    Text is case-folded; page counts compare as numbers and ISO dates
    compare correctly as strings.
    """
    value = getattr(book, SortField(field).value)
    if isinstance(value, str):
        return value.casefold()
    return value


def run_query(
    books: Iterable[Book],
    search: SearchState,
    settings: Settings,
) -> list[Book]:
    """Filter books by the search state and sort them by the settings.

    The sort is stable in both directions, so books with equal keys keep
    their insertion order.

    Args:
        books: All books, in insertion order.
        search: Current query and case sensitivity.
        settings: Supplies ``sort_field`` and ``sort_direction``.

    Returns:
        A new list of matching books in display order.
    """
    found = [book for book in books if matches(book, search.query, search.case_sensitive)]
    return sorted(
        found,
        key=lambda book: sort_key(book, settings.sort_field),
        reverse=settings.sort_direction == SortDirection.DESC,
    )
