"""Caller-owned session tying the store to the current view state."""

import logging
from collections.abc import Mapping
from datetime import date
from typing import Any

from bookvault.library.query import run_query
from bookvault.library.stats import compute_stats
from bookvault.library.store import BookStore
from bookvault.library.validators import validate_all
from bookvault.models.book import Book
from bookvault.models.fields import canonicalize
from bookvault.models.settings import SORT_FIELDS, SearchState, Settings, SortDirection
from bookvault.models.stats import ReadingStats
from bookvault.models.validation import ValidationReport

logger = logging.getLogger(__name__)


class BookVault:
    """Books plus the settings and search state that shape how they are shown.

    Nothing is cached: ``view()`` and ``stats()`` are recomputed from the
    current state on every call.

    Args:
        store: Book collection; a new empty store if None.
        settings: Initial settings; defaults if None.
        search: Initial search state; empty query if None.
    """

    def __init__(
        self,
        store: BookStore | None = None,
        settings: Settings | None = None,
        search: SearchState | None = None,
    ) -> None:
        self.store = store if store is not None else BookStore()
        self.settings = settings or Settings()
        self.search = search or SearchState()

    def set_search(self, query: str, case_sensitive: bool = False) -> None:
        self.search = SearchState(query=query, case_sensitive=case_sensitive)

    def update_settings(self, **changes: Any) -> Settings:
        """Merge ``changes`` into the current settings and return them."""
        self.settings = self.settings.merge(changes)
        return self.settings

    def toggle_sort(self, field: str) -> Settings:
        """Sort by ``field``, flipping direction if it is already the sort field.

        A newly chosen field always starts ascending.

        Raises:
            ValueError: If ``field`` is not sortable.
        """
        if field not in SORT_FIELDS:
            raise ValueError(f"Cannot sort by '{field}'. Sortable: {', '.join(SORT_FIELDS)}")
        direction = SortDirection.ASC
        if self.settings.sort_field == field and self.settings.sort_direction == SortDirection.ASC:
            direction = SortDirection.DESC
        return self.update_settings(sort_field=field, sort_direction=direction)

    def view(self) -> list[Book]:
        """Books matching the search, in the configured order."""
        return run_query(self.store.list(), self.search, self.settings)

    def stats(self, today: date | None = None) -> ReadingStats:
        """Statistics over every stored book, regardless of the search."""
        return compute_stats(self.store.list(), self.settings, today=today)

    def submit(
        self,
        data: Mapping[str, Any],
        edit_id: str | None = None,
    ) -> tuple[ValidationReport, Book | None]:
        """Validate raw form values and save them as a new or edited book.

        Author, tag and date are stored trimmed; pages are stored as an int.

        Args:
            data: Raw form values keyed by field name or camelCase alias.
            edit_id: Id of the book being edited, or None to add a new one.

        Returns:
            The validation report and the saved book. The book is None if
            validation failed or ``edit_id`` no longer exists.
        """
        report = validate_all(data)
        if not report.valid:
            logger.info("Rejected book form: %s", ", ".join(report.errors))
            return report, None

        values = canonicalize(Book, data)
        fields: dict[str, Any] = {
            "title": str(values["title"]),
            "author": str(values["author"]).strip(),
            "pages": int(str(values["pages"]).strip()),
            "tag": str(values["tag"]).strip(),
            "date_added": str(values["date_added"]).strip(),
        }
        if values.get("cover_image"):
            fields["cover_image"] = values["cover_image"]

        if edit_id is None:
            return report, self.store.add(Book(**fields))

        if not self.store.update(edit_id, fields):
            logger.warning("Book %s disappeared before its edit was saved", edit_id)
            return report, None
        return report, self.store.get(edit_id)
