"""Scraped book data model for the HTML import pipeline."""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel

from bookvault.models.book import Book

UNKNOWN_AUTHOR = "Unknown Author"
SCRAPED_TAG = "Scraped"
SCRAPED_PAGES = 100  # Placeholder until the user edits the record


class ScrapedBook(BaseModel):
    """A title/author pair found in a pasted HTML listing.

    Scraped entries carry no page count, tag or date; ``to_book`` fills
    those with placeholders so the entry can be saved straight away.
    """

    title: str
    author: str = UNKNOWN_AUTHOR

    def to_book(self, today: date | None = None) -> Book:
        """Build a savable Book dated ``today`` (defaults to the local date)."""
        day = today or date.today()
        return Book(
            title=self.title,
            author=self.author,
            pages=SCRAPED_PAGES,
            tag=SCRAPED_TAG,
            date_added=day.isoformat(),
        )
