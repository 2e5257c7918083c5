"""Data models for the Book Vault application."""

from bookvault.models.book import Book
from bookvault.models.scraped import ScrapedBook
from bookvault.models.settings import SearchState, Settings
from bookvault.models.stats import NO_DATA, ReadingEstimate, ReadingStats, TrendPoint
from bookvault.models.validation import FieldValidation, ValidationReport

__all__ = [
    "Book",
    "FieldValidation",
    "NO_DATA",
    "ReadingEstimate",
    "ReadingStats",
    "ScrapedBook",
    "SearchState",
    "Settings",
    "TrendPoint",
    "ValidationReport",
]
