"""Reading statistics for the dashboard."""

import math
from collections import Counter
from collections.abc import Sequence
from datetime import date, timedelta

from bookvault.models.book import Book
from bookvault.models.settings import ReadingUnit, Settings
from bookvault.models.stats import NO_DATA, ReadingEstimate, ReadingStats, TrendPoint

TREND_DAYS = 7


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def top_tag(books: Sequence[Book]) -> str:
    """Return the most common tag, or NO_DATA for an empty list.

    Ties go to the tag seen first.
    """
    if not books:
        return NO_DATA
    # most_common keeps first-encountered order among equal counts
    return Counter(book.tag for book in books).most_common(1)[0][0]


def reading_estimate(total_pages: int, settings: Settings) -> ReadingEstimate:
    """Estimate reading time from the configured reading speed.

    Args:
        total_pages: Pages across all books.
        settings: Supplies ``pages_per_unit`` and ``unit``.

    Returns:
        ReadingEstimate rounded to the nearest whole unit.
    """
    value = _round_half_up(total_pages / settings.pages_per_unit)
    label = f"{value} min" if settings.unit == ReadingUnit.MINUTES else f"{value}h"
    return ReadingEstimate(value=value, unit=settings.unit, label=label)


def goal_percent(count: int, target: int) -> float:
    """Progress towards the book target as a percentage capped at 100."""
    if target <= 0:
        return 0.0
    return min(count / target * 100, 100.0)


def daily_trend(books: Sequence[Book], today: date, days: int = TREND_DAYS) -> list[TrendPoint]:
    """Count books added on each of the last ``days`` days, oldest first.

    A book counts for a day only when its ``date_added`` is exactly that
    day's ISO date.
    """
    per_day = Counter(book.date_added for book in books)
    points = []
    for offset in range(days - 1, -1, -1):
        day = (today - timedelta(days=offset)).isoformat()
        points.append(TrendPoint(date=day, count=per_day[day]))
    return points


def compute_stats(
    books: Sequence[Book],
    settings: Settings,
    today: date | None = None,
) -> ReadingStats:
    """Compute dashboard statistics over a set of books.

    Args:
        books: The books to summarize.
        settings: Reading speed, unit and target.
        today: Last day of the trend window; defaults to the local date.

    Returns:
        A populated ReadingStats.
    """
    total_pages = sum(book.pages for book in books)
    return ReadingStats(
        total_count=len(books),
        total_pages=total_pages,
        top_tag=top_tag(books),
        estimate=reading_estimate(total_pages, settings),
        goal_percent=goal_percent(len(books), settings.target),
        trend=daily_trend(books, today or date.today()),
    )
