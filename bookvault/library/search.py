"""Regex search over books, with a plain-text fallback, and highlighting."""

import logging
import re

from bookvault.models.book import Book

logger = logging.getLogger(__name__)

# Fields a search query is tested against
SEARCH_FIELDS: tuple[str, ...] = ("title", "author", "tag")

DEFAULT_OPEN_TAG = "<mark>"
DEFAULT_CLOSE_TAG = "</mark>"


def compile_query(query: str, case_sensitive: bool = False) -> re.Pattern[str] | None:
    """Compile a search query as a regular expression.

    Args:
        query: User-entered query text.
        case_sensitive: If False, the pattern ignores case.

    Returns:
        The compiled pattern, or None if the query is not a valid regex
        (including patterns that exceed the engine's limits).
    """
    flags = 0 if case_sensitive else re.IGNORECASE
    try:
        return re.compile(query, flags)
    except (re.error, OverflowError, RecursionError) as exc:
        logger.debug("Query %r is not a valid pattern (%s); using substring match", query, exc)
        return None


def matches(book: Book, query: str | None, case_sensitive: bool = False) -> bool:
    """Check whether a book matches a search query.

    An empty query matches every book. Otherwise the query is used as a
    regular expression against title, author and tag. Queries that do not
    compile fall back to substring containment over the same fields.

    Args:
        book: The book to test.
        query: Search text, possibly a regular expression.
        case_sensitive: Whether letter case must match.

    Returns:
        True if any searched field matches.
    """
    if not query:
        return True

    values = [getattr(book, field) for field in SEARCH_FIELDS]

    pattern = compile_query(query, case_sensitive)
    if pattern is not None:
        return any(pattern.search(value) for value in values)

    if case_sensitive:
        return any(query in value for value in values)
    needle = query.casefold()
    return any(needle in value.casefold() for value in values)


def highlight(
    text: str,
    query: str | None,
    case_sensitive: bool = False,
    open_tag: str = DEFAULT_OPEN_TAG,
    close_tag: str = DEFAULT_CLOSE_TAG,
) -> str:
    """Wrap every match of ``query`` in ``text`` with highlight markers.

    Zero-width matches are left alone. An empty or invalid query returns
    the text unchanged.

    Args:
        text: Display text to mark up.
        query: Search text, interpreted as a regular expression.
        case_sensitive: Whether letter case must match.
        open_tag: Marker inserted before each match.
        close_tag: Marker inserted after each match.

    Returns:
        The marked-up text.
    """
    if not query:
        return text

    pattern = compile_query(query, case_sensitive)
    if pattern is None:
        return text

    def _wrap(match: re.Match[str]) -> str:
        found = match.group(0)
        return f"{open_tag}{found}{close_tag}" if found else found

    return pattern.sub(_wrap, text)
