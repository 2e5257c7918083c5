"""Extract book titles and authors from pasted HTML listings."""

import logging

from bs4 import BeautifulSoup, Tag

from bookvault.models.scraped import UNKNOWN_AUTHOR, ScrapedBook

logger = logging.getLogger(__name__)

TITLE_TAG = "h3"
AUTHOR_CLASS = "author"


def _author_after(heading: Tag) -> str:
    """Return the author from the element right after a title heading.

    Only the immediately following sibling element counts, and only if it
    carries the ``author`` class.
    """
    sibling = heading.find_next_sibling()
    if sibling is None or AUTHOR_CLASS not in (sibling.get("class") or []):
        return UNKNOWN_AUTHOR
    return sibling.get_text().strip() or UNKNOWN_AUTHOR


def scrape_books(html: str) -> list[ScrapedBook]:
    """Find books in an HTML fragment.

    Each ``<h3>`` with text is a title; a following ``<p class="author">``
    supplies the author. For example::

        <h3>Dune</h3><p class="author">Frank Herbert</p>

    Args:
        html: Raw HTML text.

    Returns:
        Scraped books in document order; empty if nothing was found.
    """
    if not html or not html.strip():
        return []

    soup = BeautifulSoup(html, "lxml")

    # Script and style text never holds titles
    for tag in soup(["script", "style"]):
        tag.decompose()

    found: list[ScrapedBook] = []
    for heading in soup.find_all(TITLE_TAG):
        title = heading.get_text().strip()
        if not title:
            continue
        found.append(ScrapedBook(title=title, author=_author_after(heading)))

    if not found:
        logger.info("No <%s> titles found in HTML (%d chars)", TITLE_TAG, len(html))
    return found
