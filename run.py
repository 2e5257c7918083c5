"""Entry point for the Book Vault application."""

import argparse
import logging
import sys
from pathlib import Path

from bookvault.config import load_config
from bookvault.ingestion import (
    RecordImportError,
    decode_bytes,
    export_records,
    read_import_file,
    scrape_books,
)
from bookvault.library import BookStore, BookVault, highlight
from bookvault.models.settings import SORT_FIELDS
from bookvault.storage.database import (
    initialize_database,
    load_books,
    load_settings,
    save_books,
    save_settings,
)

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Personal book library.")
    parser.add_argument("--config", default="config.yaml", help="YAML config path")
    parser.add_argument("--import", dest="import_file", help="Replace books with a JSON export")
    parser.add_argument("--export", dest="export_file", help="Write books to a JSON file or directory")
    parser.add_argument("--scrape", dest="scrape_file", help="Add books found in an HTML file")
    parser.add_argument("--query", default="", help="Search text or regular expression")
    parser.add_argument("--case-sensitive", action="store_true")
    parser.add_argument(
        "--sort",
        dest="sort_field",
        choices=SORT_FIELDS,
        help="Sort field (repeat to flip direction)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Load the library, apply the requested actions and print the view."""
    args = build_parser().parse_args(argv)
    config = load_config(args.config)
    logging.basicConfig(level=config.logging.level, format=config.logging.format)

    db_path = config.storage.sqlite_path
    initialize_database(db_path)

    settings = load_settings(db_path) or config.defaults
    vault = BookVault(store=BookStore(load_books(db_path)), settings=settings)

    if args.import_file:
        try:
            vault.store.replace_all(read_import_file(args.import_file))
        except (FileNotFoundError, RecordImportError) as exc:
            logger.error("Import failed: %s", exc)
            return 1

    if args.scrape_file:
        scrape_path = Path(args.scrape_file)
        if not scrape_path.exists():
            logger.error("Scrape failed: File not found: %s", scrape_path)
            return 1
        html = decode_bytes(scrape_path.read_bytes(), str(scrape_path))
        for scraped in scrape_books(html):
            vault.store.add(scraped.to_book())

    if args.sort_field:
        vault.toggle_sort(args.sort_field)
        save_settings(db_path, vault.settings)

    save_books(db_path, vault.store.list())

    if args.export_file:
        export_records(vault.store.list(), args.export_file)

    vault.set_search(args.query, args.case_sensitive)
    marks = (config.highlight.open_tag, config.highlight.close_tag)
    for book in vault.view():
        title = highlight(book.title, vault.search.query, vault.search.case_sensitive, *marks)
        author = highlight(book.author, vault.search.query, vault.search.case_sensitive, *marks)
        tag = highlight(book.tag, vault.search.query, vault.search.case_sensitive, *marks)
        print(f"{title} | {author} | {book.pages} | {tag} | {book.date_added}")

    stats = vault.stats()
    print(
        f"Books: {stats.total_count}  Pages: {stats.total_pages} ({stats.estimate.label})  "
        f"Top tag: {stats.top_tag}  Goal: {stats.goal_percent:.0f}%"
    )
    print("Last 7 days: " + " ".join(str(point.count) for point in stats.trend))
    return 0


if __name__ == "__main__":
    sys.exit(main())
