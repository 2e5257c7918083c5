"""SQLite persistence for books and settings."""

import json
import logging
import sqlite3
from collections.abc import Iterable
from pathlib import Path

from bookvault.ingestion.importer import parse_records, parse_settings
from bookvault.models.book import Book
from bookvault.models.settings import Settings

logger = logging.getLogger(__name__)

BOOK_COLUMNS: tuple[str, ...] = (
    "id",
    "title",
    "author",
    "pages",
    "tag",
    "dateAdded",
    "coverImage",
    "createdAt",
    "updatedAt",
)


def get_connection(db_path: str | Path) -> sqlite3.Connection:
    """Create a connection to the SQLite database.

    Args:
        db_path: Path to the SQLite database file.

    Returns:
        A sqlite3 Connection with row_factory set to Row.
    """
    conn = sqlite3.connect(str(db_path))
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA journal_mode=WAL")
    return conn


def initialize_database(db_path: str | Path) -> None:
    """Create the database schema if it doesn't exist.

    Args:
        db_path: Path to the SQLite database file.
    """
    Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    conn = get_connection(db_path)
    try:
        conn.executescript(
            """
            CREATE TABLE IF NOT EXISTS books (
                position INTEGER NOT NULL,
                id TEXT PRIMARY KEY,
                title TEXT NOT NULL,
                author TEXT NOT NULL,
                pages INTEGER NOT NULL,
                tag TEXT NOT NULL,
                dateAdded TEXT NOT NULL,
                coverImage TEXT,
                createdAt TEXT NOT NULL,
                updatedAt TEXT NOT NULL
            );

            CREATE TABLE IF NOT EXISTS settings (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            );
            """
        )
        conn.commit()
    finally:
        conn.close()


def save_books(db_path: str | Path, books: Iterable[Book]) -> int:
    """Replace the stored books with ``books``, keeping their order.

    Args:
        db_path: Path to an initialized database.
        books: Books in insertion order.

    Returns:
        Number of books written.
    """
    rows = []
    for position, book in enumerate(books):
        record = book.to_record()
        rows.append((position, *(record[column] for column in BOOK_COLUMNS)))

    placeholders = ", ".join("?" for _ in range(len(BOOK_COLUMNS) + 1))
    conn = get_connection(db_path)
    try:
        with conn:
            conn.execute("DELETE FROM books")
            conn.executemany(
                f"INSERT INTO books (position, {', '.join(BOOK_COLUMNS)}) "
                f"VALUES ({placeholders})",
                rows,
            )
    finally:
        conn.close()
    logger.debug("Saved %d books to %s", len(rows), db_path)
    return len(rows)


def load_books(db_path: str | Path) -> list[Book]:
    """Load stored books in their saved order.

    Rows that no longer validate are dropped with a warning.

    Args:
        db_path: Path to an initialized database.

    Returns:
        The stored books; empty for a fresh database.
    """
    conn = get_connection(db_path)
    try:
        cursor = conn.execute(
            f"SELECT {', '.join(BOOK_COLUMNS)} FROM books ORDER BY position"
        )
        records = [dict(row) for row in cursor.fetchall()]
    finally:
        conn.close()
    return parse_records(records, allow_empty=True)


def save_settings(db_path: str | Path, settings: Settings) -> None:
    """Store each setting as a JSON-encoded row."""
    conn = get_connection(db_path)
    try:
        with conn:
            conn.executemany(
                "INSERT INTO settings (key, value) VALUES (?, ?) "
                "ON CONFLICT(key) DO UPDATE SET value = excluded.value, "
                "updated_at = CURRENT_TIMESTAMP",
                [(key, json.dumps(value)) for key, value in settings.to_record().items()],
            )
    finally:
        conn.close()


def load_settings(db_path: str | Path) -> Settings | None:
    """Load saved settings, or None if none were ever saved.

    Unreadable values are skipped with a warning.
    """
    conn = get_connection(db_path)
    try:
        rows = conn.execute("SELECT key, value FROM settings").fetchall()
    finally:
        conn.close()

    if not rows:
        return None

    saved = {}
    for row in rows:
        try:
            saved[row["key"]] = json.loads(row["value"])
        except json.JSONDecodeError:
            logger.warning("Ignoring unreadable setting %s", row["key"])
    return parse_settings(saved)
