"""Tests for SQLite persistence."""

import sqlite3
from pathlib import Path

import pytest

from bookvault.models import Book, Settings
from bookvault.storage.database import (
    get_connection,
    initialize_database,
    load_books,
    load_settings,
    save_books,
    save_settings,
)


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    path = tmp_path / "vault.db"
    initialize_database(path)
    return path


def _book(book_id: str, title: str) -> Book:
    return Book(
        id=book_id,
        title=title,
        author="Herbert",
        pages=412,
        tag="SciFi",
        date_added="2024-01-01",
    )


class TestInitializeDatabase:
    def test_creates_tables(self, db_path: Path) -> None:
        conn = sqlite3.connect(str(db_path))
        cursor = conn.execute(
            "SELECT name FROM sqlite_master WHERE type='table' ORDER BY name"
        )
        tables = [row[0] for row in cursor.fetchall()]
        conn.close()

        assert "books" in tables
        assert "settings" in tables

    def test_idempotent(self, db_path: Path) -> None:
        initialize_database(db_path)  # Should not raise
        assert load_books(db_path) == []

    def test_creates_parent_directories(self, tmp_path: Path) -> None:
        db_path = tmp_path / "nested" / "dir" / "vault.db"
        initialize_database(db_path)
        assert db_path.exists()

    def test_books_table_schema(self, db_path: Path) -> None:
        conn = sqlite3.connect(str(db_path))
        cursor = conn.execute("PRAGMA table_info(books)")
        columns = {row[1]: row[2] for row in cursor.fetchall()}
        conn.close()

        assert columns["id"] == "TEXT"
        assert columns["pages"] == "INTEGER"
        assert "dateAdded" in columns
        assert "coverImage" in columns
        assert "position" in columns


class TestGetConnection:
    def test_returns_connection_with_row_factory(self, db_path: Path) -> None:
        conn = get_connection(db_path)
        assert conn.row_factory == sqlite3.Row
        conn.close()

    def test_wal_mode_enabled(self, db_path: Path) -> None:
        conn = get_connection(db_path)
        mode = conn.execute("PRAGMA journal_mode").fetchone()[0]
        conn.close()
        assert mode == "wal"


class TestBooks:
    def test_save_and_load_keep_order(self, db_path: Path) -> None:
        books = [_book("b", "Dune"), _book("a", "Anathem"), _book("c", "Solaris")]

        assert save_books(db_path, books) == 3

        loaded = load_books(db_path)
        assert [b.id for b in loaded] == ["b", "a", "c"]
        assert loaded[0].created_at == books[0].created_at

    def test_save_replaces_previous_books(self, db_path: Path) -> None:
        save_books(db_path, [_book("a", "Dune"), _book("b", "Anathem")])
        save_books(db_path, [_book("c", "Solaris")])
        assert [b.title for b in load_books(db_path)] == ["Solaris"]

    def test_cover_image_round_trip(self, db_path: Path) -> None:
        book = _book("a", "Dune").model_copy(update={"cover_image": "data:image/png;base64,AA=="})
        save_books(db_path, [book])
        assert load_books(db_path)[0].cover_image == "data:image/png;base64,AA=="

    def test_load_drops_malformed_rows(self, db_path: Path) -> None:
        save_books(db_path, [_book("a", "Dune")])
        conn = sqlite3.connect(str(db_path))
        conn.execute(
            "INSERT INTO books VALUES (1, 'bad', 'Broken', 'X', 0, 'Misc', "
            "'2024-01-01', NULL, '2024-01-01T00:00:00Z', '2024-01-01T00:00:00Z')"
        )
        conn.commit()
        conn.close()

        assert [b.id for b in load_books(db_path)] == ["a"]


class TestSettings:
    def test_load_without_saved_settings(self, db_path: Path) -> None:
        assert load_settings(db_path) is None

    def test_save_and_load(self, db_path: Path) -> None:
        settings = Settings(sort_field="pages", sort_direction="asc", unit="minutes", target=12)
        save_settings(db_path, settings)
        assert load_settings(db_path) == settings

    def test_save_overwrites(self, db_path: Path) -> None:
        save_settings(db_path, Settings(target=1))
        save_settings(db_path, Settings(target=2))
        assert load_settings(db_path).target == 2

    def test_unreadable_value_falls_back_to_default(self, db_path: Path) -> None:
        save_settings(db_path, Settings(target=7))
        conn = sqlite3.connect(str(db_path))
        conn.execute("UPDATE settings SET value = 'not json' WHERE key = 'target'")
        conn.commit()
        conn.close()

        assert load_settings(db_path).target == 50
