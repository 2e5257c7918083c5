"""Tests for JSON import and export."""

import json
import logging
from pathlib import Path

import pytest

from bookvault.ingestion.importer import (
    DEFAULT_EXPORT_NAME,
    RecordImportError,
    decode_bytes,
    export_records,
    load_json_records,
    parse_records,
    parse_settings,
    read_import_file,
)
from bookvault.models import Book, Settings

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def _record(book_id: str = "book-1", **overrides: object) -> dict:
    record = {
        "id": book_id,
        "title": "Dune",
        "author": "Herbert",
        "pages": 412,
        "tag": "SciFi",
        "dateAdded": "2024-01-01",
    }
    record.update(overrides)
    return record


class TestParseRecords:
    @pytest.mark.parametrize("data", [{"books": []}, "books", 42, None])
    def test_rejects_non_list(self, data: object) -> None:
        with pytest.raises(RecordImportError, match="must be a list"):
            parse_records(data)

    def test_rejects_empty_list(self) -> None:
        with pytest.raises(RecordImportError, match="no books"):
            parse_records([])

    def test_allow_empty(self) -> None:
        assert parse_records([], allow_empty=True) == []

    def test_drops_malformed_entries(self, caplog: pytest.LogCaptureFixture) -> None:
        data = [
            _record("good-1"),
            "not an object",
            {"title": "No id"},
            _record(123),
            _record("bad-pages", pages=0),
            _record("bad-date", dateAdded="yesterday"),
            _record("good-2", title="Anathem"),
        ]
        with caplog.at_level(logging.WARNING):
            books = parse_records(data)

        assert [b.id for b in books] == ["good-1", "good-2"]
        assert "Imported 2 of 7 entries" in caplog.text

    def test_all_malformed_raises(self) -> None:
        with pytest.raises(RecordImportError, match="no valid books"):
            parse_records([{"id": "x"}, [], _record("y", pages=-1)])

    def test_keeps_timestamps(self) -> None:
        [book] = parse_records([_record(createdAt="2023-05-01T12:00:00Z")])
        assert book.created_at.year == 2023


class TestParseSettings:
    def test_non_object_gives_defaults(self) -> None:
        assert parse_settings(None) == Settings()
        assert parse_settings(["pages"]) == Settings()

    def test_applies_valid_keys(self) -> None:
        settings = parse_settings({"sortField": "title", "sortDirection": "asc", "target": 5})
        assert settings.sort_field == "title"
        assert settings.sort_direction == "asc"
        assert settings.target == 5

    def test_drops_invalid_keys(self) -> None:
        settings = parse_settings({"sortField": "isbn", "target": -3, "pagesPerHour": 12})
        assert settings.sort_field == "date_added"
        assert settings.target == 50
        assert settings.pages_per_unit == 12


class TestDecodeBytes:
    def test_utf8(self) -> None:
        assert decode_bytes("Márquez".encode("utf-8")) == "Márquez"

    def test_utf8_with_bom(self) -> None:
        assert decode_bytes("\ufeff[]".encode("utf-8")) == "[]"

    def test_falls_back_to_detection(self) -> None:
        raw = json.dumps([_record(author="Gabriel García Márquez")], ensure_ascii=False)
        text = decode_bytes(raw.encode("latin-1"))
        assert text.startswith("[")
        assert "Gabriel Garc" in text


class TestReadImportFile:
    def test_reads_fixture(self) -> None:
        books = read_import_file(FIXTURES_DIR / "sample_export.json")
        assert [b.id for b in books] == ["book-dune", "book-hobbit"]
        assert books[1].cover_image == "data:image/png;base64,iVBORw0KGgo="
        assert books[1].updated_at > books[1].created_at

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            read_import_file(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.json"
        path.write_text("[{not json", encoding="utf-8")
        with pytest.raises(RecordImportError, match="not a valid JSON file"):
            read_import_file(path)

    def test_wrong_shape(self, tmp_path: Path) -> None:
        path = tmp_path / "object.json"
        path.write_text(json.dumps({"books": [_record()]}), encoding="utf-8")
        with pytest.raises(RecordImportError, match="must be a list"):
            read_import_file(path)

    def test_latin1_upload(self) -> None:
        raw = json.dumps([_record(title="Cien años de soledad")], ensure_ascii=False)
        books = load_json_records(raw.encode("latin-1"), "upload.json")
        assert len(books) == 1
        assert books[0].id == "book-1"


class TestExportRecords:
    def test_writes_camel_case_json(self, tmp_path: Path) -> None:
        book = Book(id="b1", title="Dune", author="Herbert", pages=412, tag="SciFi", date_added="2024-01-01")
        path = export_records([book], tmp_path / "out.json")

        data = json.loads(path.read_text(encoding="utf-8"))
        assert data[0]["id"] == "b1"
        assert data[0]["dateAdded"] == "2024-01-01"
        assert "createdAt" in data[0]

    def test_directory_uses_default_name(self, tmp_path: Path) -> None:
        path = export_records([], tmp_path)
        assert path == tmp_path / DEFAULT_EXPORT_NAME
        assert json.loads(path.read_text(encoding="utf-8")) == []

    def test_export_can_be_imported(self, tmp_path: Path) -> None:
        books = read_import_file(FIXTURES_DIR / "sample_export.json")
        path = export_records(books, tmp_path / "again.json")
        assert [b.model_dump() for b in read_import_file(path)] == [b.model_dump() for b in books]
