"""Book ingestion: JSON import/export and HTML scraping."""

from bookvault.ingestion.importer import (
    RecordImportError,
    decode_bytes,
    export_records,
    parse_records,
    parse_settings,
    read_import_file,
)
from bookvault.ingestion.scraper import scrape_books

__all__ = [
    "RecordImportError",
    "decode_bytes",
    "export_records",
    "parse_records",
    "parse_settings",
    "read_import_file",
    "scrape_books",
]
