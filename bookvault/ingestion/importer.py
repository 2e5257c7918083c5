"""JSON import and export of books and settings."""

import json
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import chardet
from pydantic import ValidationError

from bookvault.models.book import Book
from bookvault.models.settings import Settings

logger = logging.getLogger(__name__)

DEFAULT_EXPORT_NAME = "book-vault-export.json"


class RecordImportError(ValueError):
    """Raised when imported data cannot yield any books."""


def parse_records(data: Any, allow_empty: bool = False) -> list[Book]:
    """Turn decoded JSON into books, dropping malformed entries.

    An entry is kept when it is an object with string ``id`` and ``title``
    that validates as a Book. Anything else is skipped with a warning.

    Args:
        data: Decoded JSON, expected to be a list of book objects.
        allow_empty: Accept an empty list (e.g. a fresh database).

    Returns:
        The valid books, in their original order.

    Raises:
        RecordImportError: If ``data`` is not a list, or no book survives.
    """
    if not isinstance(data, list):
        raise RecordImportError("File must be a list of books.")
    if not data:
        if allow_empty:
            return []
        raise RecordImportError("File contains no books.")

    books: list[Book] = []
    for position, entry in enumerate(data):
        if not isinstance(entry, dict):
            logger.warning("Skipping entry %d: not an object", position)
            continue
        if not isinstance(entry.get("id"), str) or not isinstance(entry.get("title"), str):
            logger.warning("Skipping entry %d: missing id or title", position)
            continue
        try:
            books.append(Book.model_validate(entry))
        except ValidationError as exc:
            logger.warning(
                "Skipping entry %d (%s): %d invalid field(s)",
                position,
                entry["id"],
                exc.error_count(),
            )

    if not books:
        raise RecordImportError("File contains no valid books.")
    if len(books) < len(data):
        logger.warning("Imported %d of %d entries", len(books), len(data))
    return books


def parse_settings(data: Any) -> Settings:
    """Build settings from decoded JSON, keeping only valid keys.

    Args:
        data: Decoded JSON object of saved settings.

    Returns:
        Defaults overridden by every key that validates on its own.
    """
    if not isinstance(data, dict):
        if data is not None:
            logger.warning("Ignoring saved settings: expected an object")
        return Settings()

    accepted: dict[str, Any] = {}
    for key, value in data.items():
        try:
            Settings.model_validate({key: value})
        except ValidationError:
            logger.warning("Ignoring invalid setting %s=%r", key, value)
            continue
        accepted[key] = value
    return Settings().merge(accepted)


def decode_bytes(raw_bytes: bytes, source: str = "<bytes>") -> str:
    """Decode uploaded bytes, trying UTF-8 first and chardet after that.

    Args:
        raw_bytes: File contents.
        source: Name used in log messages.

    Returns:
        The decoded text.
    """
    try:
        return raw_bytes.decode("utf-8-sig")
    except UnicodeDecodeError:
        pass

    detected = chardet.detect(raw_bytes)
    encoding = detected.get("encoding") or "utf-8"
    confidence = detected.get("confidence", 0)

    if confidence < 0.7:
        logger.warning(
            "Low confidence encoding detection for %s: %s (%.0f%%)",
            source,
            encoding,
            confidence * 100,
        )

    try:
        return raw_bytes.decode(encoding)
    except (UnicodeDecodeError, LookupError):
        logger.error("Failed to decode %s as %s", source, encoding)
        return raw_bytes.decode("utf-8", errors="replace")


def load_json_records(raw_bytes: bytes, source: str = "<bytes>") -> list[Book]:
    """Decode and parse an uploaded export file.

    Raises:
        RecordImportError: If the bytes are not JSON or hold no valid books.
    """
    text = decode_bytes(raw_bytes, source)
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        logger.warning("Invalid JSON in %s: %s", source, exc)
        raise RecordImportError("This is not a valid JSON file.") from exc
    return parse_records(data)


def read_import_file(file_path: str | Path) -> list[Book]:
    """Read books from an exported JSON file.

    Args:
        file_path: Path to the file.

    Returns:
        The valid books in the file.

    Raises:
        FileNotFoundError: If file_path does not exist.
        RecordImportError: If the file is not JSON or holds no valid books.
    """
    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")
    return load_json_records(path.read_bytes(), str(path))


def export_records(books: Iterable[Book], file_path: str | Path) -> Path:
    """Write books to an indented JSON file with camelCase keys.

    If ``file_path`` is a directory, the file is named DEFAULT_EXPORT_NAME.

    Returns:
        The path written.
    """
    path = Path(file_path)
    if path.is_dir():
        path = path / DEFAULT_EXPORT_NAME
    path.parent.mkdir(parents=True, exist_ok=True)

    records = [book.to_record() for book in books]
    path.write_text(json.dumps(records, indent=2, ensure_ascii=False), encoding="utf-8")
    logger.info("Exported %d books to %s", len(records), path)
    return path
