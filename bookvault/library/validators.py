"""Regex-based validation of raw book form fields.

Each validator accepts the raw (possibly missing) input and returns a
FieldValidation. Rules are checked in order and the first failure wins.
Validators never raise on bad input; the message explains the problem.
"""

import re
from collections.abc import Callable, Mapping
from typing import Any

from pydantic import BaseModel

from bookvault.models.book import DATE_PATTERN, Book
from bookvault.models.fields import canonicalize
from bookvault.models.validation import FieldValidation, ValidationReport

TITLE_MAX_LENGTH = 200

# Patterns are applied with fullmatch so "$" never accepts a trailing newline.
PATTERNS: dict[str, re.Pattern[str]] = {
    # No leading or trailing whitespace
    "title_trim": re.compile(r"\S(?:.*\S)?"),
    # Same word twice in a row ("The The Hobbit"); searched, not anchored.
    # Words are ASCII, the whitespace between them is any Unicode space.
    "title_dupe": re.compile(r"(?a:\b(\w+))\s+(?a:\1\b)", re.IGNORECASE),
    # Letter runs joined by a single space or hyphen
    "name": re.compile(r"[A-Za-z]+(?:[ -][A-Za-z]+)*"),
    # Positive integer without leading zeros
    "pages": re.compile(r"[1-9][0-9]*"),
    "date": re.compile(DATE_PATTERN),
}

# Form order; decides which field receives focus after a failed submit.
FIELD_ORDER: tuple[str, ...] = ("title", "author", "pages", "tag", "date_added")

_OK = FieldValidation(valid=True)


def _fail(message: str) -> FieldValidation:
    return FieldValidation(valid=False, message=message)


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def validate_title(value: Any) -> FieldValidation:
    """Validate a book title.

    The title is not trimmed: surrounding whitespace is itself an error.

    Args:
        value: Raw title input.

    Returns:
        FieldValidation for the title.
    """
    text = _text(value)
    if not text:
        return _fail("Title is required.")
    if len(text) > TITLE_MAX_LENGTH:
        return _fail(f"Title must be {TITLE_MAX_LENGTH} characters or fewer.")
    if not PATTERNS["title_trim"].fullmatch(text):
        return _fail("Title must not start or end with spaces.")
    if PATTERNS["title_dupe"].search(text):
        return _fail("Title contains duplicate consecutive words.")
    return _OK


def _validate_name(value: Any, label: str) -> FieldValidation:
    text = _text(value).strip()
    if not text:
        return _fail(f"{label} is required.")
    if not PATTERNS["name"].fullmatch(text):
        return _fail(f"{label} must contain only letters, spaces, and hyphens.")
    return _OK


def validate_author(value: Any) -> FieldValidation:
    """Validate an author name (letters, single spaces or hyphens)."""
    return _validate_name(value, "Author")


def validate_tag(value: Any) -> FieldValidation:
    """Validate a tag (same rule as author names)."""
    return _validate_name(value, "Tag")


def validate_pages(value: Any) -> FieldValidation:
    """Validate a page count given as text or as an int.

    "7" and "700" pass; "007", "0", "-3" and "abc" do not.
    """
    text = _text(value).strip()
    if not text:
        return _fail("Pages is required.")
    if not PATTERNS["pages"].fullmatch(text):
        return _fail("Pages must be a positive whole number.")
    return _OK


def validate_date(value: Any) -> FieldValidation:
    """Validate a YYYY-MM-DD date.

    Only the shape and the month/day ranges are checked, so "2023-02-31"
    is accepted.
    """
    text = _text(value).strip()
    if not text:
        return _fail("Date is required.")
    if not PATTERNS["date"].fullmatch(text):
        return _fail("Date must be in YYYY-MM-DD format.")
    return _OK


VALIDATORS: dict[str, Callable[[Any], FieldValidation]] = {
    "title": validate_title,
    "author": validate_author,
    "pages": validate_pages,
    "tag": validate_tag,
    "date_added": validate_date,
}


def validate_field(name: str, value: Any) -> FieldValidation:
    """Validate a single field by name.

    Args:
        name: Field name; the persisted alias ``dateAdded`` is accepted.
        value: Raw input value.

    Returns:
        FieldValidation for that field.

    Raises:
        ValueError: If ``name`` is not a validated book field.
    """
    field = "date_added" if name == "dateAdded" else name
    if field not in VALIDATORS:
        raise ValueError(
            f"Unknown book field: '{name}'. "
            f"Validated fields: {', '.join(FIELD_ORDER)}"
        )
    return VALIDATORS[field](value)


def validate_all(data: Mapping[str, Any] | BaseModel) -> ValidationReport:
    """Validate every form field and collect all failures.

    Args:
        data: Raw form values keyed by field name (or camelCase alias), or
            an existing Book.

    Returns:
        ValidationReport whose ``errors`` follow FIELD_ORDER.
    """
    if isinstance(data, BaseModel):
        data = data.model_dump()
    values = canonicalize(Book, data)

    errors: dict[str, str] = {}
    for field in FIELD_ORDER:
        result = VALIDATORS[field](values.get(field))
        if not result.valid:
            errors[field] = result.message

    return ValidationReport(valid=not errors, errors=errors)
