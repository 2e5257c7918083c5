"""Book data model."""

import re
from datetime import datetime, timezone
from uuid import uuid4

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

# YYYY-MM-DD with month 01-12 and day 01-31. Month length is not checked.
DATE_PATTERN = r"[0-9]{4}-(0[1-9]|1[0-2])-(0[1-9]|[12][0-9]|3[01])"


def utcnow() -> datetime:
    """Return the current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


class Book(BaseModel):
    """A single book recorded in the vault.

    Serialized with camelCase keys (``dateAdded``, ``createdAt``...) so
    exported files stay compatible with earlier exports; snake_case field
    names are accepted on input as well.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default_factory=lambda: str(uuid4()), min_length=1)
    title: str
    author: str
    pages: int = Field(ge=1)
    tag: str
    date_added: str = Field(alias="dateAdded")
    cover_image: str | None = Field(
        default=None,
        validation_alias=AliasChoices("coverImage", "cover_image"),
        serialization_alias="coverImage",
    )
    created_at: datetime = Field(default_factory=utcnow, alias="createdAt")
    updated_at: datetime = Field(default_factory=utcnow, alias="updatedAt")

    @field_validator("title", "author", "tag")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value

    @field_validator("date_added")
    @classmethod
    def _iso_date(cls, value: str) -> str:
        if not re.fullmatch(DATE_PATTERN, value):
            raise ValueError("must be a YYYY-MM-DD date")
        return value

    @field_validator("created_at", "updated_at")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        # Timestamps without an offset are read as UTC
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    def to_record(self) -> dict:
        """Serialize to the camelCase JSON-compatible shape used on disk."""
        return self.model_dump(mode="json", by_alias=True)
