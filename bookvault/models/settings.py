"""Display and reading-goal settings, plus transient search state."""

from collections.abc import Mapping
from enum import Enum
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from bookvault.models.fields import canonicalize


class SortField(str, Enum):
    """Book fields the list can be sorted by."""

    TITLE = "title"
    AUTHOR = "author"
    PAGES = "pages"
    TAG = "tag"
    DATE_ADDED = "date_added"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class ReadingUnit(str, Enum):
    """Unit that ``pages_per_unit`` is measured against."""

    HOURS = "hours"
    MINUTES = "minutes"


SORT_FIELDS: tuple[str, ...] = tuple(field.value for field in SortField)


class Settings(BaseModel):
    """User settings that drive sorting and the statistics panel."""

    model_config = ConfigDict(populate_by_name=True)

    sort_field: SortField = Field(default=SortField.DATE_ADDED, alias="sortField")
    sort_direction: SortDirection = Field(default=SortDirection.DESC, alias="sortDirection")
    pages_per_unit: float = Field(
        default=30.0,
        gt=0,
        validation_alias=AliasChoices("pagesPerUnit", "pagesPerHour"),
        serialization_alias="pagesPerUnit",
    )
    unit: ReadingUnit = Field(
        default=ReadingUnit.HOURS,
        validation_alias=AliasChoices("unit", "baseUnit"),
    )
    target: int = Field(default=50, ge=0)

    @field_validator("sort_field", mode="before")
    @classmethod
    def _legacy_sort_field(cls, value: Any) -> Any:
        # Older exports stored the camelCase record key.
        if value == "dateAdded":
            return "date_added"
        return value

    def merge(self, changes: Mapping[str, Any]) -> "Settings":
        """Return a copy with ``changes`` applied on top of these settings.

        Args:
            changes: Partial settings keyed by field name or persisted alias.

        Returns:
            A new, fully validated Settings instance.

        Raises:
            pydantic.ValidationError: If a merged value is invalid.
        """
        merged = {**self.model_dump(), **canonicalize(Settings, changes)}
        return Settings.model_validate(merged)

    def to_record(self) -> dict:
        """Serialize with the camelCase keys used for persistence."""
        return self.model_dump(mode="json", by_alias=True)


class SearchState(BaseModel):
    """The current search box contents."""

    query: str = ""
    case_sensitive: bool = False
