"""Field validation result models."""

from pydantic import BaseModel, Field


class FieldValidation(BaseModel):
    """Outcome of checking one field. ``message`` is empty when valid."""

    valid: bool
    message: str = ""


class ValidationReport(BaseModel):
    """Outcome of checking a whole book form.

    ``errors`` holds one message per failing field, in form order
    (title, author, pages, tag, date_added).
    """

    valid: bool
    errors: dict[str, str] = Field(default_factory=dict)

    @property
    def first_invalid(self) -> str | None:
        """Name of the first failing field, used to move focus to it."""
        return next(iter(self.errors), None)
