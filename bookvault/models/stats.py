"""Reading statistics models."""

from pydantic import BaseModel, Field

from bookvault.models.settings import ReadingUnit

# Shown as the top tag when there are no books.
NO_DATA = "—"


class ReadingEstimate(BaseModel):
    """Estimated time needed to read every recorded page."""

    value: int
    unit: ReadingUnit
    label: str  # e.g. "14h" or "820 min"


class TrendPoint(BaseModel):
    """Number of books added on one calendar day."""

    date: str
    count: int = 0


class ReadingStats(BaseModel):
    """Dashboard summary computed over the full book list."""

    total_count: int = 0
    total_pages: int = 0
    top_tag: str = NO_DATA
    estimate: ReadingEstimate
    goal_percent: float = 0.0
    trend: list[TrendPoint] = Field(default_factory=list)
