"""
Param finder models.
"""

from pydantic import BaseModel, Field


class FetchTask(BaseModel):
    """One unit of concurrent work: a domain paired with an archive source."""

    domain: str
    source: str


class FetchStats(BaseModel):
    """Statistics from a fetch run."""

    tasks_dispatched: int = 0
    tasks_succeeded: int = 0
    tasks_failed: int = 0
    tasks_skipped: int = 0  # Unknown source names
    urls_collected: int = 0

    def to_dict(self) -> dict:
        """Convert to dict for reporting."""
        return self.model_dump()


class FindResult(BaseModel):
    """Result of a full fetch, filter and save run."""

    total_urls: int
    param_urls: int
    output_path: str
    stats: FetchStats = Field(default_factory=FetchStats)
