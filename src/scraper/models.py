"""Pydantic data models for scraped directory entries.

This module defines the contact record extracted from one list item, the
per-page bundle handed to sinks, and the outcome of a crawl run.
"""

from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

Weekday = Literal["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]

WEEKDAYS: tuple[str, ...] = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


class ContactRecord(BaseModel):
    """One directory entry (agent, broker or assister)."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1, description="Display name of the entry")
    address: Optional[str] = Field(default=None, description="Street line of the address block")
    city: Optional[str] = Field(default=None)
    state: Optional[str] = Field(default=None, description="Two-letter state code")
    zip: Optional[str] = Field(default=None, description="Five-digit ZIP code")
    phone: Optional[str] = Field(default=None)
    website: Optional[str] = Field(default=None)
    email: Optional[str] = Field(default=None)
    years_of_service: Optional[int] = Field(default=None, ge=0, alias="yearsOfService")
    roles: Optional[list[str]] = Field(default=None, description="Badge labels in page order")
    languages: Optional[list[str]] = Field(default=None)
    licensed_in: Optional[list[str]] = Field(default=None, alias="licensedIn")
    hours: Optional[dict[Weekday, str]] = Field(default=None, description="Weekday abbreviation to time range")

    def to_json_dict(self) -> dict:
        """Serialize with camelCase keys, omitting absent fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class PageBundle(BaseModel):
    """Records extracted from one accepted results page."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    page_number: int = Field(..., ge=1, alias="pageNumber")
    records: tuple[ContactRecord, ...] = Field(default_factory=tuple)


class CrawlOutcome(str, Enum):
    """Why a crawl run ended. None of these is an error."""

    RUNNING = "running"
    STOPPED_EXHAUSTED = "stopped_exhausted"
    STOPPED_NOT_FOUND = "stopped_not_found"
    STOPPED_DUPLICATE = "stopped_duplicate"
    STOPPED_BUDGET = "stopped_budget"
    COMPLETED = "completed"


class CrawlResult(BaseModel):
    """Accepted bundles of one run plus the reason it stopped."""

    bundles: list[PageBundle] = Field(default_factory=list)
    outcome: CrawlOutcome = Field(default=CrawlOutcome.COMPLETED)
    pages_fetched: int = Field(default=0, ge=0, description="Number of accepted pages")

    @property
    def total_records(self) -> int:
        return sum(len(bundle.records) for bundle in self.bundles)
