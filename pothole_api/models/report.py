# pothole_api/models/report.py
from __future__ import annotations

from datetime import datetime, timezone
from typing import List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from pothole_api import config

SortBy = Literal["newest", "oldest", "mostDangerous"]


class Location(BaseModel):
    model_config = ConfigDict(frozen=True)

    lat: float = Field(..., ge=-90, le=90, description="Latitude")
    lng: float = Field(..., ge=-180, le=180, description="Longitude")
    district: str = Field(config.UNKNOWN_LOCATION, description="Reverse-geocoded district")
    formatted_address: str = Field("", description="Full address from the geocoder")


class Report(BaseModel):
    """A stored pothole report. Never updated after creation."""

    model_config = ConfigDict(frozen=True)

    id: str
    # 0 marks a stored record that came back without a rating
    danger_level: int = Field(0, ge=0, le=10)
    description: str = ""
    location: Location
    image_data: str = ""
    created_at: Optional[datetime] = None

    @field_validator("created_at")
    @classmethod
    def _assume_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        # naive timestamps are UTC, same as the store writes them
        if v is not None and v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v


# Payload coming FROM the web app's report form
class ReportIn(BaseModel):
    danger_level: int = Field(5, ge=1, le=10, description="1 = harmless, 10 = very dangerous")
    description: str = Field("", max_length=1000)
    lat: float = Field(..., ge=-90, le=90, description="Latitude")
    lng: float = Field(..., ge=-180, le=180, description="Longitude")
    district: Optional[str] = Field(None, description="Skip reverse geocoding when provided")
    formatted_address: Optional[str] = None
    image_data: str = Field(
        ...,
        min_length=1,
        max_length=config.MAX_IMAGE_CHARS,
        description="Compressed photo as a data URL / base64 text",
    )


class DistrictSummary(BaseModel):
    district: str
    count: int = Field(..., ge=1)
    avg_danger: float


class LeaderboardResult(BaseModel):
    leaderboard: List[DistrictSummary] = Field(default_factory=list)
    total_reports: int = 0
    total_districts: int = 0
    avg_danger_level: float = 0.0


class QueryCriteria(BaseModel):
    """Everything the list view can ask for, as one immutable value."""

    model_config = ConfigDict(frozen=True)

    search: str = ""
    sort_by: SortBy = "newest"
    danger_range: Optional[Tuple[int, int]] = None
    page: int = Field(1, ge=1)
    page_size: int = Field(config.DEFAULT_PAGE_SIZE, gt=0)

    @model_validator(mode="after")
    def _check_range(self) -> "QueryCriteria":
        if self.danger_range is not None:
            lo, hi = self.danger_range
            if lo > hi:
                raise ValueError(f"danger_range min {lo} is greater than max {hi}")
        return self


class QueryResult(BaseModel):
    items: List[Report] = Field(default_factory=list)
    total_pages: int = 0
    total_items: int = 0
    page: int = 1
