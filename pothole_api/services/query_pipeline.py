# services/query_pipeline.py
from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import List, Optional, Sequence, Tuple

from pothole_api.models.report import QueryCriteria, QueryResult, Report

# Reports without a server timestamp sort as the oldest possible instant
_EPOCH_FLOOR = datetime.min.replace(tzinfo=timezone.utc)

# Bands offered by the list view's danger filter
DANGER_BANDS = {
    "minor": (1, 3),
    "moderate": (4, 7),
    "severe": (8, 10),
}


def _created(report: Report) -> datetime:
    return report.created_at or _EPOCH_FLOOR


def order_reports(reports: Sequence[Report], sort_by: str = "newest") -> List[Report]:
    """
    Same ordering the list view asked the document store for:
      newest        -> created_at desc
      oldest        -> created_at asc
      mostDangerous -> danger_level desc, then created_at desc
    Sorting is stable, so full ties keep their input order.
    """
    if sort_by == "newest":
        return sorted(reports, key=_created, reverse=True)
    if sort_by == "oldest":
        return sorted(reports, key=_created)
    if sort_by == "mostDangerous":
        return sorted(reports, key=lambda r: (r.danger_level, _created(r)), reverse=True)
    raise ValueError(f"Unknown sort order: {sort_by!r}")


def matches_search(report: Report, term: str) -> bool:
    """Case-insensitive substring match on description, district or address."""
    if not term:
        return True
    needle = term.lower()
    haystacks = (report.description, report.location.district, report.location.formatted_address)
    return any(needle in (h or "").lower() for h in haystacks)


def in_danger_range(report: Report, danger_range: Optional[Tuple[int, int]]) -> bool:
    if danger_range is None:
        return True
    lo, hi = danger_range
    return lo <= report.danger_level <= hi


def filter_reports(
    reports: Sequence[Report],
    search: str = "",
    danger_range: Optional[Tuple[int, int]] = None,
) -> List[Report]:
    return [r for r in reports if matches_search(r, search) and in_danger_range(r, danger_range)]


def parse_danger_band(value: Optional[str]) -> Optional[Tuple[int, int]]:
    """
    "8-10" -> (8, 10); "severe" -> (8, 10); "all" / "" / None -> None.
    Raises ValueError for anything else.
    """
    if value is None:
        return None
    v = value.strip().lower()
    if v in ("", "all"):
        return None
    if v in DANGER_BANDS:
        return DANGER_BANDS[v]

    lo_s, sep, hi_s = v.partition("-")
    if not sep:
        raise ValueError(f"Invalid danger band: {value!r}")
    try:
        lo, hi = int(lo_s), int(hi_s)
    except ValueError:
        raise ValueError(f"Invalid danger band: {value!r}") from None
    if lo > hi:
        raise ValueError(f"Invalid danger band: {value!r} (min > max)")
    return lo, hi


def total_pages(count: int, page_size: int) -> int:
    """ceil(count / page_size); 0 when there is nothing to show."""
    if page_size <= 0:
        raise ValueError("page_size must be > 0")
    return math.ceil(count / page_size)


def paginate(items: Sequence[Report], page: int, page_size: int) -> List[Report]:
    """Slice for a 1-based page. Pages past the end come back empty."""
    if page_size <= 0:
        raise ValueError("page_size must be > 0")
    if page < 1:
        raise ValueError("page must be >= 1")
    start = (page - 1) * page_size
    return list(items[start:start + page_size])


def query(reports: Sequence[Report], criteria: QueryCriteria) -> QueryResult:
    """Order, filter, then cut out the requested page."""
    ordered = order_reports(reports, criteria.sort_by)
    filtered = filter_reports(ordered, criteria.search, criteria.danger_range)
    return QueryResult(
        items=paginate(filtered, criteria.page, criteria.page_size),
        total_pages=total_pages(len(filtered), criteria.page_size),
        total_items=len(filtered),
        page=criteria.page,
    )
