# services/aggregator.py
from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, List, Sequence

from pothole_api import config
from pothole_api.models.report import DistrictSummary, LeaderboardResult, Report


def round_one(value: float) -> float:
    """Round half-up to one decimal (6.25 -> 6.3), as shown on the leaderboard."""
    return float(Decimal(str(value)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def district_of(report: Report) -> str:
    return report.location.district or config.UNKNOWN_DISTRICT


def group_by_district(reports: Sequence[Report]) -> Dict[str, List[Report]]:
    # dict keeps first-appearance order, which the stable sort below relies on
    groups: Dict[str, List[Report]] = {}
    for r in reports:
        groups.setdefault(district_of(r), []).append(r)
    return groups


def summarize(reports: Sequence[Report]) -> LeaderboardResult:
    """
    Build the district leaderboard.

    Districts are ranked by number of reports, then by average danger level
    (both descending). Unrated reports (danger_level 0) still count as a
    report and add 0 to the danger sums.
    """
    if not reports:
        return LeaderboardResult()

    board: List[DistrictSummary] = []
    for district, items in group_by_district(reports).items():
        total = sum(r.danger_level for r in items)
        board.append(DistrictSummary(district=district, count=len(items), avg_danger=total / len(items)))

    board.sort(key=lambda d: (d.count, d.avg_danger), reverse=True)

    total_danger = sum(r.danger_level for r in reports)
    return LeaderboardResult(
        leaderboard=board,
        total_reports=len(reports),
        total_districts=len(board),
        avg_danger_level=round_one(total_danger / len(reports)),
    )
