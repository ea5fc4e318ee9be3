# services/danger.py
from __future__ import annotations

from typing import Any, Dict, List, Sequence

from pothole_api.models.report import Report

BAND_COLORS = {
    "minor": "#4caf50",     # green
    "moderate": "#ff9800",  # orange
    "severe": "#f44336",    # red
}

BAND_DESCRIPTIONS = {
    "minor": "Minor - Small crack or shallow pothole",
    "moderate": "Moderate - Noticeable pothole that could damage tires",
    "severe": "Severe - Large pothole that could cause accidents",
}


def categorize_level(level: int) -> str:
    """1-3 minor, 4-7 moderate, 8-10 severe."""
    if level <= 3:
        return "minor"
    elif level <= 7:
        return "moderate"
    return "severe"


def level_color(level: int) -> str:
    return BAND_COLORS[categorize_level(level)]


def to_marker(report: Report) -> Dict[str, Any]:
    """Map marker payload; leaves out the photo to keep the response small."""
    band = categorize_level(report.danger_level)
    return {
        "id": report.id,
        "lat": report.location.lat,
        "lng": report.location.lng,
        "district": report.location.district,
        "formatted_address": report.location.formatted_address,
        "danger_level": report.danger_level,
        "band": band,
        "color": BAND_COLORS[band],
        "description": report.description,
        "created_at": report.created_at.isoformat() if report.created_at else None,
    }


def to_markers(reports: Sequence[Report]) -> List[Dict[str, Any]]:
    return [to_marker(r) for r in reports]
