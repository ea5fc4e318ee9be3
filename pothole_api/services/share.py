# services/share.py
from __future__ import annotations

import random
from typing import Dict, List, Optional

from pothole_api import config
from pothole_api.models.report import Report

CAPTIONS: Dict[str, List[str]] = {
    "low": [
        "Baby pothole spotted",
        "Tar dimple... still cute",
        "Bicycle-friendly road art",
    ],
    "medium": [
        "Half chai spilled... tragedy!",
        "The newest speed breaker in town",
        "Suspension's first heartbreak",
    ],
    "high": [
        "Suspension killer - 100% organic",
        "Mini swimming pool, bring your own boat",
        "If you drop your phone here... it's gone",
        "Your spine just applied for leave",
    ],
}


def caption_category(level: int) -> str:
    # Captions use their own thresholds (1-3 / 4-6 / 7-10)
    if level <= 3:
        return "low"
    elif level <= 6:
        return "medium"
    return "high"


def random_caption(level: int, rng: Optional[random.Random] = None) -> str:
    choices = CAPTIONS[caption_category(level)]
    return (rng or random).choice(choices)


def share_payload(report: Report, rng: Optional[random.Random] = None) -> Dict[str, str]:
    """Title/text/url for the Web Share API; the url opens the report on the map."""
    district = report.location.district or "this area"
    caption = random_caption(report.danger_level, rng)
    return {
        "title": "Pothole Report",
        "text": f"Check out this pothole in {district}! Danger level: {report.danger_level}/10",
        "url": f"{config.PUBLIC_APP_URL}/map?report={report.id}",
        "caption": caption,
    }
