# services/normalize.py
"""
Turn raw document-store items into strict `Report` values.

Runs once, right after a read. Anything that reaches the aggregator or the
query pipeline has already been through here.

Policy:
  * missing / empty danger level  -> 0 (counted, adds nothing to sums)
  * danger level not a whole number in 0..10 -> rejected
  * missing id or coordinates     -> rejected
  * unparseable timestamp         -> created_at = None
Items exported from the old web client use camelCase keys
(dangerLevel, formattedAddress, imageBase64, createdAt); both spellings load.
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional

from pydantic import ValidationError

from pothole_api.models.report import Location, Report

log = logging.getLogger(__name__)


class InvalidReportError(ValueError):
    pass


def _pick(d: Dict[str, Any], *keys: str) -> Any:
    for k in keys:
        if d.get(k) is not None:
            return d[k]
    return None


def parse_timestamp(value: Any) -> Optional[datetime]:
    """
    Accept ISO8601 (with/without 'Z'), UNIX seconds/ms, Firestore-style
    {"seconds": ...} maps, or datetime. Returns aware UTC datetime or None.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)

    if isinstance(value, dict) and "seconds" in value:
        value = value["seconds"]

    if isinstance(value, (int, float, Decimal)) and not isinstance(value, bool):
        # treat large numbers as ms
        ts = float(value) / 1000.0 if value > 1e12 else float(value)
        try:
            return datetime.fromtimestamp(ts, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None

    if isinstance(value, str):
        s = value.strip()
        if s.endswith("Z"):
            s = s[:-1] + "+00:00"
        try:
            dt = datetime.fromisoformat(s)
        except ValueError:
            return None
        return dt if dt.tzinfo else dt.replace(tzinfo=timezone.utc)

    return None


def parse_danger_level(value: Any) -> int:
    if value is None or value == "":
        return 0
    if isinstance(value, bool):
        raise InvalidReportError(f"danger level is not a number: {value!r}")
    try:
        num = Decimal(str(value).strip())
    except ArithmeticError:
        raise InvalidReportError(f"danger level is not a number: {value!r}") from None
    if not num.is_finite() or num != num.to_integral_value():
        raise InvalidReportError(f"danger level is not a whole number: {value!r}")
    level = int(num)
    if not 0 <= level <= 10:
        raise InvalidReportError(f"danger level out of range: {level}")
    return level


def _parse_coord(value: Any, name: str) -> float:
    if value is None or value == "":
        raise InvalidReportError(f"missing {name}")
    try:
        return float(value)
    except (TypeError, ValueError):
        raise InvalidReportError(f"{name} is not a number: {value!r}") from None


def normalize_item(item: Dict[str, Any]) -> Report:
    """Raise InvalidReportError when the item cannot become a Report."""
    if not isinstance(item, dict):
        raise InvalidReportError("item is not a mapping")

    report_id = _pick(item, "id", "report_id")
    if not report_id:
        raise InvalidReportError("missing id")

    loc = item.get("location") or {}
    if not isinstance(loc, dict):
        raise InvalidReportError("location is not a mapping")

    try:
        return Report(
            id=str(report_id),
            danger_level=parse_danger_level(_pick(item, "danger_level", "dangerLevel")),
            description=str(item.get("description") or ""),
            location=Location(
                lat=_parse_coord(loc.get("lat"), "lat"),
                lng=_parse_coord(loc.get("lng"), "lng"),
                district=str(loc.get("district") or ""),
                formatted_address=str(_pick(loc, "formatted_address", "formattedAddress") or ""),
            ),
            image_data=str(_pick(item, "image_data", "imageData", "imageBase64") or ""),
            created_at=parse_timestamp(_pick(item, "created_at", "createdAt")),
        )
    except ValidationError as e:
        raise InvalidReportError(str(e)) from e


def normalize_items(items: Iterable[Dict[str, Any]]) -> List[Report]:
    """Normalize a batch; rejected items are logged and left out."""
    reports: List[Report] = []
    for it in items:
        try:
            reports.append(normalize_item(it))
        except InvalidReportError as e:
            rid = it.get("id") if isinstance(it, dict) else None
            log.warning("Skipping malformed report %s: %s", rid, e)
    return reports
