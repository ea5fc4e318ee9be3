# services/report_service.py
from __future__ import annotations

import logging
from typing import Any, Callable, Dict

from pothole_api import config
from pothole_api.db.dynamo import ReportStore
from pothole_api.models.report import ReportIn
from pothole_api.services.geocoder import GeocodingError, reverse_geocode

log = logging.getLogger(__name__)

Geocoder = Callable[[float, float], Dict[str, str]]


def resolve_location(data: ReportIn, geocode: Geocoder = reverse_geocode) -> Dict[str, Any]:
    """
    Build the stored location map. A district typed in by the user wins;
    otherwise ask the geocoder, falling back to "Unknown Location".
    """
    district = (data.district or "").strip()
    address = (data.formatted_address or "").strip()

    if not district:
        try:
            found = geocode(data.lat, data.lng)
            district = found.get("district") or config.UNKNOWN_LOCATION
            address = address or found.get("formatted_address", "")
        except GeocodingError as e:
            log.warning("Geocoding (%s, %s) failed, storing %r: %s",
                        data.lat, data.lng, config.UNKNOWN_LOCATION, e)
            district = config.UNKNOWN_LOCATION

    return {
        "lat": data.lat,
        "lng": data.lng,
        "district": district,
        "formatted_address": address,
    }


def submit_report(data: ReportIn, store: ReportStore, geocode: Geocoder = reverse_geocode) -> Dict[str, Any]:
    """
    The only write in the system. Returns the new id and resolved location.
    StoreError propagates to the caller.
    """
    location = resolve_location(data, geocode)
    report_id = store.create_report({
        "danger_level": data.danger_level,
        "description": data.description.strip(),
        "image_data": data.image_data,
        "location": location,
    })
    log.info("Report %s stored (district=%s, danger=%d)", report_id, location["district"], data.danger_level)
    return {"id": report_id, "location": location}
