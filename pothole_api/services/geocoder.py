# pothole_api/services/geocoder.py
from __future__ import annotations

from typing import Any, Dict

import requests

from pothole_api import config

# Most specific first; Kerala addresses usually carry suburb or county
_DISTRICT_KEYS = ("suburb", "city_district", "county", "city")


class GeocodingError(RuntimeError):
    pass


def pick_district(address: Dict[str, Any]) -> str:
    for key in _DISTRICT_KEYS:
        if address.get(key):
            return str(address[key])
    return config.UNKNOWN_LOCATION


def reverse_geocode(lat: float, lng: float) -> Dict[str, str]:
    """
    Look up (lat, lng) on Nominatim and return
    {"district": ..., "formatted_address": ...}.
    A response without an address still succeeds with "Unknown Location".
    """
    params = {
        "format": "json",
        "lat": lat,
        "lon": lng,
        "addressdetails": 1,
    }
    headers = {"User-Agent": config.GEOCODER_USER_AGENT}
    try:
        r = requests.get(config.NOMINATIM_URL, params=params, headers=headers, timeout=config.GEOCODER_TIMEOUT)
        r.raise_for_status()
        data = r.json()
    except (requests.RequestException, ValueError) as e:
        raise GeocodingError(f"Reverse geocoding failed: {e}") from e

    if not isinstance(data, dict) or not data.get("address"):
        return {"district": config.UNKNOWN_LOCATION, "formatted_address": ""}

    return {
        "district": pick_district(data["address"]),
        "formatted_address": data.get("display_name") or "",
    }
