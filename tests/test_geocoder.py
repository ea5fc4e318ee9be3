import pytest
import requests

from pothole_api.services import geocoder
from pothole_api.services.geocoder import GeocodingError, pick_district, reverse_geocode


class FakeResponse:
    def __init__(self, payload, status=200):
        self.payload = payload
        self.status_code = status

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        return self.payload


def test_reverse_geocode_picks_suburb(monkeypatch):
    calls = {}

    def fake_get(url, params=None, headers=None, timeout=None):
        calls.update(url=url, params=params, headers=headers, timeout=timeout)
        return FakeResponse({
            "display_name": "Vyttila, Kochi, Ernakulam, Kerala, India",
            "address": {"suburb": "Vyttila", "city": "Kochi", "county": "Ernakulam"},
        })

    monkeypatch.setattr(geocoder.requests, "get", fake_get)
    out = reverse_geocode(9.97, 76.32)

    assert out == {"district": "Vyttila", "formatted_address": "Vyttila, Kochi, Ernakulam, Kerala, India"}
    assert calls["params"]["lat"] == 9.97
    assert calls["params"]["lon"] == 76.32
    assert calls["params"]["format"] == "json"
    assert "User-Agent" in calls["headers"]
    assert calls["timeout"]


def test_no_address_gives_unknown_location(monkeypatch):
    monkeypatch.setattr(geocoder.requests, "get", lambda *a, **k: FakeResponse({"error": "Unable to geocode"}))
    assert reverse_geocode(0.0, 0.0) == {"district": "Unknown Location", "formatted_address": ""}


def test_http_error_raises_geocoding_error(monkeypatch):
    monkeypatch.setattr(geocoder.requests, "get", lambda *a, **k: FakeResponse({}, status=503))
    with pytest.raises(GeocodingError):
        reverse_geocode(9.9, 76.3)


def test_connection_error_raises_geocoding_error(monkeypatch):
    def boom(*a, **k):
        raise requests.ConnectionError("offline")

    monkeypatch.setattr(geocoder.requests, "get", boom)
    with pytest.raises(GeocodingError):
        reverse_geocode(9.9, 76.3)


@pytest.mark.parametrize("address,expected", [
    ({"suburb": "Edappally", "city": "Kochi"}, "Edappally"),
    ({"city_district": "Fort Kochi", "county": "Ernakulam"}, "Fort Kochi"),
    ({"county": "Palakkad", "city": "Palakkad"}, "Palakkad"),
    ({"city": "Thrissur"}, "Thrissur"),
    ({"road": "NH 66"}, "Unknown Location"),
])
def test_pick_district_order(address, expected):
    assert pick_district(address) == expected
