# pothole_api/config.py
from __future__ import annotations

import os

# ---- AWS / DynamoDB ----
REGION = os.getenv("AWS_REGION", "ap-south-1")
REPORTS_TABLE = os.getenv("REPORTS_TABLE", "Reports")
# e.g. http://localhost:8000 when running DynamoDB Local
DYNAMODB_ENDPOINT_URL = os.getenv("DYNAMODB_ENDPOINT_URL", "").strip() or None

# ---- Reverse geocoding (OpenStreetMap Nominatim) ----
NOMINATIM_URL = os.getenv("NOMINATIM_URL", "https://nominatim.openstreetmap.org/reverse")
# Nominatim's usage policy requires an identifying User-Agent
GEOCODER_USER_AGENT = os.getenv("GEOCODER_USER_AGENT", "pothole-api/1.0")
GEOCODER_TIMEOUT = float(os.getenv("GEOCODER_TIMEOUT", "10"))

# ---- List view ----
DEFAULT_PAGE_SIZE = int(os.getenv("DEFAULT_PAGE_SIZE", "10"))
MAX_PAGE_SIZE = int(os.getenv("MAX_PAGE_SIZE", "100"))

# Base64 photo payload cap; DynamoDB items are limited to 400 KB
MAX_IMAGE_CHARS = int(os.getenv("MAX_IMAGE_CHARS", "350000"))

# Public origin of the web app, used to build share links
PUBLIC_APP_URL = os.getenv("PUBLIC_APP_URL", "http://localhost:3000").rstrip("/")

UNKNOWN_LOCATION = "Unknown Location"
UNKNOWN_DISTRICT = "Unknown District"
