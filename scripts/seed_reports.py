# scripts/seed_reports.py
"""
Fill the Reports table with sample pothole reports, or bulk-load reports
from a JSON file (a list of report-form payloads).

Usage:
  python -m scripts.seed_reports --count 200 [--seed 7] [--dry-run]
  python -m scripts.seed_reports --file reports.json [--dry-run]

Env vars (same as pothole_api/config.py):
  AWS_REGION=ap-south-1
  REPORTS_TABLE=Reports
  DYNAMODB_ENDPOINT_URL=http://localhost:8000   (optional, DynamoDB Local)
"""
from __future__ import annotations

import argparse
import json
import os
import random
import sys
import time
from typing import Any, Dict, List

from dotenv import load_dotenv
from pydantic import ValidationError

load_dotenv()

from pothole_api.db.dynamo import StoreError, get_store  # noqa: E402
from pothole_api.models.report import ReportIn  # noqa: E402
from pothole_api.services.report_service import submit_report  # noqa: E402

# District name -> rough centre (lat, lng)
DISTRICTS = {
    "Ernakulam": (9.9816, 76.2999),
    "Thiruvananthapuram": (8.5241, 76.9366),
    "Kozhikode": (11.2588, 75.7804),
    "Thrissur": (10.5276, 76.2144),
    "Palakkad": (10.7867, 76.6548),
    "Kottayam": (9.5916, 76.5222),
    "Kannur": (11.8745, 75.3704),
    "Alappuzha": (9.4981, 76.3388),
}

DESCRIPTIONS = [
    "Deep pothole right after the bus stop",
    "Crater on the left lane, filled with water after rain",
    "Broken road edge near the junction",
    "Several small potholes in a row",
    "Two-wheelers swerving to avoid this one",
    "",
]

# 1x1 transparent PNG; real reports carry a compressed photo
PLACEHOLDER_IMAGE = (
    "data:image/png;base64,"
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAQAAAC1HAwCAAAAC0lEQVR42mNkYAAAAAYAAjCB0C8AAAAASUVORK5CYII="
)


def generate_payloads(count: int, rng: random.Random) -> List[Dict[str, Any]]:
    payloads = []
    names = list(DISTRICTS)
    for _ in range(count):
        district = rng.choice(names)
        lat, lng = DISTRICTS[district]
        payloads.append({
            "danger_level": rng.randint(1, 10),
            "description": rng.choice(DESCRIPTIONS),
            "lat": round(lat + rng.uniform(-0.05, 0.05), 6),
            "lng": round(lng + rng.uniform(-0.05, 0.05), 6),
            "district": district,
            "formatted_address": f"{district}, Kerala, India",
            "image_data": PLACEHOLDER_IMAGE,
        })
    return payloads


def load_payloads(path: str) -> List[Dict[str, Any]]:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, list):
        raise ValueError("JSON root must be a list of report objects.")
    return data


def main(argv: List[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Seed the Reports table.")
    parser.add_argument("--file", "-f", help="JSON file with a list of report payloads.")
    parser.add_argument("--count", "-n", type=int, default=50, help="How many reports to generate.")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for repeatable data.")
    parser.add_argument("--dry-run", action="store_true", help="Validate and print, but do not write.")
    parser.add_argument("--sleep", type=float, default=0.0, help="Optional delay (seconds) between writes.")
    args = parser.parse_args(argv)

    if args.file:
        path = os.path.abspath(args.file)
        try:
            payloads = load_payloads(path)
        except (OSError, ValueError) as e:
            print(f"Error reading {path}: {e}")
            return 1
    else:
        payloads = generate_payloads(args.count, random.Random(args.seed))

    store = None if args.dry_run else get_store()
    total = len(payloads)
    ok = skipped = 0
    for i, rec in enumerate(payloads, 1):
        try:
            data = ReportIn(**rec)
        except (TypeError, ValidationError) as e:
            print(f"[{i}/{total}] SKIP (invalid): {e}")
            skipped += 1
            continue

        if args.dry_run:
            print(f"[{i}/{total}] DRY-RUN danger={data.danger_level} "
                  f"district={data.district!r} at ({data.lat}, {data.lng})")
            ok += 1
            continue

        try:
            submit_report(data, store)
            ok += 1
        except StoreError as e:
            print(f"[{i}/{total}] ERROR {e}")
            continue
        if args.sleep > 0:
            time.sleep(args.sleep)

    print(f"\nDone. Success: {ok}  Skipped: {skipped}  Total read: {total}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
