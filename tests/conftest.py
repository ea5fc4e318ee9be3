from __future__ import annotations

import copy
from datetime import datetime, timedelta, timezone

import pytest
from botocore.exceptions import ClientError

from pothole_api.db.dynamo import ReportStore
from pothole_api.models.report import Location, Report

BASE_TIME = datetime(2025, 7, 1, 9, 0, tzinfo=timezone.utc)


class FakeTable:
    """In-memory stand-in for a boto3 DynamoDB Table (scan/get_item/put_item)."""

    def __init__(self, items=None, page_size=2, fail=False):
        self.name = "Reports"
        self.items = [copy.deepcopy(it) for it in (items or [])]
        self.page_size = page_size
        self.fail = fail
        self.scan_calls = 0

    def _maybe_fail(self, op):
        if self.fail:
            raise ClientError(
                {"Error": {"Code": "ResourceNotFoundException", "Message": "Requested resource not found"}},
                op,
            )

    def scan(self, ExclusiveStartKey=None, Limit=None):
        self._maybe_fail("Scan")
        self.scan_calls += 1
        start = ExclusiveStartKey["offset"] if ExclusiveStartKey else 0
        size = Limit or self.page_size
        page = self.items[start:start + size]
        resp = {"Items": copy.deepcopy(page)}
        if start + size < len(self.items):
            resp["LastEvaluatedKey"] = {"offset": start + size}
        return resp

    def get_item(self, Key):
        self._maybe_fail("GetItem")
        for it in self.items:
            if it.get("id") == Key["id"]:
                return {"Item": copy.deepcopy(it)}
        return {}

    def put_item(self, Item, ConditionExpression=None):
        self._maybe_fail("PutItem")
        if any(it.get("id") == Item["id"] for it in self.items):
            raise ClientError(
                {"Error": {"Code": "ConditionalCheckFailedException", "Message": "exists"}},
                "PutItem",
            )
        self.items.append(copy.deepcopy(Item))
        return {}


def make_report(
    rid="r1",
    danger=5,
    district="Kochi",
    description="",
    address="",
    minutes=0,
    created_at="auto",
):
    if created_at == "auto":
        created_at = BASE_TIME + timedelta(minutes=minutes)
    return Report(
        id=rid,
        danger_level=danger,
        description=description,
        location=Location(lat=9.93, lng=76.26, district=district, formatted_address=address),
        image_data="data:image/jpeg;base64,AAAA",
        created_at=created_at,
    )


def make_item(rid="r1", danger=5, district="Kochi", minutes=0, **extra):
    item = {
        "id": rid,
        "danger_level": danger,
        "description": extra.pop("description", ""),
        "image_data": "data:image/jpeg;base64,AAAA",
        "created_at": (BASE_TIME + timedelta(minutes=minutes)).isoformat(),
        "location": {
            "lat": extra.pop("lat", 9.93),
            "lng": extra.pop("lng", 76.26),
            "district": district,
            "formatted_address": extra.pop("formatted_address", ""),
        },
    }
    item.update(extra)
    return item


@pytest.fixture
def fake_table():
    return FakeTable()


@pytest.fixture
def store(fake_table):
    return ReportStore(fake_table)
