# pothole_api/db/dynamo.py
from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from decimal import Decimal
from functools import lru_cache
from typing import Any, Dict, List, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from pothole_api import config
from pothole_api.models.report import Report, SortBy
from pothole_api.services.normalize import InvalidReportError, normalize_item, normalize_items
from pothole_api.services.query_pipeline import order_reports

log = logging.getLogger(__name__)


class StoreError(RuntimeError):
    """The document store could not be reached or refused the request."""


def _to_dynamo(value: Any) -> Any:
    """DynamoDB rejects floats; store numbers as Decimal."""
    if isinstance(value, float):
        return Decimal(str(value))
    if isinstance(value, dict):
        return {k: _to_dynamo(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_dynamo(v) for v in value]
    return value


class ReportStore:
    """
    Reports table: PK `id` (string). Items are written once and never updated:
      { id, danger_level, description, image_data, created_at (ISO8601 UTC),
        location: { lat, lng, district, formatted_address } }
    """

    def __init__(self, table):
        self.table = table

    def scan_items(self, page_limit: Optional[int] = None) -> List[Dict[str, Any]]:
        """Raw items, following LastEvaluatedKey until the scan is done."""
        items: List[Dict[str, Any]] = []
        lek: Optional[Dict[str, Any]] = None
        try:
            while True:
                kwargs: Dict[str, Any] = {}
                if page_limit:
                    kwargs["Limit"] = page_limit
                if lek:
                    kwargs["ExclusiveStartKey"] = lek
                resp = self.table.scan(**kwargs)
                items.extend(resp.get("Items", []))
                lek = resp.get("LastEvaluatedKey")
                if not lek:
                    break
        except (ClientError, BotoCoreError) as e:
            log.error("Scanning %s failed: %s", self.table.name, e)
            raise StoreError("Failed to load reports.") from e
        return items

    def list_reports(self, order_by: Optional[SortBy] = None) -> List[Report]:
        """
        All reports, normalized. DynamoDB scans are unordered, so `order_by`
        is applied here with the list view's ordering rules.
        """
        reports = normalize_items(self.scan_items())
        log.info("Loaded %d reports from %s", len(reports), self.table.name)
        if order_by:
            reports = order_reports(reports, order_by)
        return reports

    def get_report(self, report_id: str) -> Optional[Report]:
        try:
            resp = self.table.get_item(Key={"id": report_id})
        except (ClientError, BotoCoreError) as e:
            log.error("Reading report %s failed: %s", report_id, e)
            raise StoreError("Failed to load report.") from e
        item = resp.get("Item")
        if not item:
            return None
        try:
            return normalize_item(item)
        except InvalidReportError as e:
            log.warning("Stored report %s is malformed: %s", report_id, e)
            return None

    def create_report(self, fields: Dict[str, Any]) -> str:
        """Write a new report; the store assigns `id` and `created_at`."""
        report_id = str(uuid.uuid4())
        item = dict(fields)
        item["id"] = report_id
        item["created_at"] = datetime.now(timezone.utc).isoformat()
        try:
            self.table.put_item(
                Item=_to_dynamo(item),
                ConditionExpression="attribute_not_exists(id)",
            )
        except (ClientError, BotoCoreError) as e:
            log.error("Writing report failed: %s", e)
            raise StoreError("Failed to save report.") from e
        return report_id


@lru_cache(maxsize=1)
def get_store() -> ReportStore:
    """Process-wide store bound to the configured table (created lazily)."""
    dynamodb = boto3.resource(
        "dynamodb",
        region_name=config.REGION,
        endpoint_url=config.DYNAMODB_ENDPOINT_URL,
    )
    return ReportStore(dynamodb.Table(config.REPORTS_TABLE))
