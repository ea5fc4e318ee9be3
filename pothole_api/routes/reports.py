from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import ValidationError

from pothole_api import config
from pothole_api.db.dynamo import ReportStore, StoreError, get_store
from pothole_api.models.report import QueryCriteria, QueryResult, Report, ReportIn, SortBy
from pothole_api.services import query_pipeline
from pothole_api.services.danger import to_markers
from pothole_api.services.geocoder import reverse_geocode
from pothole_api.services.report_service import Geocoder, submit_report
from pothole_api.services.share import share_payload

router = APIRouter(tags=["reports"])


def get_geocoder() -> Geocoder:
    return reverse_geocode


@router.post("/reports", status_code=201)
def create_report(
    data: ReportIn,
    store: ReportStore = Depends(get_store),
    geocode: Geocoder = Depends(get_geocoder),
):
    """
    Accept the report form (photo, location, danger level, description),
    resolve the district, store it once, and return the id + location.
    """
    try:
        result = submit_report(data, store, geocode)
    except StoreError as e:
        raise HTTPException(status_code=502, detail=str(e))
    return {"message": "Report submitted successfully.", **result}


@router.get("/reports", response_model=QueryResult)
def list_reports(
    search: str = Query("", max_length=200, description="Matches description, district or address"),
    sort_by: SortBy = Query("newest"),
    danger: Optional[str] = Query(
        None,
        description="Band: all | 1-3 | 4-7 | 8-10 | minor | moderate | severe. Cannot be combined with danger_min/danger_max",
    ),
    danger_min: Optional[int] = Query(None, ge=0, le=10),
    danger_max: Optional[int] = Query(None, ge=0, le=10),
    page: int = Query(1, ge=1),
    page_size: int = Query(config.DEFAULT_PAGE_SIZE, ge=1, le=config.MAX_PAGE_SIZE),
    store: ReportStore = Depends(get_store),
):
    """Filterable, sortable, paginated list view."""
    if danger is not None and (danger_min is not None or danger_max is not None):
        raise HTTPException(status_code=422, detail="Use either danger or danger_min/danger_max, not both")
    try:
        danger_range = query_pipeline.parse_danger_band(danger)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    if danger_range is None and (danger_min is not None or danger_max is not None):
        danger_range = (danger_min if danger_min is not None else 0,
                        danger_max if danger_max is not None else 10)

    try:
        criteria = QueryCriteria(
            search=search,
            sort_by=sort_by,
            danger_range=danger_range,
            page=page,
            page_size=page_size,
        )
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors(include_url=False, include_context=False))

    try:
        reports = store.list_reports()
    except StoreError as e:
        raise HTTPException(status_code=502, detail=str(e))
    return query_pipeline.query(reports, criteria)


@router.get("/reports/map")
def map_markers(store: ReportStore = Depends(get_store)):
    """Every report as a lightweight marker (no photo), newest first."""
    try:
        reports = store.list_reports(order_by="newest")
    except StoreError as e:
        raise HTTPException(status_code=502, detail=str(e))
    return {"count": len(reports), "markers": to_markers(reports)}


def _load_one(store: ReportStore, report_id: str) -> Report:
    try:
        report = store.get_report(report_id)
    except StoreError as e:
        raise HTTPException(status_code=502, detail=str(e))
    if report is None:
        raise HTTPException(status_code=404, detail="Report not found")
    return report


@router.get("/reports/{report_id}", response_model=Report)
def get_report(report_id: str, store: ReportStore = Depends(get_store)):
    return _load_one(store, report_id)


@router.get("/reports/{report_id}/share")
def share_report(report_id: str, store: ReportStore = Depends(get_store)):
    return share_payload(_load_one(store, report_id))
