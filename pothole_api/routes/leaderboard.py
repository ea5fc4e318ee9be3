from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from pothole_api.db.dynamo import ReportStore, StoreError, get_store
from pothole_api.models.report import LeaderboardResult
from pothole_api.services.aggregator import summarize

router = APIRouter(tags=["leaderboard"])


@router.get("/leaderboard", response_model=LeaderboardResult)
def leaderboard(store: ReportStore = Depends(get_store)):
    """Districts ranked by number of reports, ties broken by average danger."""
    try:
        reports = store.list_reports()
    except StoreError as e:
        raise HTTPException(status_code=502, detail=str(e))
    return summarize(reports)
