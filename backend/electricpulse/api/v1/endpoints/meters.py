"""Meter and reading endpoints"""
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from electricpulse.core.database import get_db
from electricpulse.api.deps import get_current_user
from electricpulse.models.user import User
from electricpulse.schemas.meter import MeterReadingResponse, MeterResponse
from electricpulse.services.reading_service import ReadingService
from electricpulse.utils.clock import as_naive_utc

router = APIRouter(tags=["meters"])


@router.get("/meters", response_model=list[MeterResponse])
def list_meters(
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user),
):
    """Every meter id seen in the reading table, with its last reading time."""
    return ReadingService(db).list_meters()


@router.get("/meters/{meter_id}/latest", response_model=MeterReadingResponse)
def latest_reading(
    meter_id: str,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user),
):
    reading = ReadingService(db).latest_for_meter(meter_id)
    if not reading:
        raise HTTPException(status_code=404, detail="No readings found")
    return reading


@router.get("/meters/{meter_id}/readings", response_model=list[MeterReadingResponse])
def meter_readings(
    meter_id: str,
    limit: int = Query(default=100, ge=1, le=10000),
    start_date: Optional[datetime] = Query(None),
    end_date: Optional[datetime] = Query(None),
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user),
):
    """Reading history, newest first."""
    return ReadingService(db).readings_for_meter(
        meter_id, limit, as_naive_utc(start_date), as_naive_utc(end_date)
    )


@router.get("/readings/latest", response_model=list[MeterReadingResponse])
def latest_per_meter(
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user),
):
    """The newest reading of each meter, ordered by meter id."""
    return ReadingService(db).latest_per_meter()


@router.get("/readings/recent", response_model=list[MeterReadingResponse])
def recent_readings(
    seconds: int = Query(default=60, ge=1, le=3600),
    limit: int = Query(default=10, ge=1, le=500),
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user),
):
    """Readings that arrived in the trailing window; polled by live views."""
    return ReadingService(db).recent_readings(seconds, limit)
