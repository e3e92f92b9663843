"""Report endpoints"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from electricpulse.core.database import get_db
from electricpulse.api.deps import get_current_user
from electricpulse.models.user import User
from electricpulse.schemas.report import (
    ComparisonRow,
    ConsumptionRow,
    ReportPeriod,
    SummaryResponse,
)
from electricpulse.services.report_service import ReportService

router = APIRouter(prefix="/reports", tags=["reports"])


@router.get("/summary", response_model=SummaryResponse)
def summary(
    meter_id: str = Query(...),
    days: int = Query(default=30, ge=1, le=365),
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user),
):
    """Window statistics with energy cost, demand charge and efficiency rating."""
    return ReportService(db).summary(meter_id, days)


@router.get("/consumption", response_model=list[ConsumptionRow])
def consumption(
    meter_id: str = Query(...),
    period: ReportPeriod = Query(default="daily"),
    days: int = Query(default=30, ge=1, le=365),
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user),
):
    return ReportService(db).consumption(meter_id, period, days)


@router.get("/comparison", response_model=list[ComparisonRow])
def comparison(
    meter_id: str = Query(...),
    days: int = Query(default=7, ge=1, le=90),
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user),
):
    """Current window against the preceding window of the same length, day by day."""
    return ReportService(db).comparison(meter_id, days)
