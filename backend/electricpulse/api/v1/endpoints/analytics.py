"""Analytics endpoints"""
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from electricpulse.core.database import get_db
from electricpulse.api.deps import get_current_user
from electricpulse.models.user import User
from electricpulse.schemas.analytics import ForecastResponse
from electricpulse.services.analytics_service import AnalyticsService
from electricpulse.utils.forecasting import InsufficientDataError

router = APIRouter(prefix="/analytics", tags=["analytics"])


@router.get("/forecast", response_model=ForecastResponse)
def forecast(
    meter_id: str = Query(...),
    days: int = Query(default=7, ge=1, le=90),
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user),
):
    """Linear-trend power forecast from the last 30 days of daily averages."""
    try:
        return AnalyticsService(db).forecast(meter_id, days)
    except InsufficientDataError:
        raise HTTPException(
            status_code=400,
            detail="Insufficient historical data for forecasting",
        )
