"""Forecasting service"""
from sqlalchemy.orm import Session

from electricpulse.core.config import settings
from electricpulse.schemas.analytics import ForecastResponse
from electricpulse.services.reading_service import ReadingService
from electricpulse.utils.clock import utc_now
from electricpulse.utils.forecasting import linear_forecast
from electricpulse.core.logging import get_logger

log = get_logger(__name__)


class AnalyticsService:
    def __init__(self, db: Session):
        self.db = db

    def forecast(self, meter_id: str, days: int = 7) -> ForecastResponse:
        """
        Daily power forecast for one meter.
        Raises InsufficientDataError when the history window is too thin.
        """
        history = ReadingService(self.db).daily_aggregates(
            meter_id, settings.FORECAST_HISTORY_DAYS
        )
        result = linear_forecast(history, days, start=utc_now().date())

        log.info(
            "forecast_generated",
            meter_id=meter_id,
            days=days,
            history_points=len(history),
            slope=result.slope,
        )
        return ForecastResponse(
            meter_id=meter_id,
            forecast_period=f"{days} days",
            historical_data_points=len(history),
            trend_points=result.points_used,
            trend_slope=result.slope,
            forecast=result.forecast,
        )
