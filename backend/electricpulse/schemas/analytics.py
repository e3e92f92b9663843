"""Analytics schemas"""
import datetime
from typing import Literal, Optional

from pydantic import BaseModel


class DailyAggregate(BaseModel):
    date: datetime.date
    avg_power: float
    peak_power: Optional[float] = None
    avg_energy: Optional[float] = None
    reading_count: int = 0


class ForecastPoint(BaseModel):
    date: datetime.date
    predicted_power: float
    confidence_level: float
    predicted_energy: float
    trend: Literal["increasing", "decreasing", "stable"]


class ForecastResponse(BaseModel):
    meter_id: str
    forecast_period: str
    historical_data_points: int
    trend_points: int
    trend_slope: float
    forecast: list[ForecastPoint]
