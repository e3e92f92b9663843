"""Dashboard schemas"""
from datetime import datetime

from pydantic import BaseModel

from electricpulse.schemas.meter import MeterReadingResponse


class HourlyPoint(BaseModel):
    hour: str
    avg_power: float
    total_energy: float
    reading_count: int


class TopMeter(BaseModel):
    meter_id: str
    name: str
    kwt: float


class DashboardStats(BaseModel):
    total_power: float
    total_energy: float
    avg_power_factor: float
    meter_count: int
    historical_data: list[HourlyPoint]
    latest_readings: list[MeterReadingResponse]
    top_meters: list[TopMeter]
    generated_at: datetime
