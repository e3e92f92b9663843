"""Report schemas"""
from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel


ReportPeriod = Literal["hourly", "daily", "monthly"]


class SummaryResponse(BaseModel):
    meter_id: str
    days: int
    total_readings: int
    avg_power: Optional[float] = None
    peak_power: Optional[float] = None
    min_power: Optional[float] = None
    avg_energy: Optional[float] = None
    max_energy: Optional[float] = None
    avg_power_factor: Optional[float] = None
    min_power_factor: Optional[float] = None
    avg_voltage: Optional[float] = None
    first_reading: Optional[datetime] = None
    last_reading: Optional[datetime] = None

    total_cost: float
    peak_demand_charge: float
    total_bill: float
    power_factor_efficiency: float
    voltage_stability: str
    efficiency_rating: str


class ConsumptionRow(BaseModel):
    period: str
    avg_power: Optional[float] = None
    peak_power: Optional[float] = None
    min_power: Optional[float] = None
    avg_energy: Optional[float] = None
    max_energy: Optional[float] = None
    avg_power_factor: Optional[float] = None
    avg_voltage: Optional[float] = None
    reading_count: int


class ComparisonRow(BaseModel):
    period: str
    previous_period: str
    current_power: Optional[float] = None
    current_energy: Optional[float] = None
    previous_power: Optional[float] = None
    previous_energy: Optional[float] = None
    savings: Optional[float] = None
