"""Client settings schema"""
from pydantic import BaseModel


class AlertThresholdSettings(BaseModel):
    min_power_factor: float
    max_total_kw: float
    max_voltage_spread: float


class ClientSettings(BaseModel):
    currency: str
    energy_rate_per_kwh: float
    demand_rate_per_kw: float
    refresh_interval_seconds: int
    alert_thresholds: AlertThresholdSettings
