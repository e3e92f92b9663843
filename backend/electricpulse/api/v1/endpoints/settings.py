"""Client settings endpoint"""
from fastapi import APIRouter, Depends

from electricpulse.core.config import settings
from electricpulse.api.deps import get_current_user
from electricpulse.models.user import User
from electricpulse.schemas.settings import AlertThresholdSettings, ClientSettings

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("", response_model=ClientSettings)
def client_settings(_: User = Depends(get_current_user)):
    """Rates, thresholds and poll interval the dashboard pages render with."""
    return ClientSettings(
        currency=settings.CURRENCY,
        energy_rate_per_kwh=settings.ENERGY_RATE_PER_KWH,
        demand_rate_per_kw=settings.DEMAND_RATE_PER_KW,
        refresh_interval_seconds=settings.CLIENT_REFRESH_INTERVAL_SECONDS,
        alert_thresholds=AlertThresholdSettings(
            min_power_factor=settings.ALERT_MIN_POWER_FACTOR,
            max_total_kw=settings.ALERT_MAX_TOTAL_KW,
            max_voltage_spread=settings.ALERT_MAX_VOLTAGE_SPREAD,
        ),
    )
