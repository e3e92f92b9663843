"""
ElectricPulse Core Configuration
Validated Pydantic settings with environment variable loading.
"""
from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ── Application ────────────────────────────────────────────
    APP_NAME: str = "ElectricPulse"
    APP_ENV: str = "development"
    APP_DEBUG: bool = False
    SECRET_KEY: str
    ALLOWED_ORIGINS: str = "http://localhost:3000"

    @property
    def cors_origins(self) -> List[str]:
        return [o.strip() for o in self.ALLOWED_ORIGINS.split(",")]

    # ── Database ───────────────────────────────────────────────
    DATABASE_URL: str

    # ── Redis ──────────────────────────────────────────────────
    REDIS_URL: str = "redis://localhost:6379/0"
    DASHBOARD_CACHE_TTL_SECONDS: int = 5

    # ── JWT ────────────────────────────────────────────────────
    JWT_ACCESS_TOKEN_EXPIRE_MINUTES: int = 30
    JWT_REFRESH_TOKEN_EXPIRE_DAYS: int = 7
    JWT_ALGORITHM: str = "HS256"

    # ── Rate Limiting ──────────────────────────────────────────
    RATE_LIMIT_ENABLED: bool = True
    AUTH_RATE_LIMIT_PER_MINUTE: int = 10

    # ── Billing ────────────────────────────────────────────────
    CURRENCY: str = "USD"
    ENERGY_RATE_PER_KWH: float = 0.15
    DEMAND_RATE_PER_KW: float = 12.5
    VOLTAGE_NOMINAL_MIN: float = 220.0
    VOLTAGE_NOMINAL_MAX: float = 240.0

    # ── Alert Thresholds ───────────────────────────────────────
    ALERT_MIN_POWER_FACTOR: float = 0.85
    ALERT_MAX_TOTAL_KW: float = 50000.0
    ALERT_MAX_VOLTAGE_SPREAD: float = 10.0

    # ── Meters ─────────────────────────────────────────────────
    METER_INACTIVE_AFTER_MINUTES: int = 60
    DEFAULT_METER_LOCATION: str = "Production Facility"
    DEFAULT_METER_DESCRIPTION: str = "Primary electrical feed"

    # ── Reports ────────────────────────────────────────────────
    FORECAST_HISTORY_DAYS: int = 30
    EXPORT_MAX_ROWS: int = 10000
    CLIENT_REFRESH_INTERVAL_SECONDS: int = 30


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
