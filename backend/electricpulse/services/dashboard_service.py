"""Dashboard statistics service"""
from sqlalchemy import desc, func, select
from sqlalchemy.orm import Session

from electricpulse.core.config import settings
from electricpulse.core.redis_client import cache
from electricpulse.models.meter_reading import MeterReading
from electricpulse.schemas.dashboard import DashboardStats, HourlyPoint, TopMeter
from electricpulse.schemas.meter import MeterReadingResponse
from electricpulse.services.reading_service import ReadingService
from electricpulse.utils.buckets import period_bucket
from electricpulse.utils.calculations import round_half_away
from electricpulse.utils.clock import utc_now
from electricpulse.core.logging import get_logger

log = get_logger(__name__)

CACHE_KEY = "dashboard_stats"
HISTORY_HOURS = 24
TOP_METERS = 5


class DashboardService:
    def __init__(self, db: Session):
        self.db = db
        self.readings = ReadingService(db)

    def get_stats(self) -> DashboardStats:
        cached = cache.get(CACHE_KEY)
        if cached:
            return DashboardStats(**cached)

        latest = self.readings.latest_per_meter()

        total_power = sum(r.kwt or 0.0 for r in latest)
        total_energy = sum(r.kwh or 0.0 for r in latest)
        avg_pf = (
            sum(((r.pf1 or 0.0) + (r.pf2 or 0.0) + (r.pf3 or 0.0)) / 3 for r in latest) / len(latest)
            if latest
            else 0.0
        )

        top = sorted(latest, key=lambda r: r.kwt or 0.0, reverse=True)[:TOP_METERS]

        stats = DashboardStats(
            total_power=round_half_away(total_power, 2),
            total_energy=round_half_away(total_energy, 2),
            avg_power_factor=round_half_away(avg_pf, 3),
            meter_count=len(latest),
            historical_data=self.hourly_history(),
            latest_readings=[MeterReadingResponse.model_validate(r) for r in latest],
            top_meters=[
                TopMeter(meter_id=r.meter_id, name=f"Meter {r.meter_id}", kwt=r.kwt or 0.0)
                for r in top
            ],
            generated_at=utc_now(),
        )
        cache.set(CACHE_KEY, stats.model_dump(mode="json"), ttl=settings.DASHBOARD_CACHE_TTL_SECONDS)
        return stats

    def hourly_history(self) -> list[HourlyPoint]:
        """The most recent hourly buckets across all meters, oldest first."""
        bucket = period_bucket(MeterReading.timestamp, "hourly", self.readings.dialect).label("bucket")
        rows = self.db.execute(
            select(
                bucket,
                func.avg(MeterReading.kwt).label("avg_power"),
                func.sum(MeterReading.kwh).label("total_energy"),
                func.count().label("reading_count"),
            )
            .group_by("bucket")
            .order_by(desc("bucket"))
            .limit(HISTORY_HOURS)
        ).all()

        return [
            HourlyPoint(
                hour=row.bucket,
                avg_power=float(row.avg_power or 0.0),
                total_energy=float(row.total_energy or 0.0),
                reading_count=row.reading_count,
            )
            for row in reversed(rows)
        ]
