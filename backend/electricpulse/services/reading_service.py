"""Meter reading queries"""
from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy import desc, func, select
from sqlalchemy.orm import Session

from electricpulse.core.config import settings
from electricpulse.models.meter_reading import MeterReading
from electricpulse.schemas.analytics import DailyAggregate
from electricpulse.schemas.meter import MeterResponse
from electricpulse.utils.buckets import period_bucket
from electricpulse.utils.clock import utc_now
from electricpulse.core.logging import get_logger

log = get_logger(__name__)


class ReadingService:
    def __init__(self, db: Session):
        self.db = db

    @property
    def dialect(self) -> str:
        return self.db.get_bind().dialect.name

    def latest_per_meter(self) -> list[MeterReading]:
        """
        One reading per meter: the one with the greatest timestamp.
        Equal timestamps are broken by the highest row id.
        """
        rank = (
            func.row_number()
            .over(
                partition_by=MeterReading.meter_id,
                order_by=(desc(MeterReading.timestamp), desc(MeterReading.id)),
            )
            .label("rn")
        )
        ranked = select(MeterReading.id, rank).subquery()

        return list(
            self.db.execute(
                select(MeterReading)
                .join(ranked, MeterReading.id == ranked.c.id)
                .where(ranked.c.rn == 1)
                .order_by(MeterReading.meter_id)
            ).scalars().all()
        )

    def latest_for_meter(self, meter_id: str) -> Optional[MeterReading]:
        return self.db.execute(
            select(MeterReading)
            .where(MeterReading.meter_id == meter_id)
            .order_by(desc(MeterReading.timestamp), desc(MeterReading.id))
            .limit(1)
        ).scalar_one_or_none()

    def readings_for_meter(
        self,
        meter_id: str,
        limit: int = 100,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> list[MeterReading]:
        """Readings newest first, optionally bounded (inclusive) on either side."""
        query = select(MeterReading).where(MeterReading.meter_id == meter_id)
        if start is not None:
            query = query.where(MeterReading.timestamp >= start)
        if end is not None:
            query = query.where(MeterReading.timestamp <= end)

        return list(
            self.db.execute(
                query.order_by(desc(MeterReading.timestamp), desc(MeterReading.id)).limit(limit)
            ).scalars().all()
        )

    def recent_readings(self, seconds: int = 60, limit: int = 10) -> list[MeterReading]:
        cutoff = utc_now() - timedelta(seconds=seconds)
        return list(
            self.db.execute(
                select(MeterReading)
                .where(MeterReading.timestamp >= cutoff)
                .order_by(desc(MeterReading.timestamp), desc(MeterReading.id))
                .limit(limit)
            ).scalars().all()
        )

    def list_meters(self) -> list[MeterResponse]:
        """Meters are whatever meter ids appear in the reading table."""
        rows = self.db.execute(
            select(
                MeterReading.meter_id,
                func.max(MeterReading.timestamp).label("last_reading"),
            )
            .group_by(MeterReading.meter_id)
            .order_by(MeterReading.meter_id)
        ).all()

        stale_before = utc_now() - timedelta(minutes=settings.METER_INACTIVE_AFTER_MINUTES)
        return [
            MeterResponse(
                meter_id=row.meter_id,
                name=f"Meter {row.meter_id}",
                location=settings.DEFAULT_METER_LOCATION,
                description=settings.DEFAULT_METER_DESCRIPTION,
                status="active" if row.last_reading >= stale_before else "inactive",
                last_reading=row.last_reading,
            )
            for row in rows
        ]

    def daily_aggregates(self, meter_id: str, days: int) -> list[DailyAggregate]:
        """Per-day power and energy averages for the trailing window, oldest first."""
        cutoff = utc_now() - timedelta(days=days)
        bucket = period_bucket(MeterReading.timestamp, "daily", self.dialect).label("bucket")

        rows = self.db.execute(
            select(
                bucket,
                func.avg(MeterReading.kwt).label("avg_power"),
                func.max(MeterReading.kwt).label("peak_power"),
                func.avg(MeterReading.kwh).label("avg_energy"),
                func.count().label("reading_count"),
            )
            .where(
                MeterReading.meter_id == meter_id,
                MeterReading.timestamp >= cutoff,
            )
            .group_by("bucket")
            .order_by("bucket")
        ).all()

        log.debug("daily_aggregates_loaded", meter_id=meter_id, days=days, rows=len(rows))
        return [
            DailyAggregate(
                date=datetime.strptime(row.bucket, "%Y-%m-%d").date(),
                avg_power=float(row.avg_power or 0.0),
                peak_power=row.peak_power,
                avg_energy=row.avg_energy,
                reading_count=row.reading_count,
            )
            for row in rows
        ]
