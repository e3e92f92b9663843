"""Reporting service: billing summary, consumption buckets, period comparison"""
from datetime import timedelta
from typing import Optional

from sqlalchemy import desc, func, select
from sqlalchemy.orm import Session

from electricpulse.models.meter_reading import MeterReading
from electricpulse.schemas.report import ComparisonRow, ConsumptionRow, SummaryResponse
from electricpulse.services.reading_service import ReadingService
from electricpulse.utils.buckets import period_bucket
from electricpulse.utils.calculations import billing_summary, energy_savings, round_half_away
from electricpulse.utils.clock import utc_now
from electricpulse.core.logging import get_logger

log = get_logger(__name__)

CONSUMPTION_MAX_BUCKETS = 50


def _phase_mean(a, b, c):
    # Missing phases count as zero
    return (func.coalesce(a, 0.0) + func.coalesce(b, 0.0) + func.coalesce(c, 0.0)) / 3


def _round3(value: Optional[float]) -> Optional[float]:
    return None if value is None else round_half_away(float(value), 3)


class ReportService:
    def __init__(self, db: Session):
        self.db = db
        self.readings = ReadingService(db)

    def summary(self, meter_id: str, days: int = 30) -> SummaryResponse:
        cutoff = utc_now() - timedelta(days=days)
        pf_mean = _phase_mean(MeterReading.pf1, MeterReading.pf2, MeterReading.pf3)
        v_mean = _phase_mean(MeterReading.v1, MeterReading.v2, MeterReading.v3)

        row = self.db.execute(
            select(
                func.count().label("total_readings"),
                func.avg(MeterReading.kwt).label("avg_power"),
                func.max(MeterReading.kwt).label("peak_power"),
                func.min(MeterReading.kwt).label("min_power"),
                func.avg(MeterReading.kwh).label("avg_energy"),
                func.max(MeterReading.kwh).label("max_energy"),
                func.avg(pf_mean).label("avg_power_factor"),
                func.min(pf_mean).label("min_power_factor"),
                func.avg(v_mean).label("avg_voltage"),
                func.min(MeterReading.timestamp).label("first_reading"),
                func.max(MeterReading.timestamp).label("last_reading"),
            ).where(
                MeterReading.meter_id == meter_id,
                MeterReading.timestamp >= cutoff,
            )
        ).one()

        billing = billing_summary(
            avg_energy=row.avg_energy,
            peak_power=row.peak_power,
            avg_power_factor=row.avg_power_factor,
            avg_voltage=row.avg_voltage,
        )
        log.info("summary_generated", meter_id=meter_id, days=days, readings=row.total_readings)

        return SummaryResponse(
            meter_id=meter_id,
            days=days,
            total_readings=row.total_readings,
            avg_power=row.avg_power,
            peak_power=row.peak_power,
            min_power=row.min_power,
            avg_energy=row.avg_energy,
            max_energy=row.max_energy,
            avg_power_factor=_round3(row.avg_power_factor),
            min_power_factor=_round3(row.min_power_factor),
            avg_voltage=row.avg_voltage,
            first_reading=row.first_reading,
            last_reading=row.last_reading,
            **billing,
        )

    def consumption(self, meter_id: str, period: str = "daily", days: int = 30) -> list[ConsumptionRow]:
        """Aggregates per hour, day or month, newest bucket first."""
        cutoff = utc_now() - timedelta(days=days)
        bucket = period_bucket(MeterReading.timestamp, period, self.readings.dialect).label("bucket")
        pf_mean = _phase_mean(MeterReading.pf1, MeterReading.pf2, MeterReading.pf3)
        v_mean = _phase_mean(MeterReading.v1, MeterReading.v2, MeterReading.v3)

        rows = self.db.execute(
            select(
                bucket,
                func.avg(MeterReading.kwt).label("avg_power"),
                func.max(MeterReading.kwt).label("peak_power"),
                func.min(MeterReading.kwt).label("min_power"),
                func.avg(MeterReading.kwh).label("avg_energy"),
                func.max(MeterReading.kwh).label("max_energy"),
                func.avg(pf_mean).label("avg_power_factor"),
                func.avg(v_mean).label("avg_voltage"),
                func.count().label("reading_count"),
            )
            .where(
                MeterReading.meter_id == meter_id,
                MeterReading.timestamp >= cutoff,
            )
            .group_by("bucket")
            .order_by(desc("bucket"))
            .limit(CONSUMPTION_MAX_BUCKETS)
        ).all()

        return [
            ConsumptionRow(
                period=row.bucket,
                avg_power=row.avg_power,
                peak_power=row.peak_power,
                min_power=row.min_power,
                avg_energy=row.avg_energy,
                max_energy=row.max_energy,
                avg_power_factor=_round3(row.avg_power_factor),
                avg_voltage=row.avg_voltage,
                reading_count=row.reading_count,
            )
            for row in rows
        ]

    def comparison(self, meter_id: str, days: int = 7) -> list[ComparisonRow]:
        """
        Each day of the current window against the same day one window earlier.

        Days without readings on either side are reported as None. No value is
        invented for an empty previous window.
        """
        history = {
            point.date: point
            for point in self.readings.daily_aggregates(meter_id, days * 2)
        }
        today = utc_now().date()

        rows = []
        for offset in range(days):
            day = today - timedelta(days=offset)
            previous_day = day - timedelta(days=days)
            current = history.get(day)
            previous = history.get(previous_day)

            current_energy = current.avg_energy if current else None
            previous_energy = previous.avg_energy if previous else None
            rows.append(
                ComparisonRow(
                    period=day.isoformat(),
                    previous_period=previous_day.isoformat(),
                    current_power=current.avg_power if current else None,
                    current_energy=current_energy,
                    previous_power=previous.avg_power if previous else None,
                    previous_energy=previous_energy,
                    savings=energy_savings(previous_energy, current_energy),
                )
            )
        return rows
