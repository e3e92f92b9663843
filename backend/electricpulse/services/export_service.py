"""CSV export of raw meter readings"""
import csv
import io
from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from electricpulse.core.config import settings
from electricpulse.models.meter_reading import MeterReading
from electricpulse.services.reading_service import ReadingService
from electricpulse.core.logging import get_logger

log = get_logger(__name__)

# (header, attribute, decimals)
CSV_COLUMNS = [
    ("Meter ID", "meter_id", None),
    ("Timestamp", "timestamp", None),
    ("V1 (V)", "v1", 2),
    ("V2 (V)", "v2", 2),
    ("V3 (V)", "v3", 2),
    ("I1 (A)", "i1", 2),
    ("I2 (A)", "i2", 2),
    ("I3 (A)", "i3", 2),
    ("PF1", "pf1", 3),
    ("PF2", "pf2", 3),
    ("PF3", "pf3", 3),
    ("KW1", "kw1", 2),
    ("KW2", "kw2", 2),
    ("KW3", "kw3", 2),
    ("KWT", "kwt", 2),
    ("KWH", "kwh", 2),
]


def format_cell(value, decimals: Optional[int]) -> str:
    if value is None:
        return ""
    if isinstance(value, datetime):
        return value.isoformat(sep=" ")
    if decimals is not None:
        return f"{value:.{decimals}f}"
    return str(value)


def readings_to_csv(readings: list[MeterReading]) -> str:
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow([header for header, _, _ in CSV_COLUMNS])
    for reading in readings:
        writer.writerow(
            [format_cell(getattr(reading, attr), decimals) for _, attr, decimals in CSV_COLUMNS]
        )
    return buf.getvalue()


class ExportService:
    def __init__(self, db: Session):
        self.db = db

    def export_csv(
        self,
        meter_id: str,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> str:
        readings = ReadingService(self.db).readings_for_meter(
            meter_id, limit=settings.EXPORT_MAX_ROWS, start=start, end=end
        )
        log.info("csv_export", meter_id=meter_id, rows=len(readings))
        return readings_to_csv(readings)
