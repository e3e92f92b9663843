"""Meter Reading model - append-only telemetry written by the ingestion process"""
from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Float, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from electricpulse.core.database import Base


class MeterReading(Base):
    __tablename__ = "meter_readings"
    __table_args__ = (
        Index("ix_meter_readings_meter_id_timestamp", "meter_id", "timestamp"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    meter_id: Mapped[str] = mapped_column(String(50), nullable=False, index=True)

    # Per-phase voltage (V), current (A) and power factor
    v1: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    v2: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    v3: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    i1: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    i2: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    i3: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    pf1: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    pf2: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    pf3: Mapped[Optional[float]] = mapped_column(Float, nullable=True)

    # Apparent power (kVA)
    kva1: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    kva2: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    kva3: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    kvat: Mapped[Optional[float]] = mapped_column(Float, nullable=True)

    # Real power (kW)
    kw1: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    kw2: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    kw3: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    kwt: Mapped[Optional[float]] = mapped_column(Float, nullable=True)

    # Reactive power (kVAr)
    kvar1: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    kvar2: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    kvar3: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    kvart: Mapped[Optional[float]] = mapped_column(Float, nullable=True)

    # Cumulative energy counters
    kvah: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    kwh: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    kvarh: Mapped[Optional[float]] = mapped_column(Float, nullable=True)

    # Naive UTC
    timestamp: Mapped[datetime] = mapped_column(DateTime, nullable=False, index=True)
