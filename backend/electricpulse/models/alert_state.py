"""Alert State model - operator acknowledgement of a derived alert"""
import uuid
from datetime import datetime

from sqlalchemy import DateTime, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from electricpulse.core.database import Base


class AlertStatus(str):
    ACTIVE = "active"
    ACKNOWLEDGED = "acknowledged"
    RESOLVED = "resolved"


class AlertState(Base):
    __tablename__ = "alert_states"

    # Same id the evaluator derives, e.g. "pf_MTR-001"
    alert_id: Mapped[str] = mapped_column(String(100), primary_key=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    note: Mapped[str] = mapped_column(Text, nullable=True)
    updated_by: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=True)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )
