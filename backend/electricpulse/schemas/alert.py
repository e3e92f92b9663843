"""Alert Pydantic schemas"""
from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel


AlertSeverity = Literal["critical", "warning", "info"]
AlertStatusValue = Literal["active", "acknowledged", "resolved"]


class Alert(BaseModel):
    id: str
    type: AlertSeverity
    title: str
    message: str
    meter_id: str
    value: str
    timestamp: Optional[datetime] = None
    status: AlertStatusValue = "active"


class AlertStateUpdate(BaseModel):
    note: Optional[str] = None
