from electricpulse.models.user import User
from electricpulse.models.meter_reading import MeterReading
from electricpulse.models.alert_state import AlertState
from electricpulse.models.audit_log import AuditLog

__all__ = [
    "User",
    "MeterReading",
    "AlertState",
    "AuditLog",
]
