"""Alert evaluation and acknowledgement service"""
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from electricpulse.models.alert_state import AlertState
from electricpulse.models.audit_log import AuditLog
from electricpulse.models.user import User
from electricpulse.schemas.alert import Alert
from electricpulse.services.reading_service import ReadingService
from electricpulse.utils.alert_rules import evaluate_alerts
from electricpulse.core.logging import get_logger

log = get_logger(__name__)


class AlertService:
    def __init__(self, db: Session):
        self.db = db

    def current_alerts(self) -> list[Alert]:
        """Alerts raised by the latest reading of every meter, before any overlay."""
        latest = ReadingService(self.db).latest_per_meter()
        return evaluate_alerts(latest)

    def list_alerts(self, status: Optional[str] = None) -> list[Alert]:
        alerts = self.current_alerts()
        if alerts:
            states = {
                s.alert_id: s.status
                for s in self.db.execute(
                    select(AlertState).where(
                        AlertState.alert_id.in_([a.id for a in alerts])
                    )
                ).scalars()
            }
            alerts = [
                a.model_copy(update={"status": states[a.id]}) if a.id in states else a
                for a in alerts
            ]

        if status:
            alerts = [a for a in alerts if a.status == status]
        return alerts

    def set_state(
        self,
        alert_id: str,
        status: str,
        user: User,
        note: Optional[str] = None,
        ip_address: Optional[str] = None,
    ) -> Optional[Alert]:
        """
        Record an operator decision on a currently raised alert.
        Returns None when no such alert is raised right now.
        """
        alert = next((a for a in self.current_alerts() if a.id == alert_id), None)
        if alert is None:
            return None

        state = self.db.get(AlertState, alert_id)
        if state is None:
            state = AlertState(alert_id=alert_id, status=status)
            self.db.add(state)
        state.status = status
        state.note = note
        state.updated_by = user.id

        self.db.add(
            AuditLog(
                user_id=user.id,
                action=f"alert_{status}",
                resource_type="alert",
                resource_id=alert_id,
                details={"note": note} if note else None,
                ip_address=ip_address,
            )
        )
        self.db.commit()
        log.info("alert_state_changed", alert_id=alert_id, status=status, user_id=str(user.id))
        return alert.model_copy(update={"status": status})

    def clear_state(self, alert_id: str, user: User) -> bool:
        state = self.db.get(AlertState, alert_id)
        if state is None:
            return False
        self.db.delete(state)
        self.db.add(
            AuditLog(
                user_id=user.id,
                action="alert_state_cleared",
                resource_type="alert",
                resource_id=alert_id,
            )
        )
        self.db.commit()
        log.info("alert_state_cleared", alert_id=alert_id, user_id=str(user.id))
        return True
