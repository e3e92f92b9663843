"""Alert endpoints"""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from electricpulse.core.database import get_db
from electricpulse.api.deps import get_current_user
from electricpulse.models.alert_state import AlertStatus
from electricpulse.models.user import User
from electricpulse.schemas.alert import Alert, AlertStateUpdate, AlertStatusValue
from electricpulse.services.alert_service import AlertService

router = APIRouter(prefix="/alerts", tags=["alerts"])


@router.get("", response_model=list[Alert])
def list_alerts(
    status: Optional[AlertStatusValue] = Query(None),
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user),
):
    """Alerts raised by each meter's latest reading, recomputed on every call."""
    return AlertService(db).list_alerts(status)


def _change_state(
    alert_id: str,
    status: str,
    body: Optional[AlertStateUpdate],
    request: Request,
    db: Session,
    user: User,
) -> Alert:
    alert = AlertService(db).set_state(
        alert_id,
        status,
        user,
        note=body.note if body else None,
        ip_address=request.client.host if request.client else None,
    )
    if not alert:
        raise HTTPException(status_code=404, detail="Alert is not currently raised")
    return alert


@router.post("/{alert_id}/acknowledge", response_model=Alert)
def acknowledge_alert(
    alert_id: str,
    request: Request,
    body: Optional[AlertStateUpdate] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return _change_state(alert_id, AlertStatus.ACKNOWLEDGED, body, request, db, current_user)


@router.post("/{alert_id}/resolve", response_model=Alert)
def resolve_alert(
    alert_id: str,
    request: Request,
    body: Optional[AlertStateUpdate] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return _change_state(alert_id, AlertStatus.RESOLVED, body, request, db, current_user)


@router.delete("/{alert_id}/state", status_code=204)
def clear_alert_state(
    alert_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    if not AlertService(db).clear_state(alert_id, current_user):
        raise HTTPException(status_code=404, detail="No state recorded for this alert")
    return None
