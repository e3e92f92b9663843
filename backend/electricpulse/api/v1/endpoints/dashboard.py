"""Dashboard endpoints"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from electricpulse.core.database import get_db
from electricpulse.api.deps import get_current_user
from electricpulse.models.user import User
from electricpulse.schemas.dashboard import DashboardStats
from electricpulse.services.dashboard_service import DashboardService

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/stats", response_model=DashboardStats)
def stats(
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user),
):
    """Fleet totals from each meter's latest reading plus hourly history."""
    return DashboardService(db).get_stats()
