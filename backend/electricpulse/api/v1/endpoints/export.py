"""CSV export endpoint"""
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response
from sqlalchemy.orm import Session

from electricpulse.core.database import get_db
from electricpulse.api.deps import get_current_user
from electricpulse.models.user import User
from electricpulse.services.export_service import ExportService
from electricpulse.utils.clock import as_naive_utc, utc_now

router = APIRouter(prefix="/export", tags=["export"])


@router.get("/csv", response_class=Response)
def export_csv(
    meter_id: str = Query(...),
    start_date: Optional[datetime] = Query(None),
    end_date: Optional[datetime] = Query(None),
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user),
):
    content = ExportService(db).export_csv(
        meter_id, as_naive_utc(start_date), as_naive_utc(end_date)
    )
    filename = f"meter_{meter_id}_{utc_now().date().isoformat()}.csv"
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
