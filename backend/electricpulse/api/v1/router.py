"""API v1 router aggregation"""
from fastapi import APIRouter

from electricpulse.api.v1.endpoints import (
    alerts,
    analytics,
    auth,
    dashboard,
    export,
    meters,
    reports,
    settings,
    users,
)

router = APIRouter(prefix="/api/v1")

router.include_router(auth.router)
router.include_router(users.router)
router.include_router(meters.router)
router.include_router(dashboard.router)
router.include_router(alerts.router)
router.include_router(analytics.router)
router.include_router(reports.router)
router.include_router(export.router)
router.include_router(settings.router)
