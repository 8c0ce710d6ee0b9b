"""API v1 router."""

from fastapi import APIRouter

from table_progress_tracking.api.v1 import health, pages, progress

router = APIRouter()

# Include sub-routers
router.include_router(health.router, tags=["Health"])
router.include_router(progress.router, prefix="/progress-tracking", tags=["Progress"])
router.include_router(pages.router, prefix="/pages", tags=["Pages"])
