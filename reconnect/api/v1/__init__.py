"""Version 1 API routes for the relationship tracking service."""
from __future__ import annotations

from fastapi import APIRouter, Depends

from reconnect.api.v1.contacts import router as contacts_router
from reconnect.api.v1.dashboard import router as dashboard_router
from reconnect.api.v1.events import router as events_router
from reconnect.api.v1.reminders import router as reminders_router
from reconnect.api.v1.tags import router as tags_router
from reconnect.core.config import Settings, get_settings

router = APIRouter()
router.include_router(contacts_router)
router.include_router(tags_router)
router.include_router(events_router)
router.include_router(dashboard_router)
router.include_router(reminders_router)


@router.get("/health", tags=["health"])
async def health_check(settings: Settings = Depends(get_settings)) -> dict[str, dict[str, str]]:
    """Report the service health information."""
    return {"data": {"status": "ok", "version": settings.version}}
