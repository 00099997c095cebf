"""Dashboard API routes."""
from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from reconnect.api.deps import get_owner_id
from reconnect.api.v1.common import data_response, serialize_contact, serialize_event
from reconnect.core.config import Settings, get_settings
from reconnect.core.db import get_session
from reconnect.schemas import DashboardRead, DashboardStats, TopTagRead
from reconnect.schemas.tag import TagCountRead
from reconnect.services.dashboard import build_dashboard

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("")
async def get_dashboard(
    owner_id: int = Depends(get_owner_id),
    session: AsyncSession = Depends(get_session),
    settings: Settings = Depends(get_settings),
) -> dict[str, DashboardRead]:
    """Summarise due, recent and upcoming activity for the owner."""

    dashboard = await build_dashboard(
        session,
        owner_id,
        recent_limit=settings.dashboard_recent_limit,
        tags_limit=settings.dashboard_tags_limit,
        events_limit=settings.dashboard_events_limit,
    )
    top_tag = dashboard.top_tag
    payload = DashboardRead(
        stats=DashboardStats(
            total_contacts=dashboard.total_contacts,
            due_contacts=len(dashboard.due_contacts),
            top_tag=TopTagRead(name=top_tag.tag.name, count=top_tag.count) if top_tag else None,
        ),
        due_contacts=[serialize_contact(item) for item in dashboard.due_contacts],
        recent_contacts=[serialize_contact(item) for item in dashboard.recent_contacts],
        upcoming_events=[serialize_event(item) for item in dashboard.upcoming_events],
        popular_tags=[
            TagCountRead(id=item.tag.id, name=item.tag.name, count=item.count)
            for item in dashboard.popular_tags
        ],
    )
    return data_response(payload)
