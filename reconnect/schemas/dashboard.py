"""Pydantic schemas for dashboard and reminder views."""
from __future__ import annotations

from pydantic import BaseModel

from reconnect.schemas.contact import ContactRead
from reconnect.schemas.event import EventRead
from reconnect.schemas.tag import TagCountRead


class TopTagRead(BaseModel):
    name: str
    count: int


class DashboardStats(BaseModel):
    total_contacts: int
    due_contacts: int
    top_tag: TopTagRead | None = None


class DashboardRead(BaseModel):
    stats: DashboardStats
    due_contacts: list[ContactRead]
    recent_contacts: list[ContactRead]
    upcoming_events: list[EventRead]
    popular_tags: list[TagCountRead]


class ReminderStatusRead(BaseModel):
    total: int
    overdue: int
    due_today: int
    upcoming: int
