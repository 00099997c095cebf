"""Pydantic schemas for the relationship tracking service."""

from .contact import (
    ContactCreate,
    ContactDetailRead,
    ContactRead,
    ContactUpdate,
    InteractionRecordRead,
)
from .contact_log import ContactLogCreate, ContactLogRead
from .dashboard import DashboardRead, DashboardStats, ReminderStatusRead, TopTagRead
from .event import EventContactRead, EventCreate, EventLinkRead, EventRead, EventUpdate
from .tag import TagCountRead, TagCreate, TagRead

__all__ = [
    "ContactCreate",
    "ContactDetailRead",
    "ContactLogCreate",
    "ContactLogRead",
    "ContactRead",
    "ContactUpdate",
    "DashboardRead",
    "DashboardStats",
    "EventContactRead",
    "EventCreate",
    "EventLinkRead",
    "EventRead",
    "EventUpdate",
    "InteractionRecordRead",
    "ReminderStatusRead",
    "TagCountRead",
    "TagCreate",
    "TagRead",
]
