"""Database models package for the relationship tracking service."""

from .base import Base
from .contact import Contact, ContactTrend
from .contact_log import ContactLog
from .event import CalendarEvent, EventContact
from .tag import ContactTag, Tag

__all__ = [
    "Base",
    "CalendarEvent",
    "Contact",
    "ContactLog",
    "ContactTag",
    "ContactTrend",
    "EventContact",
    "Tag",
]
