"""Contact model definition."""
from __future__ import annotations

from datetime import datetime
from enum import Enum

from sqlalchemy import DateTime, Enum as SQLEnum, Integer, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from reconnect.models.base import Base, utcnow

DEFAULT_REMINDER_FREQUENCY_MONTHS = 3
DEFAULT_RELATIONSHIP_SCORE = 50


class ContactTrend(str, Enum):
    """Direction of change in how often a contact is reached."""

    INCREASING = "increasing"
    STABLE = "stable"
    DECREASING = "decreasing"


class Contact(Base):
    """A person the owner wants to stay in touch with."""

    __tablename__ = "contacts"

    id: Mapped[int] = mapped_column(primary_key=True)
    owner_id: Mapped[int] = mapped_column(Integer, index=True, nullable=False)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str | None] = mapped_column(String(255))
    phone: Mapped[str | None] = mapped_column(String(32))
    notes: Mapped[str | None] = mapped_column(Text())
    last_contact_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=False))
    next_contact_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=False))
    reminder_frequency_months: Mapped[int] = mapped_column(
        Integer,
        default=DEFAULT_REMINDER_FREQUENCY_MONTHS,
        server_default=text(str(DEFAULT_REMINDER_FREQUENCY_MONTHS)),
        nullable=False,
    )
    # Derived fields, written only by the relationship metrics engine.
    relationship_score: Mapped[int] = mapped_column(
        Integer, default=DEFAULT_RELATIONSHIP_SCORE, nullable=False
    )
    contact_frequency_days: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    contact_trend: Mapped[ContactTrend] = mapped_column(
        SQLEnum(ContactTrend, name="contact_trend"),
        default=ContactTrend.STABLE,
        nullable=False,
    )
    last_response_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=False))
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=False), default=utcnow, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=False), default=utcnow, onupdate=utcnow, nullable=False
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
