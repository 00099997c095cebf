"""Contact log model definition."""
from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from reconnect.models.base import Base, utcnow


class ContactLog(Base):
    """A recorded interaction with a contact."""

    __tablename__ = "contact_logs"

    id: Mapped[int] = mapped_column(primary_key=True)
    contact_id: Mapped[int] = mapped_column(
        ForeignKey("contacts.id", ondelete="CASCADE"), index=True, nullable=False
    )
    contact_date: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False)
    contact_type: Mapped[str] = mapped_column(String(50), nullable=False)
    notes: Mapped[str | None] = mapped_column(Text())
    got_response: Mapped[bool] = mapped_column(
        Boolean(), default=False, server_default=text("0"), nullable=False
    )
    response_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=False))
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=False), default=utcnow, nullable=False
    )
