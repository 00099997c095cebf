"""Pydantic schemas for contact log resources."""
from __future__ import annotations

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

from reconnect.schemas.common import UTCDateTime

ContactType = Annotated[str, Field(min_length=1, max_length=50)]


class ContactLogCreate(BaseModel):
    contact_date: UTCDateTime
    contact_type: ContactType
    notes: str | None = None
    got_response: bool = False
    response_date: UTCDateTime | None = None
    reminder_frequency_months: int | None = Field(default=None, gt=0)
    reset_reminder: bool = True


class ContactLogRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    contact_id: int
    contact_date: datetime
    contact_type: str
    notes: str | None = None
    got_response: bool
    response_date: datetime | None = None
    created_at: datetime
