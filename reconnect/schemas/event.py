"""Pydantic schemas for calendar event resources."""
from __future__ import annotations

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, model_validator

from reconnect.schemas.common import UTCDateTime

Title = Annotated[str, Field(min_length=1, max_length=200)]


class EventBase(BaseModel):
    description: str | None = None
    location: str | None = Field(default=None, max_length=255)
    reminder_minutes: int | None = Field(default=30, ge=0)


class EventCreate(EventBase):
    title: Title
    start_date: UTCDateTime
    end_date: UTCDateTime
    contact_ids: list[Annotated[int, Field(gt=0)]] = Field(min_length=1)

    @model_validator(mode="after")
    def validate_date_range(self) -> "EventCreate":
        if self.end_date < self.start_date:
            msg = "end_date must not be before start_date"
            raise ValueError(msg)
        return self


class EventUpdate(EventBase):
    title: Title | None = None
    start_date: UTCDateTime | None = None
    end_date: UTCDateTime | None = None
    reminder_minutes: int | None = Field(default=None, ge=0)
    contact_ids: list[Annotated[int, Field(gt=0)]] | None = Field(default=None, min_length=1)


class EventContactRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    first_name: str
    last_name: str
    email: str | None = None


class EventRead(EventBase):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    start_date: datetime
    end_date: datetime
    created_at: datetime
    updated_at: datetime
    contacts: list[EventContactRead] = Field(default_factory=list)


class EventLinkRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    event_id: int
    contact_id: int
    created_at: datetime
