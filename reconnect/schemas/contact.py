"""Pydantic schemas for contact resources."""
from __future__ import annotations

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from reconnect.models import ContactTrend
from reconnect.schemas.common import TagName, UTCDateTime
from reconnect.schemas.contact_log import ContactLogRead
from reconnect.schemas.tag import TagRead

PhoneNumber = Annotated[
    str, Field(min_length=7, max_length=32, pattern=r"^[+0-9().\- ]+$")
]
Name = Annotated[str, Field(min_length=1, max_length=100)]


class ContactBase(BaseModel):
    email: EmailStr | None = None
    phone: PhoneNumber | None = None
    notes: str | None = None
    last_contact_date: UTCDateTime | None = None
    next_contact_date: UTCDateTime | None = None


class ContactTagsPayload(BaseModel):
    tags: list[TagName] | None = Field(default=None, max_length=20)

    @field_validator("tags")
    @classmethod
    def validate_tags(cls, value: list[str] | None) -> list[str] | None:
        if value is None:
            return None
        unique_tags: list[str] = []
        for tag in value:
            cleaned = tag.strip()
            if not cleaned:
                msg = "Tags must not be empty"
                raise ValueError(msg)
            if cleaned not in unique_tags:
                unique_tags.append(cleaned)
        return unique_tags


class ContactCreate(ContactBase, ContactTagsPayload):
    first_name: Name
    last_name: Name
    reminder_frequency_months: int = Field(default=3, gt=0)


class ContactUpdate(ContactBase, ContactTagsPayload):
    first_name: Name | None = None
    last_name: Name | None = None
    reminder_frequency_months: int | None = Field(default=None, gt=0)


class ContactRead(ContactBase):
    model_config = ConfigDict(from_attributes=True)

    id: int
    first_name: str
    last_name: str
    email: str | None = None
    reminder_frequency_months: int
    relationship_score: int
    contact_frequency_days: int
    contact_trend: ContactTrend
    last_response_date: datetime | None = None
    created_at: datetime
    updated_at: datetime
    tags: list[TagRead] = Field(default_factory=list)


class ContactDetailRead(ContactRead):
    logs: list[ContactLogRead] = Field(default_factory=list)


class InteractionRecordRead(BaseModel):
    log: ContactLogRead
    contact: ContactRead
