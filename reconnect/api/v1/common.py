"""Common helpers for API responses."""
from __future__ import annotations

from typing import TypeVar

from reconnect.schemas import (
    ContactDetailRead,
    ContactLogRead,
    ContactRead,
    EventContactRead,
    EventRead,
    TagRead,
)
from reconnect.services.hydration import ContactAggregate, ContactDetail, EventAggregate

T = TypeVar("T")


def data_response(payload: T) -> dict[str, T]:
    """Wrap a payload in the standard data envelope."""

    return {"data": payload}


def serialize_contact(aggregate: ContactAggregate) -> ContactRead:
    contact_read = ContactRead.model_validate(aggregate.contact)
    contact_read.tags = [TagRead.model_validate(tag) for tag in aggregate.tags]
    return contact_read


def serialize_contact_detail(detail: ContactDetail) -> ContactDetailRead:
    detail_read = ContactDetailRead.model_validate(detail.contact)
    detail_read.tags = [TagRead.model_validate(tag) for tag in detail.tags]
    detail_read.logs = [ContactLogRead.model_validate(log) for log in detail.logs]
    return detail_read


def serialize_event(aggregate: EventAggregate) -> EventRead:
    event_read = EventRead.model_validate(aggregate.event)
    event_read.contacts = [
        EventContactRead.model_validate(contact) for contact in aggregate.contacts
    ]
    return event_read
