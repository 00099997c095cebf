"""Contacts API routes."""
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from reconnect.api.deps import get_owner_id
from reconnect.api.v1.common import (
    data_response,
    serialize_contact,
    serialize_contact_detail,
    serialize_event,
)
from reconnect.core.config import Settings, get_settings
from reconnect.core.db import get_session
from reconnect.models import Contact
from reconnect.schemas import (
    ContactCreate,
    ContactDetailRead,
    ContactLogCreate,
    ContactLogRead,
    ContactRead,
    ContactUpdate,
    EventRead,
    InteractionRecordRead,
)
from reconnect.services.contacts import delete_contact as remove_contact
from reconnect.services.contacts import get_contact, list_contacts as load_contacts
from reconnect.services.events import get_contact_events
from reconnect.services.hydration import (
    hydrate_contacts,
    hydrate_events,
    load_contact_detail,
    load_contact_logs,
)
from reconnect.services.metrics import refresh_contact_metrics
from reconnect.services.scheduling import InteractionEntry, record_interaction
from reconnect.services.tags import replace_contact_tags

router = APIRouter(prefix="/contacts", tags=["contacts"])

NON_NULLABLE_FIELDS = ("first_name", "last_name", "reminder_frequency_months")


@router.get("")
async def list_contacts(
    tag: str | None = None,
    owner_id: int = Depends(get_owner_id),
    session: AsyncSession = Depends(get_session),
) -> dict[str, list[ContactRead]]:
    """List the owner's contacts with their tags."""

    aggregates = await hydrate_contacts(session, await load_contacts(session, owner_id))
    if tag:
        aggregates = [
            aggregate
            for aggregate in aggregates
            if any(item.name == tag for item in aggregate.tags)
        ]
    return data_response([serialize_contact(aggregate) for aggregate in aggregates])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_contact(
    payload: ContactCreate,
    owner_id: int = Depends(get_owner_id),
    session: AsyncSession = Depends(get_session),
) -> dict[str, ContactDetailRead]:
    """Create a contact, creating any tags it references."""

    contact = Contact(owner_id=owner_id, **payload.model_dump(exclude={"tags"}))
    session.add(contact)
    await session.flush()
    if payload.tags:
        await replace_contact_tags(session, contact.id, payload.tags, owner_id)

    await session.commit()
    detail = await load_contact_detail(session, contact)
    return data_response(serialize_contact_detail(detail))


@router.get("/{contact_id}")
async def retrieve_contact(
    contact_id: int,
    owner_id: int = Depends(get_owner_id),
    session: AsyncSession = Depends(get_session),
) -> dict[str, ContactDetailRead]:
    """Retrieve a contact with its tags and interaction history."""

    contact = await get_contact(session, contact_id, owner_id)
    detail = await load_contact_detail(session, contact)
    return data_response(serialize_contact_detail(detail))


@router.put("/{contact_id}")
async def update_contact(
    contact_id: int,
    payload: ContactUpdate,
    owner_id: int = Depends(get_owner_id),
    session: AsyncSession = Depends(get_session),
    settings: Settings = Depends(get_settings),
) -> dict[str, ContactDetailRead]:
    """Update the provided fields; a ``tags`` list replaces the whole tag set."""

    contact = await get_contact(session, contact_id, owner_id)
    updates = payload.model_dump(exclude_unset=True, exclude={"tags"})
    cadence_changed = (
        "reminder_frequency_months" in updates
        and updates["reminder_frequency_months"] != contact.reminder_frequency_months
    )
    nulled = [field for field in NON_NULLABLE_FIELDS if field in updates and updates[field] is None]
    if nulled:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Fields cannot be null: {', '.join(nulled)}",
        )
    for field, value in updates.items():
        setattr(contact, field, value)
    await session.flush()
    if cadence_changed:
        # Frequency and adherence are measured against the cadence.
        await refresh_contact_metrics(
            session, contact, clamp=settings.clamp_relationship_score
        )
    if payload.tags is not None:
        await replace_contact_tags(session, contact.id, payload.tags, owner_id)

    await session.commit()
    detail = await load_contact_detail(session, contact)
    return data_response(serialize_contact_detail(detail))


@router.delete("/{contact_id}")
async def delete_contact(
    contact_id: int,
    owner_id: int = Depends(get_owner_id),
    session: AsyncSession = Depends(get_session),
) -> dict[str, dict[str, bool]]:
    """Delete a contact with its logs and associations."""

    contact = await get_contact(session, contact_id, owner_id)
    await remove_contact(session, contact)
    await session.commit()
    return data_response({"deleted": True})


@router.get("/{contact_id}/logs")
async def list_contact_logs(
    contact_id: int,
    owner_id: int = Depends(get_owner_id),
    session: AsyncSession = Depends(get_session),
) -> dict[str, list[ContactLogRead]]:
    """List a contact's interactions, newest first."""

    contact = await get_contact(session, contact_id, owner_id)
    logs = await load_contact_logs(session, contact.id)
    return data_response([ContactLogRead.model_validate(log) for log in logs])


@router.post("/{contact_id}/logs", status_code=status.HTTP_201_CREATED)
async def create_contact_log(
    contact_id: int,
    payload: ContactLogCreate,
    owner_id: int = Depends(get_owner_id),
    session: AsyncSession = Depends(get_session),
    settings: Settings = Depends(get_settings),
) -> dict[str, InteractionRecordRead]:
    """Log an interaction and return the stored log with the refreshed contact."""

    contact = await get_contact(session, contact_id, owner_id)
    entry = InteractionEntry(
        contact_date=payload.contact_date,
        contact_type=payload.contact_type,
        notes=payload.notes,
        got_response=payload.got_response,
        response_date=payload.response_date,
        reminder_frequency_override=payload.reminder_frequency_months,
        reset_reminder=payload.reset_reminder,
    )
    contact, log = await record_interaction(
        session, contact, entry, clamp_score=settings.clamp_relationship_score
    )
    await session.commit()

    [aggregate] = await hydrate_contacts(session, [contact])
    return data_response(
        InteractionRecordRead(
            log=ContactLogRead.model_validate(log), contact=serialize_contact(aggregate)
        )
    )


@router.get("/{contact_id}/events")
async def list_contact_events(
    contact_id: int,
    owner_id: int = Depends(get_owner_id),
    session: AsyncSession = Depends(get_session),
) -> dict[str, list[EventRead]]:
    """List the events a contact takes part in."""

    contact = await get_contact(session, contact_id, owner_id)
    events = await hydrate_events(session, await get_contact_events(session, contact.id))
    return data_response([serialize_event(aggregate) for aggregate in events])
