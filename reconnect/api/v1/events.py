"""Calendar event API routes."""
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from reconnect.api.deps import get_owner_id
from reconnect.api.v1.common import data_response, serialize_event
from reconnect.core.db import get_session
from reconnect.models import CalendarEvent
from reconnect.schemas import EventCreate, EventLinkRead, EventRead, EventUpdate
from reconnect.services.contacts import get_contact
from reconnect.services.dashboard import get_upcoming_events
from reconnect.services.events import (
    add_contact_to_event,
    delete_event as remove_event,
    get_event,
    list_events as load_events,
    remove_contact_from_event,
    replace_event_contacts,
)
from reconnect.services.hydration import hydrate_events

router = APIRouter(prefix="/events", tags=["events"])


async def _serialize_one(session: AsyncSession, event: CalendarEvent) -> EventRead:
    [aggregate] = await hydrate_events(session, [event])
    return serialize_event(aggregate)


@router.get("")
async def list_events(
    owner_id: int = Depends(get_owner_id),
    session: AsyncSession = Depends(get_session),
) -> dict[str, list[EventRead]]:
    """List the owner's events with their contacts, earliest first."""

    aggregates = await hydrate_events(session, await load_events(session, owner_id))
    return data_response([serialize_event(aggregate) for aggregate in aggregates])


@router.get("/upcoming")
async def list_upcoming_events(
    limit: int = Query(10, ge=1, le=100),
    owner_id: int = Depends(get_owner_id),
    session: AsyncSession = Depends(get_session),
) -> dict[str, list[EventRead]]:
    """List events that have not started yet."""

    aggregates = await get_upcoming_events(session, owner_id, limit)
    return data_response([serialize_event(aggregate) for aggregate in aggregates])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_event(
    payload: EventCreate,
    owner_id: int = Depends(get_owner_id),
    session: AsyncSession = Depends(get_session),
) -> dict[str, EventRead]:
    """Create an event linked to one or more of the owner's contacts."""

    event = CalendarEvent(owner_id=owner_id, **payload.model_dump(exclude={"contact_ids"}))
    session.add(event)
    await session.flush()
    await replace_event_contacts(session, event.id, payload.contact_ids, owner_id)
    await session.commit()
    return data_response(await _serialize_one(session, event))


@router.get("/{event_id}")
async def retrieve_event(
    event_id: int,
    owner_id: int = Depends(get_owner_id),
    session: AsyncSession = Depends(get_session),
) -> dict[str, EventRead]:
    """Retrieve an event with its contacts."""

    event = await get_event(session, event_id, owner_id)
    return data_response(await _serialize_one(session, event))


@router.put("/{event_id}")
async def update_event(
    event_id: int,
    payload: EventUpdate,
    owner_id: int = Depends(get_owner_id),
    session: AsyncSession = Depends(get_session),
) -> dict[str, EventRead]:
    """Update an event; ``contact_ids`` replaces the linked contacts."""

    event = await get_event(session, event_id, owner_id)
    updates = payload.model_dump(exclude_unset=True, exclude={"contact_ids"})
    for field in ("title", "start_date", "end_date"):
        if field in updates and updates[field] is None:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail=f"Field cannot be null: {field}",
            )
    start_date = updates.get("start_date", event.start_date)
    end_date = updates.get("end_date", event.end_date)
    if end_date < start_date:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="end_date must not be before start_date",
        )

    for field, value in updates.items():
        setattr(event, field, value)
    await session.flush()
    if payload.contact_ids is not None:
        await replace_event_contacts(session, event.id, payload.contact_ids, owner_id)

    await session.commit()
    return data_response(await _serialize_one(session, event))


@router.delete("/{event_id}")
async def delete_event(
    event_id: int,
    owner_id: int = Depends(get_owner_id),
    session: AsyncSession = Depends(get_session),
) -> dict[str, dict[str, bool]]:
    """Delete an event; its contacts are kept."""

    event = await get_event(session, event_id, owner_id)
    await remove_event(session, event)
    await session.commit()
    return data_response({"deleted": True})


@router.post("/{event_id}/contacts/{contact_id}", status_code=status.HTTP_201_CREATED)
async def link_contact(
    event_id: int,
    contact_id: int,
    owner_id: int = Depends(get_owner_id),
    session: AsyncSession = Depends(get_session),
) -> dict[str, EventLinkRead]:
    """Add one contact to an event."""

    event = await get_event(session, event_id, owner_id)
    contact = await get_contact(session, contact_id, owner_id)
    link = await add_contact_to_event(session, event.id, contact.id)
    await session.commit()
    return data_response(EventLinkRead.model_validate(link))


@router.delete("/{event_id}/contacts/{contact_id}")
async def unlink_contact(
    event_id: int,
    contact_id: int,
    owner_id: int = Depends(get_owner_id),
    session: AsyncSession = Depends(get_session),
) -> dict[str, dict[str, bool]]:
    """Remove one contact from an event."""

    event = await get_event(session, event_id, owner_id)
    removed = await remove_contact_from_event(session, event.id, contact_id)
    await session.commit()
    return data_response({"deleted": removed})
