"""Calendar event lookups and event-contact association management."""
from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from reconnect.core.errors import ResourceNotFoundError
from reconnect.models import CalendarEvent, EventContact
from reconnect.services.contacts import ensure_contacts_exist


async def get_event(session: AsyncSession, event_id: int, owner_id: int) -> CalendarEvent:
    event = await session.get(CalendarEvent, event_id)
    if event is None or event.owner_id != owner_id:
        raise ResourceNotFoundError("Event", event_id)
    return event


async def list_events(session: AsyncSession, owner_id: int) -> list[CalendarEvent]:
    result = await session.execute(
        select(CalendarEvent)
        .where(CalendarEvent.owner_id == owner_id)
        .order_by(CalendarEvent.start_date, CalendarEvent.id)
    )
    return list(result.scalars())


async def get_contact_events(session: AsyncSession, contact_id: int) -> list[CalendarEvent]:
    """Events linked to a contact, earliest first."""

    result = await session.execute(
        select(CalendarEvent)
        .join(EventContact, EventContact.event_id == CalendarEvent.id)
        .where(EventContact.contact_id == contact_id)
        .order_by(CalendarEvent.start_date, CalendarEvent.id)
    )
    return list(result.scalars().unique())


async def replace_event_contacts(
    session: AsyncSession, event_id: int, contact_ids: Sequence[int], owner_id: int
) -> None:
    ids = await ensure_contacts_exist(session, contact_ids, owner_id)
    await session.execute(delete(EventContact).where(EventContact.event_id == event_id))
    for contact_id in ids:
        session.add(EventContact(event_id=event_id, contact_id=contact_id))
    await session.flush()


async def add_contact_to_event(
    session: AsyncSession, event_id: int, contact_id: int
) -> EventContact:
    """Link a contact to an event; an existing link is returned unchanged."""

    result = await session.execute(
        select(EventContact).where(
            EventContact.event_id == event_id, EventContact.contact_id == contact_id
        )
    )
    existing = result.scalars().first()
    if existing is not None:
        return existing
    link = EventContact(event_id=event_id, contact_id=contact_id)
    session.add(link)
    await session.flush()
    return link


async def remove_contact_from_event(
    session: AsyncSession, event_id: int, contact_id: int
) -> bool:
    result = await session.execute(
        delete(EventContact).where(
            EventContact.event_id == event_id, EventContact.contact_id == contact_id
        )
    )
    return bool(result.rowcount)


async def delete_event(session: AsyncSession, event: CalendarEvent) -> None:
    """Delete an event and its contact links; the contacts survive."""

    await session.execute(delete(EventContact).where(EventContact.event_id == event.id))
    await session.delete(event)
    await session.flush()
