"""Batch hydration of contacts and events with their many-to-many collections.

Related rows are fetched in two queries per junction, whatever the number of
primary rows: one for the junction rows of the whole batch and one for the
referenced entities. Nothing is lazy-loaded through ORM relationships.
"""
from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import InstrumentedAttribute

from reconnect.models import CalendarEvent, Contact, ContactLog, ContactTag, EventContact, Tag

R = TypeVar("R")


@dataclass(frozen=True)
class JunctionLink(Generic[R]):
    """Describe how primary rows reach related rows through a junction table."""

    primary_key: InstrumentedAttribute[int]
    related_key: InstrumentedAttribute[int]
    related_model: type[R]
    sort_key: Callable[[R], Any]


TAGS_OF_CONTACT: JunctionLink[Tag] = JunctionLink(
    primary_key=ContactTag.contact_id,
    related_key=ContactTag.tag_id,
    related_model=Tag,
    sort_key=lambda tag: (tag.name.lower(), tag.id),
)

CONTACTS_OF_EVENT: JunctionLink[Contact] = JunctionLink(
    primary_key=EventContact.event_id,
    related_key=EventContact.contact_id,
    related_model=Contact,
    sort_key=lambda contact: (contact.last_name.lower(), contact.first_name.lower(), contact.id),
)


@dataclass
class ContactAggregate:
    contact: Contact
    tags: list[Tag] = field(default_factory=list)


@dataclass
class ContactDetail(ContactAggregate):
    logs: list[ContactLog] = field(default_factory=list)


@dataclass
class EventAggregate:
    event: CalendarEvent
    contacts: list[Contact] = field(default_factory=list)


async def hydrate(
    session: AsyncSession,
    primary_ids: Sequence[int],
    link: JunctionLink[R],
) -> dict[int, list[R]]:
    """Return related entities for every primary id, keyed by that id.

    Every requested id is present in the result; ids without junction rows map
    to an empty list. Duplicated junction rows never produce duplicated
    entities, and each list follows the link's sort key.
    """

    related_by_primary: dict[int, list[R]] = {primary_id: [] for primary_id in primary_ids}
    if not related_by_primary:
        return related_by_primary

    junction_model = link.primary_key.class_
    junction_rows = (
        await session.execute(
            select(junction_model).where(link.primary_key.in_(list(related_by_primary)))
        )
    ).scalars().all()

    related_ids = {getattr(row, link.related_key.key) for row in junction_rows}
    if not related_ids:
        return related_by_primary

    related_model: Any = link.related_model
    related_rows = (
        await session.execute(select(related_model).where(related_model.id.in_(related_ids)))
    ).scalars().all()
    related_index = {row.id: row for row in related_rows}

    seen: dict[int, set[int]] = {primary_id: set() for primary_id in related_by_primary}
    for row in junction_rows:
        primary_id = getattr(row, link.primary_key.key)
        related_id = getattr(row, link.related_key.key)
        related = related_index.get(related_id)
        # The related row may have been deleted between the two queries.
        if related is None or related_id in seen[primary_id]:
            continue
        seen[primary_id].add(related_id)
        related_by_primary[primary_id].append(related)

    for items in related_by_primary.values():
        items.sort(key=link.sort_key)
    return related_by_primary


async def hydrate_contacts(
    session: AsyncSession, contacts: Sequence[Contact]
) -> list[ContactAggregate]:
    """Attach tags to each contact, preserving the input order."""

    tags = await hydrate(session, [contact.id for contact in contacts], TAGS_OF_CONTACT)
    return [ContactAggregate(contact=contact, tags=tags[contact.id]) for contact in contacts]


async def hydrate_events(
    session: AsyncSession, events: Sequence[CalendarEvent]
) -> list[EventAggregate]:
    """Attach linked contacts to each event, preserving the input order."""

    contacts = await hydrate(session, [event.id for event in events], CONTACTS_OF_EVENT)
    return [EventAggregate(event=event, contacts=contacts[event.id]) for event in events]


async def load_contact_logs(session: AsyncSession, contact_id: int) -> list[ContactLog]:
    """Return a contact's logs, newest first."""

    result = await session.execute(
        select(ContactLog)
        .where(ContactLog.contact_id == contact_id)
        .order_by(ContactLog.contact_date.desc(), ContactLog.id.desc())
    )
    return list(result.scalars())


async def load_contact_detail(session: AsyncSession, contact: Contact) -> ContactDetail:
    """Hydrate a single contact with its tags and interaction history."""

    tags = await hydrate(session, [contact.id], TAGS_OF_CONTACT)
    logs = await load_contact_logs(session, contact.id)
    return ContactDetail(contact=contact, tags=tags[contact.id], logs=logs)
