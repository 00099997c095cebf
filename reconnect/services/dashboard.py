"""Read-only views over hydrated contacts, tags and events for dashboards and reminders."""
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date, datetime

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from reconnect.models import CalendarEvent, Contact, ContactTag, Tag
from reconnect.models.base import utcnow
from reconnect.services.hydration import (
    ContactAggregate,
    EventAggregate,
    hydrate_contacts,
    hydrate_events,
)


@dataclass(frozen=True)
class TagCount:
    tag: Tag
    count: int


@dataclass(frozen=True)
class ReminderSummary:
    total: int
    overdue: int
    due_today: int
    upcoming: int


@dataclass
class Dashboard:
    total_contacts: int
    due_contacts: list[ContactAggregate] = field(default_factory=list)
    recent_contacts: list[ContactAggregate] = field(default_factory=list)
    popular_tags: list[TagCount] = field(default_factory=list)
    upcoming_events: list[EventAggregate] = field(default_factory=list)

    @property
    def top_tag(self) -> TagCount | None:
        return self.popular_tags[0] if self.popular_tags else None


async def get_due_contacts(session: AsyncSession, owner_id: int) -> list[ContactAggregate]:
    """Every contact with a scheduled reminder, soonest first.

    No date cutoff is applied; callers filter for overdue views.
    """

    result = await session.execute(
        select(Contact)
        .where(Contact.owner_id == owner_id, Contact.next_contact_date.is_not(None))
        .order_by(Contact.next_contact_date, Contact.id)
    )
    return await hydrate_contacts(session, list(result.scalars()))


async def get_recent_contacts(
    session: AsyncSession, owner_id: int, limit: int
) -> list[ContactAggregate]:
    result = await session.execute(
        select(Contact)
        .where(Contact.owner_id == owner_id, Contact.last_contact_date.is_not(None))
        .order_by(Contact.last_contact_date.desc(), Contact.id)
        .limit(limit)
    )
    return await hydrate_contacts(session, list(result.scalars()))


async def get_popular_tags(session: AsyncSession, owner_id: int, limit: int) -> list[TagCount]:
    """Tags ranked by how many contacts carry them; unused tags count zero."""

    contact_count = func.count(ContactTag.id).label("contact_count")
    result = await session.execute(
        select(Tag, contact_count)
        .outerjoin(ContactTag, ContactTag.tag_id == Tag.id)
        .where(Tag.owner_id == owner_id)
        .group_by(Tag.id)
        .order_by(contact_count.desc(), Tag.name)
        .limit(limit)
    )
    return [TagCount(tag=tag, count=count) for tag, count in result.all()]


async def get_upcoming_events(
    session: AsyncSession, owner_id: int, limit: int, *, now: datetime | None = None
) -> list[EventAggregate]:
    result = await session.execute(
        select(CalendarEvent)
        .where(CalendarEvent.owner_id == owner_id, CalendarEvent.start_date >= (now or utcnow()))
        .order_by(CalendarEvent.start_date, CalendarEvent.id)
        .limit(limit)
    )
    return await hydrate_events(session, list(result.scalars()))


def filter_overdue(contacts: Sequence[ContactAggregate], *, today: date) -> list[ContactAggregate]:
    """Keep contacts whose next reminder falls on or before ``today``."""

    return [
        aggregate
        for aggregate in contacts
        if aggregate.contact.next_contact_date is not None
        and aggregate.contact.next_contact_date.date() <= today
    ]


def summarize_reminders(contacts: Sequence[ContactAggregate], *, today: date) -> ReminderSummary:
    """Count reminders by calendar day relative to ``today``."""

    overdue = due_today = upcoming = 0
    for aggregate in contacts:
        scheduled = aggregate.contact.next_contact_date
        if scheduled is None:
            continue
        if scheduled.date() < today:
            overdue += 1
        elif scheduled.date() == today:
            due_today += 1
        else:
            upcoming += 1
    return ReminderSummary(
        total=overdue + due_today + upcoming,
        overdue=overdue,
        due_today=due_today,
        upcoming=upcoming,
    )


async def build_dashboard(
    session: AsyncSession,
    owner_id: int,
    *,
    recent_limit: int,
    tags_limit: int,
    events_limit: int,
    now: datetime | None = None,
) -> Dashboard:
    total = await session.scalar(
        select(func.count()).select_from(Contact).where(Contact.owner_id == owner_id)
    )
    return Dashboard(
        total_contacts=total or 0,
        due_contacts=await get_due_contacts(session, owner_id),
        recent_contacts=await get_recent_contacts(session, owner_id, recent_limit),
        popular_tags=await get_popular_tags(session, owner_id, tags_limit),
        upcoming_events=await get_upcoming_events(session, owner_id, events_limit, now=now),
    )
