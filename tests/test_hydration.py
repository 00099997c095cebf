from __future__ import annotations

from datetime import datetime, timedelta

import pytest
from sqlalchemy import func, select

from reconnect.models import CalendarEvent, Contact, ContactLog, ContactTag, EventContact, Tag
from reconnect.services.contacts import delete_contact
from reconnect.services.hydration import (
    TAGS_OF_CONTACT,
    hydrate,
    hydrate_contacts,
    hydrate_events,
    load_contact_detail,
)
from reconnect.services.tags import replace_contact_tags

from conftest import OWNER_ID


def select_count(counter) -> int:
    return sum(1 for statement in counter.statements if statement.lstrip().upper().startswith("SELECT"))


async def seed_contacts(session, count: int) -> list[Contact]:
    contacts = [
        Contact(owner_id=OWNER_ID, first_name=f"First{index}", last_name=f"Last{index:02d}")
        for index in range(count)
    ]
    session.add_all(contacts)
    await session.flush()
    for index, contact in enumerate(contacts):
        names = ["friends", "work", "gym"][: index % 3 + 1]
        await replace_contact_tags(session, contact.id, names, OWNER_ID)
    await session.commit()
    return contacts


@pytest.mark.anyio("asyncio")
@pytest.mark.parametrize("count", [1, 3, 25])
async def test_contact_hydration_issues_constant_number_of_queries(
    session, query_counter, count: int
) -> None:
    contacts = await seed_contacts(session, count)
    query_counter.reset()

    aggregates = await hydrate_contacts(session, contacts)

    assert select_count(query_counter) == 2
    assert [aggregate.contact.id for aggregate in aggregates] == [c.id for c in contacts]


@pytest.mark.anyio("asyncio")
async def test_hydrating_nothing_issues_no_queries(session, query_counter) -> None:
    query_counter.reset()

    assert await hydrate_contacts(session, []) == []
    assert await hydrate_events(session, []) == []
    assert query_counter.count == 0


@pytest.mark.anyio("asyncio")
async def test_hydration_is_idempotent_and_sorted(session) -> None:
    contacts = await seed_contacts(session, 3)

    def snapshot(aggregates):
        return [(a.contact.id, [tag.name for tag in a.tags]) for a in aggregates]

    first = snapshot(await hydrate_contacts(session, contacts))
    second = snapshot(await hydrate_contacts(session, contacts))

    assert first == second
    assert first[2][1] == ["friends", "gym", "work"]


@pytest.mark.anyio("asyncio")
async def test_contact_without_tags_gets_empty_collection(session) -> None:
    contact = Contact(owner_id=OWNER_ID, first_name="Solo", last_name="Person")
    session.add(contact)
    await session.commit()

    [aggregate] = await hydrate_contacts(session, [contact])
    related = await hydrate(session, [contact.id, 9999], TAGS_OF_CONTACT)

    assert aggregate.tags == []
    assert related == {contact.id: [], 9999: []}


@pytest.mark.anyio("asyncio")
async def test_duplicate_primary_ids_do_not_duplicate_related_rows(session) -> None:
    [contact] = await seed_contacts(session, 1)

    related = await hydrate(session, [contact.id, contact.id], TAGS_OF_CONTACT)

    assert [tag.name for tag in related[contact.id]] == ["friends"]


@pytest.mark.anyio("asyncio")
async def test_event_hydration_orders_contacts_by_name(session) -> None:
    zoe = Contact(owner_id=OWNER_ID, first_name="Zoe", last_name="Young")
    adam = Contact(owner_id=OWNER_ID, first_name="Adam", last_name="Brown")
    event = CalendarEvent(
        owner_id=OWNER_ID,
        title="Dinner",
        start_date=datetime(2030, 1, 1, 19, 0),
        end_date=datetime(2030, 1, 1, 21, 0),
    )
    session.add_all([zoe, adam, event])
    await session.flush()
    session.add_all(
        [
            EventContact(event_id=event.id, contact_id=zoe.id),
            EventContact(event_id=event.id, contact_id=adam.id),
        ]
    )
    await session.commit()

    [aggregate] = await hydrate_events(session, [event])

    assert [contact.first_name for contact in aggregate.contacts] == ["Adam", "Zoe"]


@pytest.mark.anyio("asyncio")
async def test_contact_detail_lists_logs_newest_first(session) -> None:
    [contact] = await seed_contacts(session, 1)
    start = datetime(2024, 1, 1)
    session.add_all(
        [
            ContactLog(contact_id=contact.id, contact_date=start + timedelta(days=offset), contact_type="call")
            for offset in (5, 20, 10)
        ]
    )
    await session.commit()

    detail = await load_contact_detail(session, contact)

    assert [log.contact_date.day for log in detail.logs] == [21, 11, 6]
    assert [tag.name for tag in detail.tags] == ["friends"]


@pytest.mark.anyio("asyncio")
async def test_deleting_contact_leaves_no_orphans(session) -> None:
    [contact] = await seed_contacts(session, 1)
    await replace_contact_tags(session, contact.id, ["friends", "work", "gym"], OWNER_ID)
    event = CalendarEvent(
        owner_id=OWNER_ID,
        title="Lunch",
        start_date=datetime(2030, 2, 1, 12, 0),
        end_date=datetime(2030, 2, 1, 13, 0),
    )
    session.add(event)
    await session.flush()
    session.add(EventContact(event_id=event.id, contact_id=contact.id))
    session.add_all(
        [
            ContactLog(contact_id=contact.id, contact_date=datetime(2024, 1, day), contact_type="call")
            for day in (1, 2)
        ]
    )
    await session.commit()

    await delete_contact(session, contact)
    await session.commit()

    async def count(model, *criteria) -> int:
        return await session.scalar(select(func.count()).select_from(model).where(*criteria))

    assert await count(ContactLog, ContactLog.contact_id == contact.id) == 0
    assert await count(ContactTag, ContactTag.contact_id == contact.id) == 0
    assert await count(EventContact, EventContact.contact_id == contact.id) == 0
    assert await count(Tag, Tag.owner_id == OWNER_ID) == 3
    assert await count(CalendarEvent, CalendarEvent.id == event.id) == 1
